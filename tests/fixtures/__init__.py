"""
Test fixtures for the OASGEN testing framework.
"""
