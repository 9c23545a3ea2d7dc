"""
Test configuration and fixtures for the oasgen project.

This file is the root pytest configuration file that sets up pytest
markers and imports fixtures from the fixtures modules to make them
available to all tests.
"""

import pytest

# Import fixtures from the fixtures modules to make them available to all tests
from tests.fixtures.base import (
    base_test_env,
    clean_constants,
    mock_env_vars,
    temp_dir,
    write_file,
)

# Import unit test fixtures
from tests.fixtures.unit import source_tree, yaml_tree

# Import integration test fixtures
from tests.fixtures.integration import docs_config, docs_project


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "cli: mark a test that tests CLI functionality")
