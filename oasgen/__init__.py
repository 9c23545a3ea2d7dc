"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
OASGEN - OpenAPI/Swagger documentation generator
Scans source annotations and YAML files to build OpenAPI documents
"""

__version__ = "0.1.0"
