"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for security scheme injection.
"""

import json

import pytest

from oasgen.exceptions import DocumentReadError
from oasgen.security import SecurityDefinitions
from oasgen.specification import SpecFlavor

BEARER = {"bearerAuth": {"type": "http", "scheme": "bearer"}}


@pytest.fixture
def document(write_file):
    def _document(data):
        return write_file("storage/api-docs.json", json.dumps(data))

    return _document


@pytest.mark.unit
class TestSecurityDefinitions:
    """Tests for SecurityDefinitions."""

    def test_nothing_configured(self, document):
        path = document({"openapi": "3.0.0"})
        before = path.read_text(encoding="utf-8")

        assert SecurityDefinitions({}, SpecFlavor.OPENAPI).generate(path) is False
        assert path.read_text(encoding="utf-8") == before

    def test_openapi_components(self, document):
        path = document({"openapi": "3.0.0", "paths": {}})

        assert SecurityDefinitions(BEARER, SpecFlavor.OPENAPI).generate(path) is True

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["components"]["securitySchemes"] == BEARER
        assert data["paths"] == {}

    def test_openapi_keeps_existing_schemes(self, document):
        path = document(
            {
                "openapi": "3.0.0",
                "components": {
                    "schemas": {"User": {"type": "object"}},
                    "securitySchemes": {"apiKey": {"type": "apiKey", "in": "header", "name": "X-Key"}},
                },
            }
        )

        SecurityDefinitions(BEARER, SpecFlavor.OPENAPI).generate(path)

        components = json.loads(path.read_text(encoding="utf-8"))["components"]
        assert set(components["securitySchemes"]) == {"apiKey", "bearerAuth"}
        assert components["schemas"] == {"User": {"type": "object"}}

    def test_swagger_definitions(self, document):
        path = document({"swagger": "2.0", "securityDefinitions": {"basic": {"type": "basic"}}})
        api_key = {"api_key": {"type": "apiKey", "in": "header", "name": "X-Key"}}

        SecurityDefinitions(api_key, SpecFlavor.SWAGGER).generate(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data["securityDefinitions"]) == {"basic", "api_key"}
        assert "components" not in data

    def test_unreadable_document(self, temp_dir):
        with pytest.raises(DocumentReadError):
            SecurityDefinitions(BEARER, SpecFlavor.OPENAPI).generate(temp_dir / "missing.json")
