"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Specification documents and their two flavors.

OpenAPI 3.x and Swagger 2.0 documents describe the API root differently:
OpenAPI uses a ``servers`` list, Swagger a single ``basePath`` string. The
flavor is chosen once from the configured version and decides which
Specification class the scanner returns.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

from oasgen.core.logging import get_logger
from oasgen.exceptions import DocumentReadError, DocumentWriteError
from oasgen.utils.version_utils import is_at_least

logger = get_logger(__name__)

OPENAPI_MIN_VERSION = "3.0"


class SpecFlavor(str, Enum):
    OPENAPI = "openapi"
    SWAGGER = "swagger"

    @classmethod
    def from_version(cls, version: str) -> "SpecFlavor":
        """Versions from 3.0 up are OpenAPI, anything older is Swagger 2.0."""
        return cls.OPENAPI if is_at_least(version, OPENAPI_MIN_VERSION) else cls.SWAGGER


class Specification:
    """A scanned specification document."""

    flavor: ClassVar[SpecFlavor]
    version_key: ClassVar[str]
    default_version: ClassVar[str]

    def __init__(self, data: dict[str, Any] | None = None):
        data = dict(data or {})
        # The version marker leads the document
        version = data.pop(self.version_key, self.default_version)
        self.data: dict[str, Any] = {self.version_key: version, **data}

    def populate_servers(self, base: str) -> None:
        """Record the API root URL in the flavor's own field."""
        raise NotImplementedError

    def save_as(self, path: str | Path) -> None:
        """
        Write the document as JSON.

        Raises:
            DocumentWriteError: When the file cannot be written

        """
        save_json_document(path, self.data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(paths={len(self.data.get('paths') or {})})"


class OpenApiSpecification(Specification):
    flavor = SpecFlavor.OPENAPI
    version_key = "openapi"
    default_version = "3.0.0"

    def populate_servers(self, base: str) -> None:
        self.data["servers"] = [{"url": base}]


class SwaggerSpecification(Specification):
    flavor = SpecFlavor.SWAGGER
    version_key = "swagger"
    default_version = "2.0"

    def populate_servers(self, base: str) -> None:
        self.data["basePath"] = base


SPECIFICATION_TYPES: dict[SpecFlavor, type[Specification]] = {
    SpecFlavor.OPENAPI: OpenApiSpecification,
    SpecFlavor.SWAGGER: SwaggerSpecification,
}


def create_specification(flavor: SpecFlavor, data: dict[str, Any] | None = None) -> Specification:
    """Build the Specification class matching a flavor."""
    return SPECIFICATION_TYPES[flavor](data)


def load_json_document(path: str | Path) -> dict[str, Any]:
    """
    Read a JSON document.

    Raises:
        DocumentReadError: When the file cannot be read or is not a JSON object

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DocumentReadError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise DocumentReadError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DocumentReadError(path, "expected a JSON object at the top level")
    return data


def save_json_document(path: str | Path, data: dict[str, Any]) -> None:
    """
    Write a document as JSON, replacing the file.

    Raises:
        DocumentWriteError: When the file cannot be written

    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4, ensure_ascii=False)
    except OSError as e:
        raise DocumentWriteError(path, str(e)) from e
    logger.debug(f"Saved JSON document {path}")
