"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Security scheme injection.

Configured security schemes are written into a generated JSON document:
``components.securitySchemes`` for OpenAPI, ``securityDefinitions`` for
Swagger 2.0. Schemes already present in the document are kept unless a
configured scheme has the same name.
"""

import copy
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from oasgen.core.logging import get_logger
from oasgen.specification import SpecFlavor, load_json_document, save_json_document

logger = get_logger(__name__)


class SecurityDefinitions:
    """Adds configured security schemes to a JSON document file."""

    def __init__(self, security: Mapping[str, Mapping[str, Any]] | None, flavor: SpecFlavor):
        self.security = dict(security or {})
        self.flavor = flavor

    def generate(self, filename: str | Path) -> bool:
        """
        Inject the configured schemes into the document at filename, in place.

        Returns:
            True when the file was rewritten, False when nothing is configured

        Raises:
            DocumentReadError: When the file cannot be read or decoded
            DocumentWriteError: When the file cannot be written back

        """
        if not self.security:
            return False

        documentation = load_json_document(filename)
        if self.flavor is SpecFlavor.OPENAPI:
            documentation = self.apply_openapi(documentation)
        else:
            documentation = self.apply_swagger(documentation)

        save_json_document(filename, documentation)
        logger.info(
            f"Added {len(self.security)} security schemes to {filename}",
            context={"schemes": ",".join(self.security)},
        )
        return True

    def apply_swagger(self, documentation: dict[str, Any]) -> dict[str, Any]:
        definitions = dict(documentation.get("securityDefinitions") or {})
        definitions.update(copy.deepcopy(self.security))
        documentation["securityDefinitions"] = definitions
        return documentation

    def apply_openapi(self, documentation: dict[str, Any]) -> dict[str, Any]:
        components = dict(documentation.get("components") or {})
        schemes = dict(components.get("securitySchemes") or {})
        schemes.update(copy.deepcopy(self.security))
        components["securitySchemes"] = schemes
        documentation["components"] = components
        return documentation
