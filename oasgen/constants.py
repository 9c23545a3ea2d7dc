"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Process-wide constant table.

Annotations can reference named constants as ``${NAME}``. Constants are
defined once per process: defining a name a second time keeps the first
value. The table is not reset between generation runs; call clear() to
tear it down explicitly.
"""

from collections.abc import Mapping
from typing import Any

from oasgen.core.logging import get_logger

logger = get_logger(__name__)


class ConstantTable:
    """Write-once-per-name symbol table."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def define(self, name: str, value: Any) -> bool:
        """
        Define a constant unless it already exists.

        Returns:
            True when the constant was defined, False when it already existed

        """
        if name in self._values:
            logger.debug(f"Constant {name} already defined, keeping existing value")
            return False
        self._values[name] = value
        return True

    def is_defined(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)


# Global constant table shared by every generation run in the process
constants = ConstantTable()


def define_constants(values: Mapping[str, Any] | None, table: ConstantTable | None = None) -> int:
    """
    Register every constant of a mapping that is not defined yet.

    Args:
        values: Constant names mapped to their values
        table: Table to define them in, the process-wide table by default

    Returns:
        Number of constants newly defined

    """
    table = constants if table is None else table
    defined = 0
    for name, value in (values or {}).items():
        if table.define(name, value):
            defined += 1
    return defined
