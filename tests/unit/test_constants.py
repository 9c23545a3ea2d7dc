"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for the constant table.
"""

import pytest

from oasgen.constants import ConstantTable, constants, define_constants


@pytest.mark.unit
class TestConstantTable:
    """Tests for ConstantTable."""

    def test_define_and_get(self):
        table = ConstantTable()

        assert table.define("API_HOST", "https://api.example.com") is True
        assert table.get("API_HOST") == "https://api.example.com"
        assert table.is_defined("API_HOST")
        assert "API_HOST" in table
        assert len(table) == 1

    def test_first_definition_wins(self):
        """Defining a name twice keeps the first value."""
        table = ConstantTable()
        table.define("X", 1)

        assert table.define("X", 2) is False
        assert table.get("X") == 1

    def test_get_default(self):
        assert ConstantTable().get("MISSING", "fallback") == "fallback"

    def test_clear(self):
        table = ConstantTable()
        table.define("X", 1)
        table.clear()

        assert len(table) == 0
        assert table.define("X", 2) is True

    def test_as_dict_is_a_copy(self):
        table = ConstantTable()
        table.define("X", 1)
        table.as_dict()["X"] = 5
        assert table.get("X") == 1


@pytest.mark.unit
class TestDefineConstants:
    """Tests for define_constants."""

    def test_defines_only_new_names(self):
        table = ConstantTable()
        table.define("A", "old")

        defined = define_constants({"A": "new", "B": "b"}, table)

        assert defined == 1
        assert table.as_dict() == {"A": "old", "B": "b"}

    def test_none_defines_nothing(self):
        table = ConstantTable()
        assert define_constants(None, table) == 0
        assert len(table) == 0

    def test_defaults_to_global_table(self, clean_constants):
        """Values persist in the process-wide table across calls."""
        define_constants({"HOST": "first"})
        define_constants({"HOST": "second"})

        assert constants.get("HOST") == "first"
