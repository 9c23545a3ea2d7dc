"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for YAML annotation loading and YAML output.
"""

import yaml
import pytest

from oasgen.exceptions import YamlParseError
from oasgen.yaml_loader import aggregate_yaml, dump_yaml, load_yaml_file


@pytest.mark.unit
class TestLoadYamlFile:
    """Tests for load_yaml_file."""

    def test_loads_mapping(self, write_file):
        path = write_file("a.yaml", "info:\n  title: API\n")
        assert load_yaml_file(path) == {"info": {"title": "API"}}

    def test_empty_file_gives_none(self, write_file):
        path = write_file("empty.yaml", "")
        assert load_yaml_file(path) is None

    def test_invalid_yaml_raises_parse_error(self, write_file):
        """The error names the file and chains the parser error."""
        path = write_file("broken.yaml", "paths: [unclosed\n")

        with pytest.raises(YamlParseError) as exc_info:
            load_yaml_file(path)

        assert exc_info.value.path == path
        assert str(path) in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, yaml.YAMLError)

    def test_non_mapping_document_is_rejected(self, write_file):
        path = write_file("list.yaml", "- a\n- b\n")
        with pytest.raises(YamlParseError, match="expected a mapping"):
            load_yaml_file(path)


@pytest.mark.unit
class TestAggregateYaml:
    """Tests for aggregate_yaml."""

    def test_later_files_win_for_scalars(self, temp_dir, write_file):
        """b.yaml is read after a.yaml, so its scalar wins."""
        write_file("apps/a.yaml", "x: 1\n")
        write_file("apps/b.yaml", "x: 2\n")

        assert aggregate_yaml(temp_dir / "apps") == {"x": 2}

    def test_folds_whole_tree(self, yaml_tree):
        """Lists are concatenated in file order, other keys are taken over."""
        result = aggregate_yaml(yaml_tree)

        assert result["x"] == 99  # legacy/old.yaml sorts after b.yaml
        assert result["tags"] == [{"name": "a"}, {"name": "b"}]
        assert result["paths"] == {"/users": {"get": {"summary": "List users"}}}

    def test_excludes_are_applied(self, yaml_tree):
        result = aggregate_yaml(yaml_tree, "legacy")
        assert result["x"] == 2

    def test_empty_files_contribute_nothing(self, temp_dir, write_file):
        write_file("apps/a.yaml", "x: 1\n")
        write_file("apps/b.yaml", "")

        assert aggregate_yaml(temp_dir / "apps") == {"x": 1}

    def test_no_files_gives_empty_document(self, temp_dir):
        (temp_dir / "apps").mkdir()
        assert aggregate_yaml(temp_dir / "apps") == {}

    def test_parse_error_aborts_aggregation(self, temp_dir, write_file):
        """One broken file fails the whole aggregation."""
        write_file("apps/a.yaml", "x: 1\n")
        broken = write_file("apps/b.yaml", "x: [\n")

        with pytest.raises(YamlParseError) as exc_info:
            aggregate_yaml(temp_dir / "apps")

        assert exc_info.value.path == broken


@pytest.mark.unit
class TestDumpYaml:
    """Tests for dump_yaml."""

    def test_block_style_with_two_space_indent(self):
        text = dump_yaml({"paths": {"/a": {"get": {"tags": ["a", "b"]}}}})

        assert text == (
            "paths:\n"
            "  /a:\n"
            "    get:\n"
            "      tags:\n"
            "      - a\n"
            "      - b\n"
        )

    def test_key_order_is_preserved(self):
        text = dump_yaml({"openapi": "3.0.0", "info": {"title": "API"}, "paths": {}})
        assert text.splitlines()[0] == "openapi: 3.0.0"
        assert text.index("info:") < text.index("paths:")

    def test_collections_at_inline_level_use_flow_style(self):
        """From the inline level on, collections are written inline."""
        text = dump_yaml({"a": {"b": {"c": [1, 2]}}}, inline=2)

        assert "b: {c: [1, 2]}" in text

    def test_output_round_trips(self):
        data = {"openapi": "3.0.0", "paths": {"/a": {"get": {"responses": {"200": {"description": "OK"}}}}}}
        assert yaml.safe_load(dump_yaml(data)) == data

    def test_long_strings_are_not_wrapped(self):
        description = "word " * 40
        text = dump_yaml({"description": description.strip()})
        assert len(text.splitlines()) == 1
