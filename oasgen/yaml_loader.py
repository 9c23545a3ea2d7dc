"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
YAML annotation loading and YAML output.

aggregate_yaml folds every YAML annotation file below a set of roots into a
single document; later files (in path order) win according to
merge_documents. dump_yaml renders a document the way the generated YAML
copy is written: block style with a fixed indent, switching to inline style
for collections nested deeper than a given level.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from oasgen.core.logging import get_logger
from oasgen.exceptions import YamlParseError
from oasgen.finder import PathArgument, collect_files
from oasgen.merge import merge_documents

logger = get_logger(__name__)

YAML_EXTENSION = ".yaml"


def load_yaml_file(path: str | Path) -> dict[str, Any] | None:
    """
    Parse one YAML annotation file.

    Returns:
        The parsed mapping, or None for an empty file

    Raises:
        YamlParseError: When the file cannot be read or parsed, or does not
            hold a mapping at the top level

    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise YamlParseError(path, str(e)) from e

    if content is not None and not isinstance(content, Mapping):
        raise YamlParseError(path, f"expected a mapping at the top level, got {type(content).__name__}")

    return content


def aggregate_yaml(roots: PathArgument, excludes: PathArgument | None = None) -> dict[str, Any]:
    """
    Merge every YAML annotation file below roots into one document.

    Args:
        roots: File or directory roots
        excludes: Paths left out of the search

    Returns:
        Dict[str, Any]: The folded document, empty when no file was found

    """
    data: dict[str, Any] = {}
    for path in collect_files(roots, excludes, extension=YAML_EXTENSION):
        logger.debug(f"Merging YAML annotations from {path}")
        data = merge_documents(data, load_yaml_file(path))
    return data


class _FlowList(list):
    pass


class _FlowDict(dict):
    pass


class _DocumentDumper(yaml.SafeDumper):
    """Safe dumper that never writes anchors and knows the inline markers."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_flow_list(dumper: yaml.SafeDumper, data: list) -> yaml.Node:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)


def _represent_flow_dict(dumper: yaml.SafeDumper, data: dict) -> yaml.Node:
    return dumper.represent_mapping("tag:yaml.org,2002:map", data, flow_style=True)


_DocumentDumper.add_representer(_FlowList, _represent_flow_list)
_DocumentDumper.add_representer(_FlowDict, _represent_flow_dict)


def _mark_inline(value: Any, depth: int, inline: int) -> Any:
    if isinstance(value, Mapping):
        items = {key: _mark_inline(item, depth + 1, inline) for key, item in value.items()}
        return _FlowDict(items) if depth >= inline else items
    if isinstance(value, (list, tuple)):
        items = [_mark_inline(item, depth + 1, inline) for item in value]
        return _FlowList(items) if depth >= inline else items
    return value


def dump_yaml(data: Any, indent: int = 2, inline: int = 20) -> str:
    """
    Render data as YAML.

    Args:
        data: JSON-like document
        indent: Spaces per nesting level
        inline: Nesting level from which collections are written inline

    Returns:
        str: The YAML text

    """
    return yaml.dump(
        _mark_inline(data, 0, inline),
        Dumper=_DocumentDumper,
        indent=indent,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
