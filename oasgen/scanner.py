"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Annotation scanner for Python sources.

An annotation is the part of a module, class or function docstring that
follows a line holding only ``---``. It is a YAML fragment of the
specification document:

    @router.get("/users")
    def list_users():
        \"\"\"List users.

        ---
        paths:
          /users:
            get:
              summary: List users
              responses:
                "200":
                  description: OK
        \"\"\"

``${NAME}`` tokens are replaced with values from the constant table before
the fragment is parsed. Fragments are combined recursively in file order.
"""

import ast
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from oasgen.constants import ConstantTable, constants
from oasgen.core.logging import get_logger
from oasgen.exceptions import AnnotationError
from oasgen.finder import PathArgument, collect_files
from oasgen.specification import SpecFlavor, Specification, create_specification

logger = get_logger(__name__)

ANNOTATION_MARKER = "---"
SOURCE_EXTENSION = ".py"

_CONSTANT_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
_DOCUMENTED_NODES = (ast.Module, ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)


class AnnotationScanner:
    """Builds a specification from the annotations of Python source files."""

    def __init__(self, flavor: SpecFlavor = SpecFlavor.OPENAPI, table: ConstantTable | None = None):
        self.flavor = flavor
        self.table = constants if table is None else table

    def scan(self, directories: PathArgument, exclude: PathArgument | None = None) -> Specification:
        """
        Scan source files and build a specification.

        Args:
            directories: Source files or directories
            exclude: Paths left out of the scan

        Returns:
            Specification: Handle of the configured flavor

        Raises:
            AnnotationError: When a source file or annotation cannot be parsed

        """
        data: dict[str, Any] = {}
        files = collect_files(directories, exclude, extension=SOURCE_EXTENSION)
        fragments = 0

        for path in files:
            for fragment in self.scan_file(path):
                combine_fragments(data, fragment)
                fragments += 1

        logger.info(
            f"Scanned {len(files)} source files, found {fragments} annotations",
            context={"flavor": self.flavor.value},
        )
        return create_specification(self.flavor, data)

    def scan_file(self, path: Path) -> Iterator[dict[str, Any]]:
        """Yield the annotation fragments of one source file in source order."""
        source = Path(path).read_text(encoding="utf-8")
        try:
            tree = ast.parse(source, filename=str(path))
        except SyntaxError as e:
            raise AnnotationError(path, e.lineno, f"syntax error: {e.msg}") from e

        for node in _iter_documented(tree):
            docstring = ast.get_docstring(node)
            if not docstring:
                continue
            annotation = extract_annotation(docstring)
            if annotation is None:
                continue
            line = node.body[0].lineno
            yield self._parse_annotation(path, line, annotation)

    def _parse_annotation(self, path: Path, line: int, annotation: str) -> dict[str, Any]:
        text = self._substitute_constants(path, line, annotation)
        try:
            fragment = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise AnnotationError(path, line, f"invalid YAML: {e}") from e

        if fragment is None:
            return {}
        if not isinstance(fragment, dict):
            raise AnnotationError(path, line, "an annotation must be a mapping")
        return fragment

    def _substitute_constants(self, path: Path, line: int, text: str) -> str:
        def replace(match: re.Match) -> str:
            name = match.group(1)
            if not self.table.is_defined(name):
                raise AnnotationError(path, line, f"undefined constant {name}")
            return str(self.table.get(name))

        return _CONSTANT_RE.sub(replace, text)


def scan(
    directories: PathArgument,
    exclude: PathArgument | None = None,
    flavor: SpecFlavor = SpecFlavor.OPENAPI,
) -> Specification:
    """Scan with the process-wide constant table."""
    return AnnotationScanner(flavor).scan(directories, exclude)


def extract_annotation(docstring: str) -> str | None:
    """Return the text after the ``---`` line of a docstring, or None."""
    lines = docstring.splitlines()
    for index, line in enumerate(lines):
        if line.strip() == ANNOTATION_MARKER:
            return "\n".join(lines[index + 1 :])
    return None


def combine_fragments(target: dict[str, Any], fragment: dict[str, Any]) -> dict[str, Any]:
    """
    Combine an annotation fragment into the document being built, in place.

    Mappings are combined recursively, lists are concatenated and other
    values are replaced.
    """
    for key, value in fragment.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            combine_fragments(existing, value)
        elif isinstance(existing, list) and isinstance(value, list):
            existing.extend(value)
        else:
            target[key] = value
    return target


def _iter_documented(node: ast.AST) -> Iterator[ast.AST]:
    if isinstance(node, _DOCUMENTED_NODES):
        yield node
    for child in ast.iter_child_nodes(node):
        yield from _iter_documented(child)
