"""
Unit test fixtures for the OASGEN testing framework.

This module provides small on-disk trees used by the collector, loader and
scanner tests.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def yaml_tree(temp_dir: Path, write_file: Callable[..., Path]) -> Path:
    """
    Create a directory tree of YAML annotation files.

    Layout:
        apps/a.yaml
        apps/b.yaml
        apps/users/users.yaml
        apps/legacy/old.yaml
        apps/notes.txt

    Returns:
        Path: The ``apps`` directory
    """
    write_file("apps/a.yaml", "x: 1\ntags:\n  - name: a\n")
    write_file("apps/b.yaml", "x: 2\ntags:\n  - name: b\n")
    write_file("apps/users/users.yaml", "paths:\n  /users:\n    get:\n      summary: List users\n")
    write_file("apps/legacy/old.yaml", "x: 99\n")
    write_file("apps/notes.txt", "not yaml")
    return temp_dir / "apps"


@pytest.fixture
def source_tree(temp_dir: Path, write_file: Callable[..., Path]) -> Path:
    """
    Create a directory of annotated Python sources.

    Returns:
        Path: The ``app`` directory
    """
    write_file(
        "app/__init__.py",
        '"""Demo API.\n\n---\ninfo:\n  title: Demo API\n  version: 1.0.0\n"""\n',
    )
    write_file(
        "app/users.py",
        "def list_users():\n"
        '    """List users.\n'
        "\n"
        "    ---\n"
        "    paths:\n"
        "      /users:\n"
        "        get:\n"
        "          summary: List users\n"
        "    tags:\n"
        "      - name: users\n"
        '    """\n'
        "\n"
        "\n"
        "class UserResource:\n"
        '    """Plain docstring without annotation."""\n'
        "\n"
        "    async def create(self):\n"
        '        """Create a user.\n'
        "\n"
        "        ---\n"
        "        paths:\n"
        "          /users:\n"
        "            post:\n"
        "              summary: Create user\n"
        '        """\n',
    )
    write_file(
        "app/internal/hidden.py",
        'def hidden():\n    """Hidden.\n\n    ---\n    paths:\n      /hidden:\n        get: {}\n    """\n',
    )
    return temp_dir / "app"
