"""
Integration test fixtures for the OASGEN testing framework.

This module builds a complete project on disk (annotated sources, YAML
annotations, output directory) and the matching configuration.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from oasgen.core.config import DocsConfig, PathsConfig


@pytest.fixture
def docs_project(temp_dir: Path, write_file: Callable[..., Path]) -> dict[str, Path]:
    """
    Create a small project to generate documentation for.

    Returns:
        Dict[str, Path]: Locations of the project parts
    """
    write_file(
        "app/routes.py",
        "def get_a():\n"
        '    """Route a.\n'
        "\n"
        "    ---\n"
        "    info:\n"
        "      title: ${API_TITLE}\n"
        "      version: 1.0.0\n"
        "    paths:\n"
        "      /a:\n"
        "        get: {}\n"
        '    """\n',
    )
    write_file("apps/b.yaml", "paths:\n  /b:\n    get: {}\n")

    return {
        "root": temp_dir,
        "app": temp_dir / "app",
        "apps": temp_dir / "apps",
        "docs": temp_dir / "storage" / "api-docs",
    }


@pytest.fixture
def docs_config(docs_project: dict[str, Path], clean_constants) -> DocsConfig:
    """Configuration pointing at the docs_project fixture."""
    return DocsConfig(
        paths=PathsConfig(
            annotations=str(docs_project["app"]),
            docs=str(docs_project["docs"]),
            yaml_annotations=str(docs_project["apps"]),
        ),
        constants={"API_TITLE": "Demo API"},
        swagger_version="3.0",
    )
