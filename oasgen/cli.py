"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from oasgen import __version__
from oasgen.core.config import DocsConfig, get_app_config, init_app_config
from oasgen.exceptions import OasgenError
from oasgen.finder import collect_files
from oasgen.generator import Generator

# Initialize console for rich output
console = Console()

# Initialize the CLI app
app = typer.Typer(help="OASGEN - OpenAPI documentation generator")

logger = logging.getLogger("oasgen")


def configure_app(debug: bool = False):
    """
    Configure the application with the specified settings.

    Args:
    ----
        debug: Whether to enable debug mode

    """
    config = init_app_config(debug=debug, app_version=__version__)
    config.configure_logging()
    return config


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode with verbose logging"),
    version: bool = typer.Option(False, "--version", help="Show the application version and exit"),
):
    """
    OASGEN - builds OpenAPI/Swagger documents from source annotations and YAML files.

    Use --debug to enable verbose logging.
    """
    if version:
        console.print(f"OASGEN version: {__version__}")
        raise typer.Exit()

    configure_app(debug=debug)


@app.command("generate")
def generate(
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="YAML configuration file (defaults to OASGEN_* environment variables)"
    ),
    yaml_copy: bool | None = typer.Option(
        None, "--yaml-copy/--no-yaml-copy", help="Write a YAML copy of the JSON document"
    ),
):
    """
    Generate the API documentation.
    """
    try:
        docs_config = DocsConfig.from_yaml(config_file) if config_file else get_app_config().docs
        if yaml_copy is not None:
            docs_config = docs_config.model_copy(update={"generate_yaml_copy": yaml_copy})

        console.print(f"Generating documentation in {docs_config.paths.docs}")
        generator = Generator.generate_docs(docs_config)

        for artifact in generator.artifacts:
            console.print(f"Written {artifact}", style="green")

    except (OasgenError, OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)


@app.command("collect")
def collect(
    roots: list[Path] = typer.Argument(..., help="Files or directories to search"),
    exclude: list[Path] | None = typer.Option(None, "--exclude", "-e", help="Path to leave out"),
    extension: str = typer.Option(".yaml", "--extension", help="File extension to match"),
):
    """
    List the files the generator would read below the given roots.
    """
    try:
        files = collect_files([str(root) for root in roots], [str(path) for path in exclude or []], extension)
    except (OasgenError, OSError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)

    table = Table(title=f"Collected {extension} files")
    table.add_column("#", justify="right")
    table.add_column("Path")

    for index, path in enumerate(files, start=1):
        table.add_row(str(index), str(path))

    console.print(table)
    console.print(f"Found {len(files)} files")


def main():
    """Main entry point for OASGEN."""
    app()


if __name__ == "__main__":
    main()
