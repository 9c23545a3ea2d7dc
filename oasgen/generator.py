"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Documentation generation pipeline.

A run goes through fixed stages in order; the first failure aborts the run:

1. prepare_directory: recreate the (empty) documentation directory
2. define_constants: register configured constants that are not defined yet
3. scan_files_for_documentation: build the specification from annotations
4. populate_servers: record the base URL (servers or basePath)
5. save_json: write the JSON document, merge YAML annotations into it and
   add the configured security schemes
6. make_yaml_copy: write a YAML copy of the JSON document when enabled

Stage 1 deletes the previous output before anything new is written, so a
failed run can leave an empty documentation directory behind.
"""

import os
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any

from oasgen.constants import define_constants
from oasgen.core.config import DocsConfig, get_app_config
from oasgen.core.logging import correlation_id, get_logger, log_operation
from oasgen.exceptions import DocumentWriteError, StorageNotWritableError
from oasgen.merge import merge_documents
from oasgen.scanner import AnnotationScanner
from oasgen.security import SecurityDefinitions
from oasgen.specification import (
    SpecFlavor,
    Specification,
    load_json_document,
    save_json_document,
)
from oasgen.yaml_loader import aggregate_yaml, dump_yaml

logger = get_logger(__name__)

YAML_INDENT = 2
YAML_INLINE_LEVEL = 20


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class Generator:
    """Generates the API documentation files from one configuration."""

    def __init__(self, config: DocsConfig | None = None):
        config = config if config is not None else get_app_config().docs

        # Configuration is read once; later changes do not affect this run
        self.app_dir = config.get("paths.annotations")
        self.doc_dir = Path(config.get("paths.docs"))
        self.docs_file = self.doc_dir / config.get("paths.docs_json", "api-docs.json")
        self.yaml_docs_file = self.doc_dir / config.get("paths.docs_yaml", "api-docs.yaml")
        self.excluded_dirs = _as_list(config.get("paths.excludes"))
        self.yaml_dirs = _as_list(config.get("paths.yaml_annotations", str(Path.cwd() / "apps")))
        self.base_path = config.get("paths.base")
        self.constants = dict(config.get("constants", {}))
        self.yaml_copy_required = bool(config.get("generate_yaml_copy", False))
        self.flavor = SpecFlavor.from_version(config.get("swagger_version", "3.0"))
        self.security = dict(config.get("security", {}))

        self.specification: Specification | None = None

    @classmethod
    def generate_docs(cls, config: DocsConfig | None = None) -> "Generator":
        """Run every stage with the given (or global) configuration."""
        generator = cls(config)
        generator.run()
        return generator

    @property
    def stages(self) -> list[tuple[str, Callable[[], None]]]:
        return [
            ("prepare_directory", self.prepare_directory),
            ("define_constants", self.define_constants),
            ("scan_files_for_documentation", self.scan_files_for_documentation),
            ("populate_servers", self.populate_servers),
            ("save_json", self.save_json),
            ("make_yaml_copy", self.make_yaml_copy),
        ]

    @property
    def artifacts(self) -> list[Path]:
        """Files a successful run leaves behind."""
        files = [self.docs_file]
        if self.yaml_copy_required:
            files.append(self.yaml_docs_file)
        return files

    def run(self) -> None:
        """
        Run all stages in order.

        Raises:
            Exception: The error of the first failing stage, unchanged, with a
                note naming the stage

        """
        with correlation_id():
            with log_operation(
                logger,
                "documentation generation",
                context={"docs": str(self.doc_dir), "flavor": self.flavor.value},
                exc_info=False,
            ):
                for name, stage in self.stages:
                    self._run_stage(name, stage)

    def _run_stage(self, name: str, stage: Callable[[], None]) -> None:
        try:
            with log_operation(logger, name, context={"stage": name}):
                stage()
        except Exception as e:
            e.add_note(f"Documentation generation failed at stage '{name}'")
            raise

    def prepare_directory(self) -> None:
        """
        Check directory structure and permissions, then recreate it empty.

        Raises:
            StorageNotWritableError: When the directory exists and is not writable

        """
        if self.doc_dir.exists() and not os.access(self.doc_dir, os.W_OK):
            raise StorageNotWritableError(self.doc_dir)

        # delete all existing documentation
        if self.doc_dir.exists():
            shutil.rmtree(self.doc_dir)

        self.doc_dir.mkdir(parents=True)

    def define_constants(self) -> None:
        """Define constants which will be replaced in annotations."""
        defined = define_constants(self.constants)
        logger.debug(f"Defined {defined} of {len(self.constants)} configured constants")

    def scan_files_for_documentation(self) -> None:
        """Scan the annotation directories and build the specification."""
        scanner = AnnotationScanner(self.flavor)
        self.specification = scanner.scan(self.app_dir, self.excluded_dirs or None)

    def populate_servers(self) -> None:
        """Generate the servers section or basePath depending on the flavor."""
        if self.base_path is not None:
            self.specification.populate_servers(self.base_path)

    def save_json(self) -> None:
        """Save the documentation as JSON, merged with the YAML annotations."""
        self.specification.save_as(self.docs_file)

        self.load_yaml(self.docs_file)

        SecurityDefinitions(self.security, self.flavor).generate(self.docs_file)

    def load_yaml(self, filename: str | Path) -> dict[str, Any]:
        """
        Merge the YAML annotations into a JSON document file, YAML winning.

        Returns:
            The merged document as written

        """
        yaml_data = self.get_yaml_data()
        json_data = load_json_document(filename)

        merged = merge_documents(json_data, yaml_data)
        save_json_document(filename, merged)
        return merged

    def get_yaml_data(self) -> dict[str, Any]:
        """
        Aggregate the YAML annotation files below the configured roots.

        Roots that do not exist are skipped with a warning.
        """
        roots = []
        for root in self.yaml_dirs:
            if Path(root).exists():
                roots.append(root)
            else:
                logger.warning(f"YAML annotation path {root} does not exist, skipping")

        if not roots:
            return {}
        return aggregate_yaml(roots, self.excluded_dirs or None)

    def make_yaml_copy(self) -> None:
        """Save the documentation as YAML when a copy is required."""
        if not self.yaml_copy_required:
            return

        documentation = load_json_document(self.docs_file)
        try:
            self.yaml_docs_file.write_text(
                dump_yaml(documentation, indent=YAML_INDENT, inline=YAML_INLINE_LEVEL),
                encoding="utf-8",
            )
        except OSError as e:
            raise DocumentWriteError(self.yaml_docs_file, str(e)) from e
