"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Configuration management for OASGEN.

This module provides a central location for all configuration settings in OASGEN.
It handles environment variables, YAML configuration files, default values, and
validation of configuration parameters. A generation run reads its settings once,
through DocsConfig.get, and never looks at the configuration again.
"""

import logging
import os
from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

_MISSING = object()


def _split_list(value: str | None) -> list[str] | None:
    """Split a comma separated environment value, None when unset."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig(BaseModel):
    """Base configuration class with common functionality."""

    model_config = ConfigDict(populate_by_name=True)

    # Class variable to store environment variable prefixes
    ENV_PREFIX: ClassVar[str] = "OASGEN_"

    @classmethod
    def get_env_var(cls, key: str, default: Any = None) -> Any:
        """
        Get an environment variable with the class prefix.

        Args:
        ----
            key: Key name without prefix
            default: Default value if environment variable is not found

        Returns:
        -------
            The environment variable value or default

        """
        env_key = f"{cls.ENV_PREFIX}{key.upper()}"
        return os.environ.get(env_key, default)


class LoggingConfig(BaseConfig):
    """Configuration for logging settings."""

    level: str = Field(
        default_factory=lambda: os.environ.get("OASGEN_LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich for logging formatting",
    )
    log_file: str | None = Field(
        default=None,
        description="Path to the log file (None for console-only logging)",
    )
    json_format: bool = Field(
        default=False,
        description="Whether to use JSON format for logs",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, value):
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        value = value.upper()
        if value not in valid_levels:
            logger.warning(f"Invalid log level '{value}', defaulting to INFO")
            return "INFO"
        return value

    @classmethod
    def from_env(cls, **overrides) -> "LoggingConfig":
        """Create a logging configuration from environment variables."""
        config = {
            "level": cls.get_env_var("LOG_LEVEL", "INFO"),
            "use_rich": _as_bool(cls.get_env_var("LOG_USE_RICH", "true")),
            "log_file": cls.get_env_var("LOG_FILE", None),
            "json_format": _as_bool(cls.get_env_var("LOG_JSON", "false")),
        }
        config.update(overrides)
        return cls(**config)

    def get_log_level_int(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.level)

    def configure_logging(self, debug: bool = False) -> None:
        """
        Configure logging based on the settings.

        Args:
        ----
            debug: Whether to force debug mode

        """
        from oasgen.core.logging import configure_logging as configure_contextual_logging

        configure_contextual_logging(
            level=logging.DEBUG if debug else self.get_log_level_int(),
            log_file=self.log_file,
            json_format=self.json_format,
            include_timestamp=True,
            use_rich=self.use_rich,
            debug=debug,
        )


class PathsConfig(BaseConfig):
    """Locations of annotation sources and generated documents."""

    annotations: str | list[str] = Field(
        default="app",
        description="Directory or directories scanned for source annotations",
    )
    docs: str = Field(
        default="storage/api-docs",
        description="Directory the generated documents are written to",
    )
    docs_json: str = Field(
        default="api-docs.json",
        description="File name of the generated JSON document",
    )
    docs_yaml: str = Field(
        default="api-docs.yaml",
        description="File name of the generated YAML copy",
    )
    excludes: str | list[str] = Field(
        default_factory=list,
        description="Paths excluded from annotation and YAML scanning",
    )
    base: str | None = Field(
        default=None,
        description="Base URL (OpenAPI servers) or basePath (Swagger 2.0) of the API",
    )
    yaml_annotations: str | list[str] = Field(
        default_factory=lambda: str(Path.cwd() / "apps"),
        alias="yamlAnnotations",
        description="File or directory roots holding supplementary YAML annotations",
    )

    @field_validator("excludes", mode="before")
    @classmethod
    def validate_excludes(cls, value):
        """Treat an empty YAML key (None) as no excludes."""
        return [] if value is None else value

    @field_validator("annotations", "yaml_annotations")
    @classmethod
    def validate_roots(cls, value):
        """Reject empty root lists and blank entries."""
        roots = [value] if isinstance(value, str) else value
        if not roots or any(not str(root).strip() for root in roots):
            raise ValueError("at least one non-empty path is required")
        return value


class DocsConfig(BaseConfig):
    """Configuration of a documentation generation run."""

    paths: PathsConfig = Field(
        default_factory=PathsConfig,
        description="Source and output locations",
    )
    constants: dict[str, Any] = Field(
        default_factory=dict,
        description="Named constants substituted into annotations",
    )
    generate_yaml_copy: bool = Field(
        default=False,
        description="Whether to write a YAML copy of the JSON document",
    )
    swagger_version: str = Field(
        default="3.0",
        description="Target specification version; 3.0 and above produce OpenAPI",
    )
    security: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Security schemes injected into the generated document",
    )

    @field_validator("swagger_version", mode="before")
    @classmethod
    def validate_swagger_version(cls, value):
        """Accept numbers from YAML (3.0) as version strings."""
        if isinstance(value, (int, float)):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise ValueError("swagger_version must be a non-empty version string")
        return value.strip()

    @field_validator("constants", "security", mode="before")
    @classmethod
    def validate_mapping(cls, value):
        """Treat an empty YAML key (None) as an empty mapping."""
        return {} if value is None else value

    @classmethod
    def from_env(cls, **overrides) -> "DocsConfig":
        """Create a documentation configuration from environment variables."""
        paths = {
            "annotations": _split_list(cls.get_env_var("ANNOTATIONS")),
            "docs": cls.get_env_var("DOCS_DIR"),
            "docs_json": cls.get_env_var("DOCS_JSON"),
            "docs_yaml": cls.get_env_var("DOCS_YAML"),
            "excludes": _split_list(cls.get_env_var("EXCLUDES")),
            "base": cls.get_env_var("BASE_PATH"),
            "yaml_annotations": _split_list(cls.get_env_var("YAML_ANNOTATIONS")),
        }
        config: dict[str, Any] = {
            "paths": PathsConfig(**{key: value for key, value in paths.items() if value is not None}),
            "generate_yaml_copy": _as_bool(cls.get_env_var("GENERATE_YAML_COPY", "false")),
            "swagger_version": cls.get_env_var("SWAGGER_VERSION", "3.0"),
        }

        config.update(overrides)

        return cls(**config)

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides) -> "DocsConfig":
        """
        Create a documentation configuration from a YAML file.

        The file mirrors the model: a ``paths`` mapping plus ``constants``,
        ``generate_yaml_copy``, ``swagger_version`` and ``security``.

        Args:
        ----
            path: Path to the YAML configuration file
            **overrides: Top level values that replace those from the file

        """
        path = Path(path)
        logger.debug(f"Loading configuration from {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")

        data.update(overrides)
        return cls.model_validate(data)

    def get(self, name: str, default: Any = None) -> Any:
        """
        Look up a configuration value by dotted name.

        Args:
        ----
            name: Dotted name such as ``paths.docs_json`` or ``swagger_version``
            default: Returned when the name is unknown or its value is None

        """
        value: Any = self
        for part in name.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, part, _MISSING)
            elif isinstance(value, dict):
                value = value.get(part, _MISSING)
            else:
                value = _MISSING
            if value is _MISSING:
                return default
        return default if value is None else value


class AppConfig(BaseConfig):
    """Main application configuration that aggregates all other configurations."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    docs: DocsConfig = Field(
        default_factory=DocsConfig,
        description="Documentation generation configuration",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag",
    )
    app_name: str = Field(
        default="OASGEN",
        description="Application name",
    )
    app_version: str = Field(
        default="0.0.0",
        description="Application version",
    )

    @classmethod
    def from_env(cls, **overrides) -> "AppConfig":
        """Create an application configuration from environment variables."""
        config = {
            "logging": LoggingConfig.from_env(),
            "docs": DocsConfig.from_env(),
            "debug": _as_bool(cls.get_env_var("DEBUG", "false")),
            "app_name": cls.get_env_var("APP_NAME", "OASGEN"),
            "app_version": cls.get_env_var("APP_VERSION", "0.0.0"),
        }

        for key, value in overrides.items():
            if value is None:
                continue
            if key == "logging" and isinstance(value, dict):
                config[key] = LoggingConfig(**value)
            elif key == "docs" and isinstance(value, dict):
                config[key] = DocsConfig(**value)
            else:
                config[key] = value

        return cls(**config)

    def configure_logging(self) -> None:
        """Configure logging based on the settings."""
        self.logging.configure_logging(debug=self.debug)


# Global app configuration
_app_config = None


def get_app_config() -> AppConfig:
    """
    Get the global application configuration.

    Returns
    -------
        The application configuration instance

    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.from_env()
    return _app_config


def init_app_config(config: AppConfig = None, **kwargs) -> AppConfig:
    """
    Initialize the global application configuration.

    Args:
    ----
        config: An existing AppConfig instance
        **kwargs: Key-value pairs for creating a new AppConfig

    Returns:
    -------
        The application configuration instance

    """
    global _app_config
    _app_config = config if config is not None else AppConfig.from_env(**kwargs)
    return _app_config


def reset_app_config() -> None:
    """Forget the global configuration so the next lookup reads the environment again."""
    global _app_config
    _app_config = None
