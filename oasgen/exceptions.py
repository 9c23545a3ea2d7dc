"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Exception hierarchy for OASGEN.

Every error raised by the generator derives from OasgenError. Errors that
map onto a builtin category (permissions, I/O, bad values) also derive from
the builtin so callers can catch them either way.
"""

from pathlib import Path


class OasgenError(Exception):
    """Base class for all OASGEN errors."""


class StorageNotWritableError(OasgenError, PermissionError):
    """Raised when the documentation directory exists but cannot be written."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        super().__init__(f"Documentation storage directory is not writable: {self.directory}")


class DocumentWriteError(OasgenError, OSError):
    """Raised when a generated document cannot be written."""

    def __init__(self, path: str | Path, reason: str = ""):
        self.path = Path(path)
        message = f'Failed to save "{self.path}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DocumentReadError(OasgenError, OSError):
    """Raised when a generated document cannot be read back or decoded."""

    def __init__(self, path: str | Path, reason: str = ""):
        self.path = Path(path)
        message = f'Failed to read "{self.path}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class YamlParseError(OasgenError):
    """
    Raised when a YAML annotation file cannot be parsed.

    The underlying parser error is chained as ``__cause__`` by the raiser.
    """

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f'Failed to parse file("{self.path}"): {reason}')


class InvalidInputError(OasgenError, ValueError):
    """Raised when a path or exclude argument has an unsupported shape."""


class AnnotationError(OasgenError):
    """Raised when a source annotation cannot be turned into a document fragment."""

    def __init__(self, path: str | Path, line: int | None, reason: str):
        self.path = Path(path)
        self.line = line
        location = f"{self.path}:{line}" if line is not None else str(self.path)
        super().__init__(f"Invalid annotation in {location}: {reason}")
