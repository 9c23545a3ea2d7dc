"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASGEN, licensed under the MIT License.
See LICENSE file for details.
"""

"""
File collection for annotation sources.

Roots may be single files (always included) or directories (searched
recursively for a file extension, following symbolic links). Excludes are
resolved to absolute paths: absolute excludes are used as given, relative
ones are resolved against the working directory and against every directory
root. A file is dropped when it is an excluded path or lies beneath one.
"""

import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from oasgen.core.logging import get_logger
from oasgen.exceptions import InvalidInputError

logger = get_logger(__name__)

PathLike = str | os.PathLike
PathArgument = PathLike | Sequence[PathLike]


def collect_files(
    roots: PathArgument,
    excludes: PathArgument | None = None,
    extension: str = ".yaml",
) -> list[Path]:
    """
    Collect the files below one or more roots.

    Args:
        roots: A path or a list of paths; each is a file or a directory
        excludes: A path or a list of paths to leave out, or None
        extension: File suffix matched inside directory roots

    Returns:
        List[Path]: De-duplicated paths sorted by their full path

    Raises:
        InvalidInputError: When roots or excludes has an unsupported shape
        FileNotFoundError: When a directory root does not exist

    """
    root_paths = _as_path_list(roots, "roots")
    exclude_paths = [] if excludes is None else _as_path_list(excludes, "excludes")

    directories = [root for root in root_paths if not root.is_file()]
    resolved_excludes = _resolve_excludes(exclude_paths, directories)

    found: set[Path] = set()
    for root in root_paths:
        if root.is_file():
            found.add(root)
        else:
            found.update(_walk(root, extension))

    files = [path for path in found if not _is_excluded(path, resolved_excludes)]
    files.sort(key=lambda path: path.as_posix())

    logger.debug(
        f"Collected {len(files)} '{extension}' files",
        context={"roots": len(root_paths), "excluded": len(found) - len(files)},
    )
    return files


def _as_path_list(value: object, label: str) -> list[Path]:
    if isinstance(value, (str, os.PathLike)):
        return [Path(value)]
    if isinstance(value, (list, tuple)):
        paths = []
        for item in value:
            if not isinstance(item, (str, os.PathLike)):
                raise InvalidInputError(f"Unexpected {label} value: {type(item).__name__}")
            paths.append(Path(item))
        return paths
    raise InvalidInputError(f"Unexpected {label} value: {type(value).__name__}")


def _walk(directory: Path, extension: str) -> Iterator[Path]:
    if not directory.is_dir():
        raise FileNotFoundError(f'The "{directory}" directory does not exist.')

    top = os.fspath(directory)
    # Real paths of each directory and its ancestors. A link back into its own
    # chain is a cycle; other aliases of one directory are all walked.
    chains: dict[str, frozenset[str]] = {top: frozenset([os.path.realpath(top)])}
    for dirpath, dirnames, filenames in os.walk(top, followlinks=True):
        chain = chains.pop(dirpath)
        kept = []
        for name in dirnames:
            child = os.path.join(dirpath, name)
            real_child = os.path.realpath(child)
            if real_child in chain:
                continue
            chains[child] = chain | {real_child}
            kept.append(name)
        dirnames[:] = kept

        for filename in filenames:
            if not filename.endswith(extension):
                continue
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def _resolve_excludes(excludes: list[Path], directories: list[Path]) -> list[Path]:
    resolved: set[Path] = set()
    for exclude in excludes:
        if exclude.is_absolute():
            resolved.add(Path(os.path.abspath(exclude)))
            continue
        resolved.add(Path(os.path.abspath(exclude)))
        for directory in directories:
            resolved.add(Path(os.path.abspath(directory / exclude)))
    return sorted(resolved)


def _is_excluded(path: Path, excludes: list[Path]) -> bool:
    absolute = Path(os.path.abspath(path))
    return any(absolute == exclude or exclude in absolute.parents for exclude in excludes)
