"""!
@brief Root-directory resolution strategies.
@details The application root is the directory holding the ``VERSION`` marker
and the manifest. Resolution only tests for file existence; it never reads
content, so a provider can be built before the marker file exists.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterator, Mapping

from . import constants

RootResolver = Callable[[], Path]


def iter_ancestors(start: Path) -> Iterator[Path]:
    """!
    @brief Yield ``start`` followed by each of its parents up to the filesystem root.
    """

    current = Path(start).absolute()
    yield current
    yield from current.parents


def find_marker_root(start: Path | None = None, marker: str = constants.PATH_VERSION) -> Path | None:
    """!
    @brief Locate the nearest directory at or above ``start`` containing ``marker``.
    @param start Directory to start from; defaults to the working directory.
    @returns The matching directory, or ``None`` when no ancestor qualifies.
    """

    origin = Path(start) if start is not None else Path.cwd()
    for candidate in iter_ancestors(origin):
        if (candidate / marker).is_file():
            return candidate
    return None


def ancestor_of(path: Path, levels: int) -> Path:
    """!
    @brief Return the directory ``levels`` parents above the file at ``path``.
    @details ``ancestor_of(root / "vendor/composer/ClassLoader.php", 3)`` yields
    ``root``; useful when the root is known relative to an installed file.
    @throws ValueError If ``levels`` is below one or exceeds the path depth.
    """

    if levels < 1:
        raise ValueError("levels must be at least 1")
    parents = Path(path).absolute().parents
    if levels > len(parents):
        raise ValueError(f"{path} has fewer than {levels} parent directories")
    return parents[levels - 1]


def resolve_root_dir(
    explicit: str | os.PathLike[str] | None = None,
    *,
    start: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """!
    @brief Pick the application root directory.
    @details Order: ``explicit`` argument, the ``VERSION_INFO_ROOT`` environment
    variable, the nearest ancestor of ``start`` (default: working directory)
    holding ``VERSION``, and finally ``start`` itself.
    @returns Absolute root directory path.
    """

    if explicit is not None:
        return Path(explicit).expanduser().absolute()

    env = os.environ if environ is None else environ
    configured = env.get(constants.ROOT_ENV_VAR)
    if configured:
        return Path(configured).expanduser().absolute()

    origin = Path(start) if start is not None else Path.cwd()
    found = find_marker_root(origin)
    if found is not None:
        return found
    return origin.absolute()
