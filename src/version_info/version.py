"""!
@brief The ``version-info`` tool's own release number.
@details ``VERSION`` next to this module is the single source: setuptools
reads it for the distribution metadata and ``--version`` reads it at runtime.
The build tag tells an installed distribution apart from a plain source tree
on ``sys.path``.
"""
from __future__ import annotations

from importlib import metadata, resources
from typing import Dict

__all__ = ["DISTRIBUTION", "__version__", "__build__", "build_info"]

DISTRIBUTION = "version-info"


def _packaged_version() -> str:
    return resources.files("version_info").joinpath("VERSION").read_text(encoding="utf-8").strip()


def _build_tag(current: str) -> str:
    """!
    @brief ``installed`` when distribution metadata agrees with ``VERSION``, else ``source``.
    """

    try:
        installed = metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "source"
    return "installed" if installed == current else "source"


__version__ = _packaged_version()
__build__ = _build_tag(__version__)


def build_info() -> Dict[str, str]:
    return {"version": __version__, "build": __build__}
