"""!
@brief version-info package root.
@details Reports version metadata (version, date, license, authors, manifest
name/description, runtime and package-manager versions) for an application
directory. :class:`VersionInfoProvider` is the entry point for library use.
"""

from .provider import VersionInfoProvider
from .record import VersionRecord

__all__ = [
    "VersionInfoProvider",
    "VersionRecord",
    "config",
    "constants",
    "errors",
    "exec_utils",
    "logging_ext",
    "main",
    "manifest",
    "package_manager",
    "provider",
    "record",
    "root_dir",
    "version",
]
