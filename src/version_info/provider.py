"""!
@brief Version metadata provider for a host application.
@details :class:`VersionInfoProvider` resolves the application root once, then
answers each accessor with an independent read: the ``VERSION`` marker file
for the version and date, ``composer.json`` for name and description,
compiled-in constants for license and authors, the interpreter for the
runtime version, and the package manager for tooling versions.

Marker and manifest problems raise :class:`~version_info.errors.VersionInfoError`
subclasses. Package-manager problems degrade to placeholder strings.
"""
from __future__ import annotations

import datetime as _dt
import functools
import os
import platform
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from . import constants, logging_ext, manifest
from . import package_manager as pm
from .errors import EmptyMarkerFileError, MarkerFileNotFoundError
from .exec_utils import CommandRunner, run_command
from .record import VersionRecord
from .root_dir import RootResolver, resolve_root_dir

__all__ = ["VersionInfoProvider", "format_date"]


def format_date(timestamp: float) -> str:
    """!
    @brief Format a POSIX timestamp as ``Friday, December 30, 2022 - 14:05:09``.
    @details Local time, English names regardless of the process locale.
    """

    moment = _dt.datetime.fromtimestamp(timestamp)
    return constants.DATE_TEMPLATE.format(
        weekday=constants.WEEKDAY_NAMES[moment.weekday()],
        month=constants.MONTH_NAMES[moment.month - 1],
        day=moment.day,
        year=moment.year,
        hour=moment.hour,
        minute=moment.minute,
        second=moment.second,
    )


class VersionInfoProvider:
    """!
    @brief Report version metadata for the application rooted at ``root_dir``.
    @param root_dir Explicit root; when omitted ``resolver`` picks one.
    @param resolver Zero-argument callable returning the root directory.
    @param package_manager Package manager queried for tooling versions.
    @param runner Command capability, ``runner(args) -> CommandResult``.
    @param dependency Package whose version ``get_all`` reports.
    @param timeout Per-command timeout used by the default runner.
    """

    def __init__(
        self,
        root_dir: str | os.PathLike[str] | None = None,
        *,
        resolver: RootResolver | None = None,
        package_manager: pm.PackageManager | str = constants.DEFAULT_PACKAGE_MANAGER,
        runner: CommandRunner | None = None,
        dependency: str = constants.DEFAULT_DEPENDENCY,
        timeout: float | None = constants.DEFAULT_TIMEOUT,
    ) -> None:
        if root_dir is not None:
            self._root_dir = resolve_root_dir(root_dir)
        else:
            self._root_dir = Path(resolver() if resolver is not None else resolve_root_dir()).absolute()

        if isinstance(package_manager, str):
            package_manager = pm.get_package_manager(package_manager)
        self._package_manager = package_manager
        self._runner: CommandRunner = runner or functools.partial(
            run_command, event="package_manager", timeout=timeout
        )
        self._dependency = dependency

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    @property
    def package_manager(self) -> pm.PackageManager:
        return self._package_manager

    @property
    def dependency(self) -> str:
        return self._dependency

    @property
    def version_file(self) -> Path:
        """!
        @brief Location of the ``VERSION`` marker file.
        """

        return self._root_dir / constants.PATH_VERSION

    @property
    def manifest_file(self) -> Path:
        """!
        @brief Location of the ``composer.json`` manifest.
        """

        return self._root_dir / constants.PATH_MANIFEST

    def get_version(self) -> str:
        """!
        @brief Return the marker file content without surrounding whitespace.
        @throws MarkerFileNotFoundError If the marker file is missing or unreadable.
        @throws EmptyMarkerFileError If the marker file is blank.
        """

        path = self.version_file
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise MarkerFileNotFoundError(path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise MarkerFileNotFoundError(path, str(exc)) from exc

        value = text.strip()
        if not value:
            raise EmptyMarkerFileError(path)

        logging_ext.get_machine_logger().debug(
            "marker_read", extra={"event": "marker_read", "path": str(path), "version": value}
        )
        return value

    def get_date(self) -> str:
        """!
        @brief Return the marker file's modification time in the fixed date format.
        @throws MarkerFileNotFoundError If the marker file cannot be stat'ed.
        """

        path = self.version_file
        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError as exc:
            raise MarkerFileNotFoundError(path) from exc
        except OSError as exc:
            raise MarkerFileNotFoundError(path, str(exc)) from exc
        return format_date(mtime)

    def get_manifest_key(self, keys: str | Sequence[str]) -> str:
        """!
        @brief Return the string at ``keys`` (a key or key path) in the manifest.
        """

        return manifest.get_key_string(self.manifest_file, keys)

    def get_name(self) -> str:
        return self.get_manifest_key(constants.INDEX_NAME)

    def get_description(self) -> str:
        return self.get_manifest_key(constants.INDEX_DESCRIPTION)

    def get_license(self) -> str:
        return constants.VALUE_LICENSE

    def get_authors(self) -> List[str]:
        return list(constants.VALUE_AUTHORS)

    def get_runtime_version(self) -> str:
        """!
        @brief Version of the Python interpreter running this process.
        """

        return platform.python_version()

    def get_package_manager_version(self) -> str:
        """!
        @brief Package manager version, or a placeholder when it cannot be determined.
        """

        return pm.query_tool_version(self._package_manager, self._runner)

    def get_dependency_version(self, package: str) -> str:
        """!
        @brief Installed version of ``package``, or a placeholder when unavailable.
        """

        return pm.query_package_version(self._package_manager, package, self._runner)

    def get_all(self, profile: str = constants.DEFAULT_PROFILE) -> VersionRecord:
        """!
        @brief Compose every accessor of ``profile`` into one record.
        @details Accessors run in record-key order; the first hard failure
        propagates and no partial record is returned.
        @param profile ``full`` (all fields) or ``minimal`` (version, date,
        license, authors).
        @throws ValueError If ``profile`` is unknown.
        """

        try:
            keys = constants.PROFILES[profile]
        except KeyError:
            known = ", ".join(sorted(constants.PROFILES))
            raise ValueError(f"Unknown profile {profile!r}; expected one of: {known}") from None

        accessors: Dict[str, Callable[[], object]] = {
            constants.INDEX_NAME: self.get_name,
            constants.INDEX_DESCRIPTION: self.get_description,
            constants.INDEX_VERSION: self.get_version,
            constants.INDEX_DATE: self.get_date,
            constants.INDEX_LICENSE: self.get_license,
            constants.INDEX_AUTHORS: self.get_authors,
            constants.INDEX_RUNTIME: self.get_runtime_version,
            constants.INDEX_PACKAGE_MANAGER: self.get_package_manager_version,
            constants.INDEX_DEPENDENCY: lambda: self.get_dependency_version(self._dependency),
        }
        values = {key: accessors[key]() for key in constants.RECORD_KEYS if key in keys}

        return VersionRecord(
            version=values[constants.INDEX_VERSION],
            date=values[constants.INDEX_DATE],
            license=values[constants.INDEX_LICENSE],
            authors=tuple(values[constants.INDEX_AUTHORS]),
            name=values.get(constants.INDEX_NAME),
            description=values.get(constants.INDEX_DESCRIPTION),
            runtime_version=values.get(constants.INDEX_RUNTIME),
            package_manager_version=values.get(constants.INDEX_PACKAGE_MANAGER),
            dependency_version=values.get(constants.INDEX_DEPENDENCY),
            keys=keys,
        )
