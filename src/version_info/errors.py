"""!
@brief Hard-failure exceptions raised by the version metadata reporter.
@details Soft degradations (an absent package manager, unparseable tool
output) never raise; they surface as placeholder strings instead. Everything
defined here aborts the calling accessor and carries the offending path or key
so callers can print a useful diagnostic.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple


class VersionInfoError(Exception):
    """!
    @brief Base class for all hard failures.
    """


class MarkerFileNotFoundError(VersionInfoError):
    """!
    @brief Raised when the ``VERSION`` marker file is missing or unreadable.
    """

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Version marker file not found: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EmptyMarkerFileError(VersionInfoError):
    """!
    @brief Raised when the marker file holds nothing but whitespace.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Version marker file is empty: {self.path}")


class ManifestNotFoundError(VersionInfoError):
    """!
    @brief Raised when the manifest file is missing or unreadable.
    """

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Manifest file not found: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ManifestParseError(VersionInfoError):
    """!
    @brief Raised when the manifest is not a JSON object.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid manifest file {self.path}: {reason}")


def _format_keys(keys: Sequence[str]) -> str:
    return " -> ".join(keys)


class KeyNotFoundError(VersionInfoError):
    """!
    @brief Raised when a key path cannot be followed inside the manifest.
    """

    def __init__(self, path: Path, keys: Sequence[str]) -> None:
        self.path = Path(path)
        self.keys: Tuple[str, ...] = tuple(keys)
        super().__init__(f"Key '{_format_keys(self.keys)}' not found in {self.path}")


class TypeMismatchError(VersionInfoError):
    """!
    @brief Raised when the value at a manifest key is not a string.
    """

    def __init__(self, path: Path, keys: Sequence[str], actual: object) -> None:
        self.path = Path(path)
        self.keys: Tuple[str, ...] = tuple(keys)
        self.actual_type = type(actual).__name__
        super().__init__(
            f"Key '{_format_keys(self.keys)}' in {self.path} is {self.actual_type}, expected str"
        )


class ConfigError(VersionInfoError):
    """!
    @brief Raised when a configuration file cannot be used.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid configuration file {self.path}: {reason}")
