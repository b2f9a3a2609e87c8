"""!
@brief Package-manager version queries with soft degradation.
@details A package manager is described by its executable and the arguments
that print its own version or list installed packages. Output is treated as
untrusted text: the first ``X.Y.Z`` substring wins. A tool that is missing or
exits non-zero yields the "not available" placeholder, output without a
version yields the "unable to get" placeholder. Neither path raises.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from . import constants, logging_ext
from .exec_utils import CommandRunner


@dataclass(frozen=True)
class PackageManager:
    """!
    @brief Invocation details for one package manager.
    @param name Display name used in placeholders.
    @param executable Argument prefix that launches the tool.
    @param version_args Arguments that print the tool's own version.
    @param list_args Arguments that list installed packages with versions.
    """

    name: str
    executable: Tuple[str, ...]
    version_args: Tuple[str, ...] = ("-V",)
    list_args: Tuple[str, ...] = ("show",)

    def version_command(self) -> list[str]:
        return [*self.executable, *self.version_args]

    def list_command(self) -> list[str]:
        return [*self.executable, *self.list_args]

    @property
    def not_available(self) -> str:
        return constants.NOT_AVAILABLE_TEMPLATE.format(tool=self.name)

    @property
    def unparseable(self) -> str:
        return constants.UNPARSEABLE_TEMPLATE.format(tool=self.name)


COMPOSER = PackageManager(name="composer", executable=("composer",))
PIP = PackageManager(
    name="pip",
    executable=(sys.executable, "-m", "pip"),
    version_args=("--version",),
    list_args=("list", "--disable-pip-version-check"),
)

PACKAGE_MANAGERS: Dict[str, PackageManager] = {
    COMPOSER.name: COMPOSER,
    PIP.name: PIP,
}


def get_package_manager(name: str) -> PackageManager:
    """!
    @brief Look up a known package manager by name.
    @throws ValueError If ``name`` is not registered.
    """

    try:
        return PACKAGE_MANAGERS[name]
    except KeyError:
        known = ", ".join(sorted(PACKAGE_MANAGERS))
        raise ValueError(f"Unknown package manager {name!r}; expected one of: {known}") from None


def extract_version(text: str) -> str | None:
    """!
    @brief Return the first ``X.Y.Z`` substring of ``text``, if any.
    """

    match = constants.VERSION_PATTERN.search(text)
    return match.group(0) if match else None


def filter_lines(text: str, needle: str) -> Iterable[str]:
    """!
    @brief Yield the lines of ``text`` that contain ``needle`` as a substring.
    """

    return (line for line in text.splitlines() if needle in line)


def query_tool_version(manager: PackageManager, runner: CommandRunner) -> str:
    """!
    @brief Report the package manager's own version.
    @returns The version, or a placeholder string when unavailable.
    """

    result = runner(manager.version_command())
    if result.returncode != 0:
        _log_degraded(manager, "tool_version", result.returncode)
        return manager.not_available

    found = extract_version(result.output)
    if found is None:
        _log_degraded(manager, "tool_version", result.returncode)
        return manager.unparseable
    return found


def query_package_version(manager: PackageManager, package: str, runner: CommandRunner) -> str:
    """!
    @brief Report the installed version of ``package``.
    @details The listing is filtered in-process, so ``package`` never reaches a
    shell. Lines mentioning ``package`` are searched in order.
    @returns The version, or a placeholder string when unavailable.
    """

    result = runner(manager.list_command())
    if result.returncode != 0:
        _log_degraded(manager, "package_version", result.returncode, package=package)
        return manager.not_available

    for line in filter_lines(result.output, package):
        found = extract_version(line)
        if found is not None:
            return found

    _log_degraded(manager, "package_version", result.returncode, package=package)
    return manager.unparseable


def _log_degraded(manager: PackageManager, query: str, returncode: int, **fields: object) -> None:
    logging_ext.get_human_logger().warning(
        "%s query '%s' degraded (exit code %s)", manager.name, query, returncode
    )
    payload: Dict[str, object] = {
        "event": "package_manager_degraded",
        "tool": manager.name,
        "query": query,
        "return_code": returncode,
    }
    payload.update(fields)
    logging_ext.get_machine_logger().warning("package_manager_degraded", extra=payload)
