"""!
@brief Subprocess execution helpers.
@details Wraps :func:`subprocess.run` so package-manager queries always receive
a discrete argument list (never a shell string), capture their output as
UTF-8 text with undecodable bytes replaced, and record ``*_plan``/``*_result``
events on the machine logger. Launch failures are folded into the returned
:class:`CommandResult` instead of being raised, since every caller treats an
unavailable tool as a soft degradation.
"""
from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from typing import Callable, Mapping, MutableMapping, Sequence

from . import constants, logging_ext

MISSING_RETURN_CODE = 127


@dataclass
class CommandResult:
    """!
    @brief Outcome metadata returned by :func:`run_command`.
    @details ``timed_out`` is ``True`` when the command exceeded the requested
    timeout; ``error`` holds the launch failure text when the process could
    not be started at all.
    """

    command: Sequence[str]
    returncode: int
    stdout: str
    stderr: str
    duration: float
    timed_out: bool = False
    error: str | None = None

    @property
    def output(self) -> str:
        """!
        @brief Combined ``stdout`` and ``stderr`` text.
        """

        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr


CommandRunner = Callable[[Sequence[str]], CommandResult]
"""!
@brief Capability consumed by the provider: run ``args`` and report the outcome.
"""


def run_command(
    command: Sequence[str],
    *,
    event: str = "command",
    timeout: int | float | None = constants.DEFAULT_TIMEOUT,
    extra: Mapping[str, object] | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """!
    @brief Execute ``command`` while emitting structured telemetry records.
    @details A ``<event>_plan`` record is written before invocation and a
    ``<event>_result`` record once the process exits. A missing executable is
    reported with return code 127 (``<event>_missing``), a timeout or other
    launch failure with return code 1 (``<event>_timeout``/``<event>_error``).
    @param command Argument list; the first element is the executable.
    @param event Base event identifier recorded in machine logs.
    @param timeout Optional timeout in seconds.
    @param extra Mapping merged into machine log payloads.
    @param cwd Working directory for the child process.
    @returns :class:`CommandResult` describing the observed outcome.
    """

    human_logger = logging_ext.get_human_logger()
    machine_logger = logging_ext.get_machine_logger()

    command_list = [str(part) for part in command]
    if not command_list:
        raise ValueError("command must contain at least the executable")

    def _meta(suffix: str, **fields: object) -> dict:
        payload: MutableMapping[str, object] = {"event": f"{event}_{suffix}", "command": command_list}
        payload.update(fields)
        if extra:
            payload.update(extra)
        return dict(payload)

    machine_logger.info(f"{event}_plan", extra=_meta("plan", timeout=timeout, cwd=cwd))

    start = time.monotonic()
    try:
        completed = subprocess.run(  # noqa: S603 - argument list, no shell
            command_list,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
            cwd=cwd,
        )
    except FileNotFoundError as exc:
        duration = time.monotonic() - start
        human_logger.debug("Command not found: %s", command_list[0])
        machine_logger.warning(
            f"{event}_missing", extra=_meta("missing", duration=duration, error=str(exc))
        )
        return CommandResult(
            command=command_list,
            returncode=MISSING_RETURN_CODE,
            stdout="",
            stderr="",
            duration=duration,
            error=str(exc),
        )
    except subprocess.TimeoutExpired as exc:
        duration = time.monotonic() - start
        stdout = _as_text(exc.stdout)
        stderr = _as_text(exc.stderr)
        human_logger.warning("Command timed out after %.1fs: %s", duration, command_list[0])
        machine_logger.error(
            f"{event}_timeout",
            extra=_meta("timeout", duration=duration, stdout=stdout, stderr=stderr),
        )
        return CommandResult(
            command=command_list,
            returncode=1,
            stdout=stdout,
            stderr=stderr,
            duration=duration,
            timed_out=True,
            error="timeout",
        )
    except OSError as exc:
        duration = time.monotonic() - start
        human_logger.warning("Failed to execute %s: %s", command_list[0], exc)
        machine_logger.error(
            f"{event}_error", extra=_meta("error", duration=duration, error=str(exc))
        )
        return CommandResult(
            command=command_list,
            returncode=1,
            stdout="",
            stderr="",
            duration=duration,
            error=str(exc),
        )

    duration = time.monotonic() - start
    machine_logger.info(
        f"{event}_result",
        extra=_meta(
            "result",
            return_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
            duration=duration,
        ),
    )

    return CommandResult(
        command=command_list,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        duration=duration,
    )


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
