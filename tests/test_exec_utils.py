"""!
@brief Exec utils behaviour tests.
@details Validates argument passing, output capture, and the structured
logging emitted for successful, missing, and timed-out commands by
:mod:`version_info.exec_utils`.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from version_info import exec_utils  # noqa: E402


class _StubLogger:
    """!
    @brief Lightweight logger capturing structured log calls.
    """

    def __init__(self) -> None:
        self.records: List[tuple[str, str, Dict[str, object]]] = []

    def _record(self, level: str, message: str, args: tuple[object, ...], kwargs: Dict[str, object]) -> None:
        text = message % args if args else message
        self.records.append((level, text, dict(kwargs)))

    def debug(self, message: str, *args: object, **kwargs: object) -> None:  # noqa: D401 - logging compatibility
        self._record("debug", message, args, kwargs)

    def info(self, message: str, *args: object, **kwargs: object) -> None:  # noqa: D401 - logging compatibility
        self._record("info", message, args, kwargs)

    def warning(self, message: str, *args: object, **kwargs: object) -> None:  # noqa: D401 - logging compatibility
        self._record("warning", message, args, kwargs)

    def error(self, message: str, *args: object, **kwargs: object) -> None:  # noqa: D401 - logging compatibility
        self._record("error", message, args, kwargs)


@pytest.fixture
def loggers(monkeypatch: pytest.MonkeyPatch) -> tuple[_StubLogger, _StubLogger]:
    human_logger = _StubLogger()
    machine_logger = _StubLogger()
    monkeypatch.setattr(exec_utils.logging_ext, "get_human_logger", lambda: human_logger)
    monkeypatch.setattr(exec_utils.logging_ext, "get_machine_logger", lambda: machine_logger)
    return human_logger, machine_logger


def test_run_command_passes_argument_list_without_shell(monkeypatch, loggers) -> None:
    """!
    @brief The command must reach :func:`subprocess.run` as a list, never a shell string.
    """

    _, machine_logger = loggers
    captured: Dict[str, object] = {}

    def fake_run(command, **kwargs):
        captured["command"] = command
        captured.update(kwargs)
        return SimpleNamespace(returncode=0, stdout="Composer version 2.5.1", stderr="")

    monkeypatch.setattr(exec_utils.subprocess, "run", fake_run)

    result = exec_utils.run_command(["composer", "show", 'acme"; rm -rf /'], event="lookup", timeout=5)

    assert captured["command"] == ["composer", "show", 'acme"; rm -rf /']
    assert "shell" not in captured
    assert captured["capture_output"] is True
    assert captured["text"] is True
    assert captured["encoding"] == "utf-8"
    assert captured["errors"] == "replace"
    assert captured["check"] is False
    assert captured["timeout"] == 5
    assert result.returncode == 0
    assert result.output == "Composer version 2.5.1"
    assert machine_logger.records[0][1] == "lookup_plan"
    assert machine_logger.records[0][2]["extra"]["command"] == ["composer", "show", 'acme"; rm -rf /']
    assert machine_logger.records[-1][1] == "lookup_result"
    assert machine_logger.records[-1][2]["extra"]["return_code"] == 0


def test_run_command_reports_missing_executable(monkeypatch, loggers) -> None:
    """!
    @brief A missing executable is folded into a 127 result instead of raising.
    """

    _, machine_logger = loggers

    def fake_run(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr(exec_utils.subprocess, "run", fake_run)

    result = exec_utils.run_command(["composer", "-V"], event="lookup")

    assert result.returncode == exec_utils.MISSING_RETURN_CODE
    assert result.error
    assert result.output == ""
    assert machine_logger.records[-1][0] == "warning"
    assert machine_logger.records[-1][1] == "lookup_missing"


def test_run_command_reports_timeout(monkeypatch, loggers) -> None:
    """!
    @brief Timeouts produce a non-zero result flagged ``timed_out``.
    """

    human_logger, machine_logger = loggers

    def fake_run(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"], output=b"partial")

    monkeypatch.setattr(exec_utils.subprocess, "run", fake_run)

    result = exec_utils.run_command(["composer", "show"], event="lookup", timeout=0.1)

    assert result.timed_out is True
    assert result.returncode == 1
    assert result.stdout == "partial"
    assert machine_logger.records[-1][1] == "lookup_timeout"
    assert any(level == "warning" and "timed out" in text for level, text, _ in human_logger.records)


def test_run_command_merges_extra_metadata(monkeypatch, loggers) -> None:
    """!
    @brief Caller-supplied ``extra`` payloads appear on every machine record.
    """

    _, machine_logger = loggers
    monkeypatch.setattr(
        exec_utils.subprocess,
        "run",
        lambda command, **kwargs: SimpleNamespace(returncode=3, stdout="", stderr="boom"),
    )

    result = exec_utils.run_command(["tool"], event="lookup", extra={"tool": "composer"})

    assert result.returncode == 3
    assert result.output == "boom"
    assert all(record[2]["extra"]["tool"] == "composer" for record in machine_logger.records)


def test_run_command_rejects_empty_command(loggers) -> None:
    with pytest.raises(ValueError):
        exec_utils.run_command([], event="lookup")


def test_command_result_output_combines_streams() -> None:
    result = exec_utils.CommandResult(command=["x"], returncode=0, stdout="out", stderr="err", duration=0.0)
    assert result.output == "out\nerr"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell script stub")
def test_run_command_executes_real_process(tmp_path, loggers) -> None:
    """!
    @brief End-to-end run against a stub executable on disk.
    """

    script = tmp_path / "tool"
    script.write_text("#!/bin/sh\necho 'Tool version 2.5.1 2023-01-01'\nexit 0\n", encoding="utf-8")
    script.chmod(0o755)

    result = exec_utils.run_command([str(script)], event="lookup", timeout=10)

    assert result.returncode == 0
    assert "2.5.1" in result.stdout


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell script stub")
def test_run_command_replaces_undecodable_bytes(tmp_path, loggers) -> None:
    """!
    @brief Output that is not valid UTF-8 is decoded with replacement characters.
    """

    script = tmp_path / "tool"
    script.write_text(
        "#!/bin/sh\nprintf 'acme/w 1.0.0 Caf\\351\\n'\nprintf 'warn \\377\\n' >&2\nexit 0\n",
        encoding="utf-8",
    )
    script.chmod(0o755)

    result = exec_utils.run_command([str(script)], event="lookup", timeout=10)

    assert result.returncode == 0
    assert result.stdout == "acme/w 1.0.0 Caf\ufffd\n"
    assert "\ufffd" in result.stderr
