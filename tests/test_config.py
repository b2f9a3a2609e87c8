"""!
@brief Tests for :mod:`version_info.config`.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from version_info import config, constants  # noqa: E402
from version_info.errors import ConfigError  # noqa: E402


def _args(**overrides: object) -> argparse.Namespace:
    values = {
        "root": None,
        "package_manager": None,
        "dependency": None,
        "profile": None,
        "timeout": None,
        "config": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_defaults_without_config() -> None:
    options = config.collect_options(_args(), environ={})

    assert options == {
        "root": None,
        "package_manager": constants.DEFAULT_PACKAGE_MANAGER,
        "dependency": constants.DEFAULT_DEPENDENCY,
        "profile": constants.DEFAULT_PROFILE,
        "timeout": constants.DEFAULT_TIMEOUT,
    }


def test_config_file_overrides_defaults_and_cli_overrides_config(tmp_path) -> None:
    path = tmp_path / "version-info.json"
    path.write_text(
        json.dumps({"package-manager": "pip", "dependency": "pytest", "profile": "minimal", "timeout": 5}),
        encoding="utf-8",
    )

    options = config.collect_options(_args(config=str(path), dependency="requests"), environ={})

    assert options["package_manager"] == "pip"
    assert options["profile"] == "minimal"
    assert options["timeout"] == 5
    assert options["dependency"] == "requests"


def test_root_precedence(tmp_path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"root": "/from/config"}), encoding="utf-8")
    environ = {constants.ROOT_ENV_VAR: "/from/env"}

    assert config.collect_options(_args(), environ=environ)["root"] == "/from/env"
    assert config.collect_options(_args(config=str(path)), environ=environ)["root"] == "/from/config"
    assert (
        config.collect_options(_args(config=str(path), root="/from/cli"), environ=environ)["root"]
        == "/from/cli"
    )


def test_load_config_file_skips_when_unset() -> None:
    assert config.load_config_file(None) == {}


@pytest.mark.parametrize(
    "content, reason",
    [
        ("{broken", "invalid JSON"),
        ("[]", "JSON object"),
        ('{"colour": "blue"}', "unknown keys: colour"),
        ('{"root": 5}', "root must be a string"),
        ('{"profile": ["full"]}', "profile must be a string"),
        ('{"dependency": null}', "dependency must be a string"),
        ('{"package-manager": 1}', "package-manager must be a string"),
        ('{"timeout": true}', "timeout must be a positive number"),
        ('{"timeout": 0}', "timeout must be a positive number"),
        ('{"timeout": -3.5}', "timeout must be a positive number"),
        ('{"timeout": "soon"}', "timeout must be a positive number"),
    ],
)
def test_invalid_config_files(tmp_path, content: str, reason: str) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        config.load_config_file(str(path))

    assert reason in str(excinfo.value)


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(ConfigError):
        config.load_config_file(str(tmp_path / "absent.json"))


def test_fractional_timeout_accepted(tmp_path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"timeout": 2.5}), encoding="utf-8")

    assert config.collect_options(_args(config=str(path)), environ={})["timeout"] == 2.5
