"""!
@file config.py
@brief Configuration file loading and option precedence.
@details Options are resolved with the following precedence (highest first):
1. CLI arguments explicitly specified
2. JSON config file values (if ``--config`` provided)
3. Environment (``VERSION_INFO_ROOT`` for the root directory only)
4. Built-in defaults
"""

from __future__ import annotations

import json
import os
import pathlib
from typing import TYPE_CHECKING, Mapping

from . import constants
from .errors import ConfigError

if TYPE_CHECKING:
    import argparse

__all__ = [
    "CONFIG_KEYS",
    "load_config_file",
    "collect_options",
]

CONFIG_KEYS = ("root", "package-manager", "dependency", "profile", "timeout")
_STRING_KEYS = ("root", "package-manager", "dependency", "profile")


def load_config_file(config_path: str | None) -> dict[str, object]:
    """!
    @brief Load and parse a JSON configuration file.
    @param config_path Path to the JSON config file, or None to skip.
    @returns Dictionary of configuration options, empty if no file specified.
    @raises ConfigError if the file cannot be read or parsed, holds unknown
    keys, or holds a value of the wrong type.
    """
    if not config_path:
        return {}

    path = pathlib.Path(config_path).expanduser().resolve()
    try:
        with open(path, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(path, "file not found") from e
    except json.JSONDecodeError as e:
        raise ConfigError(path, f"invalid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(path, str(e)) from e

    if not isinstance(config, dict):
        raise ConfigError(path, "must contain a JSON object")

    unknown = sorted(set(config) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigError(path, f"unknown keys: {', '.join(unknown)}")

    for key in _STRING_KEYS:
        if key in config and not isinstance(config[key], str):
            raise ConfigError(path, f"{key} must be a string")
    if "timeout" in config and not _is_positive_number(config["timeout"]):
        raise ConfigError(path, "timeout must be a positive number")
    return config


def _is_positive_number(value: object) -> bool:
    # bool is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def collect_options(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None = None,
) -> dict[str, object]:
    """!
    @brief Merge CLI arguments, config file values, environment and defaults.
    @param args Parsed command-line arguments.
    @param environ Environment mapping; defaults to :data:`os.environ`.
    @returns Dictionary with ``root``, ``package_manager``, ``dependency``,
    ``profile`` and ``timeout`` keys.
    """
    config = load_config_file(getattr(args, "config", None))
    env = os.environ if environ is None else environ

    def _get(attr: str, default: object = None) -> object:
        """Get option value with CLI > config > default precedence."""
        cli_val = getattr(args, attr, None)
        if cli_val is not None:
            return cli_val
        cfg_key = attr.replace("_", "-")  # CLI uses underscores, JSON uses hyphens
        if cfg_key in config:
            return config[cfg_key]
        return default

    return {
        "root": _get("root", env.get(constants.ROOT_ENV_VAR) or None),
        "package_manager": _get("package_manager", constants.DEFAULT_PACKAGE_MANAGER),
        "dependency": _get("dependency", constants.DEFAULT_DEPENDENCY),
        "profile": _get("profile", constants.DEFAULT_PROFILE),
        "timeout": _get("timeout", constants.DEFAULT_TIMEOUT),
    }
