"""!
@brief Command-line presenter for the version metadata reporter.
@details Parses options, bootstraps logging, builds a
:class:`~version_info.provider.VersionInfoProvider` and prints the aggregate
record as ``key: value`` lines or as JSON. Hard failures exit with status 1;
soft degradations appear in the output as placeholder strings.
"""
from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from typing import Iterable, Mapping, Optional, TextIO

from . import config, constants, logging_ext, version
from . import package_manager as pm
from .errors import VersionInfoError
from .provider import VersionInfoProvider


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    """!
    @brief Create the top-level argument parser.
    @details Options default to ``None`` so that :func:`config.collect_options`
    can tell explicit CLI values apart from config-file values.
    """

    parser = argparse.ArgumentParser(
        prog="version-info",
        description="Report version metadata for an application directory.",
    )
    metadata = version.build_info()
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"{metadata['version']} ({metadata['build']})",
    )
    parser.add_argument("--root", metavar="DIR", help="Application root holding VERSION and composer.json.")
    parser.add_argument(
        "--profile",
        choices=sorted(constants.PROFILES),
        help="Field set to report (default: full).",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--package-manager",
        choices=sorted(pm.PACKAGE_MANAGERS),
        help="Package manager queried for tooling versions (default: composer).",
    )
    parser.add_argument("--dependency", metavar="NAME", help="Package whose installed version is reported.")
    parser.add_argument("--timeout", metavar="SEC", type=_positive_float, help="Per-command timeout in seconds.")
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file.")
    parser.add_argument("--logdir", metavar="DIR", help="Directory for human/JSONL log output.")
    parser.add_argument("--log-json", action="store_true", help="Mirror structured events to stderr.")
    parser.add_argument("--quiet", action="store_true", help="Only log errors.")
    return parser


def _bootstrap_logging(args: argparse.Namespace) -> tuple[logging.Logger, logging.Logger]:
    """!
    @brief Initialize human and machine loggers using :mod:`logging_ext` helpers.
    """

    logdir = getattr(args, "logdir", None)
    human_logger, machine_logger = logging_ext.setup_logging(
        pathlib.Path(logdir).expanduser().resolve() if logdir else None,
        json_to_stderr=getattr(args, "log_json", False),
    )
    if getattr(args, "quiet", False):
        human_logger.setLevel(logging.ERROR)
    return human_logger, machine_logger


def render_text(record: Mapping[str, object]) -> str:
    """!
    @brief Render a record mapping as aligned ``key: value`` lines.
    """

    width = max((len(key) for key in record), default=0)
    lines = []
    for key, value in record.items():
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(item) for item in value)
        lines.append(f"{key + ':':<{width + 1}} {value}")
    return "\n".join(lines)


def render_json(record: Mapping[str, object]) -> str:
    return json.dumps(dict(record), indent=2, ensure_ascii=False)


def main(argv: Optional[Iterable[str]] = None, *, stdout: TextIO | None = None) -> int:
    """!
    @brief Entry point for the ``version-info`` console script.
    @returns Process exit code integer.
    """

    out = stdout if stdout is not None else sys.stdout
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    _, machine_log = _bootstrap_logging(args)

    try:
        options = config.collect_options(args)
        provider = VersionInfoProvider(
            options["root"],
            package_manager=str(options["package_manager"]),
            dependency=str(options["dependency"]),
            timeout=options["timeout"],
        )
        machine_log.info(
            "startup",
            extra={
                "event": "startup",
                "data": {
                    "root": str(provider.root_dir),
                    "profile": options["profile"],
                    "package_manager": provider.package_manager.name,
                },
            },
        )
        record = provider.get_all(str(options["profile"])).as_dict()
    except (VersionInfoError, ValueError) as exc:
        machine_log.error("failed", extra={"event": "failed", "error": str(exc)})
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(render_json(record), file=out)
    else:
        print(render_text(record), file=out)
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    sys.exit(main())
