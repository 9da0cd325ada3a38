"""Command-line bootstrap for artifact builds and token checks."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from tokiforge.build import build, check
from tokiforge.errors import TokiForgeError, format_error_for_user

USAGE = "usage: python -m tokiforge [build|check|check-strict] [project_dir]"
COMMANDS = ("build", "check", "check-strict")


def _configure_logger() -> logging.Logger:
    logger = logging.getLogger("tokiforge")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def run_app(argv: list[str] | None = None) -> int:
    """Run one command and return the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    command = args.pop(0) if args and args[0] in COMMANDS else "build"
    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2
    project_dir = Path(args[0]) if args else Path.cwd()
    logger = _configure_logger()

    try:
        if command == "build":
            written = build(project_dir)
            logger.info("build complete: %d artifact(s)", len(written))
            return 0
        report = check(project_dir, strict=command == "check-strict")
    except TokiForgeError as exc:
        print(format_error_for_user(exc), file=sys.stderr)
        return 1
    print(report.render())
    return report.exit_code
