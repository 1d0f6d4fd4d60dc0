"""
Command-line entry point.

Usage:
    ai-dev-env                     # Interactive setup
    ai-dev-env --non-interactive   # Use catalog defaults, no prompts
    ai-dev-env --debug --json      # Debug logging, JSON report at the end
"""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys

from . import __version__
from .catalog import load_catalog
from .common import is_interactive
from .config import load_config
from .environment import detect_environment
from .errors import AiDevEnvError
from .logging_config import setup_logging
from .render import render_summary
from .workflow import run_setup

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-dev-env",
        description="AI Development Environment Setup Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "-n", "--non-interactive",
        action="store_true",
        help="Run in non-interactive mode (skip prompts)",
    )
    parser.add_argument(
        "--catalog",
        metavar="PATH",
        help="Tool catalog JSON (default: bundled tools.json)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write a debug log to this file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the per-step report as JSON when done",
    )
    return parser


def _install_signal_handlers() -> None:
    # Exit quietly when the reading end of a pipe goes away
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    # The JSON report is the only thing written to stdout in --json mode
    setup_logging(
        debug=args.debug,
        log_file=args.log_file,
        stream=sys.stderr if args.json else None,
    )

    try:
        config = load_config(args.config)
        catalog = load_catalog(args.catalog or config.catalog or None)
    except AiDevEnvError as e:
        logger.error(e.message)
        if e.remediation:
            logger.info(e.remediation)
        return 1

    env = detect_environment()
    interactive = is_interactive(args.non_interactive)
    logger.debug(f"Interactive mode: {interactive}")

    report = run_setup(catalog, config, env, interactive=interactive)

    failures = report.failures
    if failures:
        names = ", ".join(f"{step.kind} {step.name}" for step in failures)
        logger.warning(f"{len(failures)} step(s) did not succeed: {names}")

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        render_summary(report)
    return 0


def run() -> None:
    """Console script wrapper: signal handling and exit status."""
    _install_signal_handlers()
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted. Cleaning up...", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
