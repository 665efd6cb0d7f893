# src/taskm/cli/main.py

"""
CLI entrypoint.

Parses flags, initializes logging, builds AppState (which starts the
activity logger and archiver), runs one command, then waits for SIGINT /
SIGTERM before running the shutdown sequence.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from collections.abc import Sequence

from ..config import Settings, get_settings
from ..core.shutdown import shutdown
from ..core.state import AppState
from ..logging_setup import setup_logging
from .bootstrap import create_initial_state
from .commands import CommandReply, cmd_add, cmd_delete, cmd_done, cmd_list

logger = logging.getLogger(__name__)

USAGE_HINT = "Use: --add, --list, --done, --delete"


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with 2 on bad usage; we want 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="taskm", description="Simple task manager.")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--add", metavar="TITLE", help="add a task")
    action.add_argument("--list", action="store_true", help="list tasks")
    action.add_argument("--done", metavar="ID", type=int, help="mark a task as done")
    action.add_argument("--delete", metavar="ID", type=int, help="delete a task")
    parser.add_argument("--priority", help="priority for --add (low, medium, high)")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.priority is not None and args.add is None:
        parser.error("--priority can only be used with --add")
    if args.add is not None and not args.add.strip():
        parser.error("--add needs a non-empty title")
    return args


def _emit(replies: list[CommandReply]) -> None:
    for r in replies:
        print(r.text, file=sys.stderr if r.error else sys.stdout)


def run_command(state: AppState, args: argparse.Namespace) -> bool:
    """Run the selected command. Returns False if no command was given."""
    if args.add is not None:
        _emit(cmd_add(state, args.add, args.priority))
    elif args.list:
        _emit(cmd_list(state))
    elif args.done is not None:
        _emit(cmd_done(state, args.done))
    elif args.delete is not None:
        _emit(cmd_delete(state, args.delete))
    else:
        return False
    return True


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    args = parse_args(argv)

    if settings is None:
        settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    try:
        setup_logging(log_dir=settings.data_dir, console_level=console_level)
        state = create_initial_state(settings=settings)
    except OSError as exc:
        print(f"Fatal: failed to initialize storage in '{settings.data_dir}': {exc}", file=sys.stderr)
        return 1

    logger.info("Starting %s...", settings.app_name)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError):
        # Not in the main thread, or the platform lacks SIGTERM.
        logger.debug("Could not install signal handlers.", exc_info=True)

    try:
        if not run_command(state, args):
            print(f"{settings.app_name} task manager")
            print(USAGE_HINT)

        if settings.wait_for_signal:
            logger.info("Running background workers. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        report = shutdown(state)

    if report.saved:
        print("Tasks saved.")
    else:
        print(f"Error saving tasks: {report.error}", file=sys.stderr)
    logger.info("Bye.")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
