# src/taskm/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Background workers that report on every tick or message. Their INFO/DEBUG
# records would interleave with command output, so on the console they only
# show up from WARNING on. The debug file still gets everything.
_BACKGROUND_LOGGERS = ("taskm.tasks.archiver", "taskm.async_logger", "taskm.core.workers")


def _in_namespace(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + ".")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable while a command runs:
    - background worker chatter only at WARNING+
    - other taskm logs at the handler level
    - everything else (third-party, captured py.warnings) only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if any(_in_namespace(name, prefix) for prefix in _BACKGROUND_LOGGERS):
            return record.levelno >= logging.WARNING

        if _in_namespace(name, "taskm"):
            return True

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = "storage",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure diagnostics logging with:
    - Console handler (stderr): filtered by _ConsoleNoiseFilter
    - File handler: full debug trace in <log_dir>/taskm-debug.log

    This is separate from the activity log (AsyncLogger), which is a
    product feature with its own file and format.

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskm-debug.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
