"""
FILE: memo/logging_setup.py
PURPOSE: Logging configuration for the CLI and REPL
EXPORTS:
  - setup_logging(log_dir, console_level, file_level) -> None
DEPENDENCIES:
  - logging (stdlib)
NOTES:
  - Console output is shared with rich, so the console handler only lets
    memo records through (and errors from anything else)
  - The file handler keeps everything for debugging
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FILE_NAME = "memo.log"


class _ConsoleNoiseFilter(logging.Filter):
    """Allow memo logs; third-party records only at ERROR and above."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "memo" or record.name.startswith("memo."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    log_dir: Optional[Union[str, Path]] = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure the root logger.

    Args:
        log_dir: Directory for memo.log (no file logging if None)
        console_level: Threshold for the stderr handler
        file_level: Threshold for the file handler

    Call this once, before the first command runs.
    """
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

    if log_dir is not None:
        log_dir = Path(log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
        except OSError as e:
            logging.getLogger(__name__).warning("File logging disabled: %s", e)
        else:
            fh.setLevel(file_level)
            fh.setFormatter(fmt)
            root.addHandler(fh)

    logging.captureWarnings(True)
