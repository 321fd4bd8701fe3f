"""
FILE: taskboard/logging_setup.py
PURPOSE: One-call logging configuration for the CLI
EXPORTS:
  - setup_logging(level, log_file) -> None
NOTES:
  - Library modules only create module loggers; handlers are installed here
  - Console handler writes to stderr so --json/--raw output stays clean
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Union[str, int] = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Level name (DEBUG/INFO/WARNING/ERROR) or number
        log_file: Optional file that receives everything at DEBUG

    Safe to call more than once: existing handlers are replaced.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    root_level = level
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        root.addHandler(fh)
        root_level = logging.DEBUG

    root.setLevel(root_level)
    logging.getLogger(__name__).debug("Logging initialized at %s", logging.getLevelName(level))
