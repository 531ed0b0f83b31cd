"""Logging configuration.

The interactive screen belongs to the task list, so full logs go to a file
when one is configured; otherwise only warnings reach stderr.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Optional[Union[str, Path]] = None, level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger. Call once, before the first log record."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    # drop handlers from a previous call so records are not duplicated
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(str(log_path), encoding="utf-8")
        handler.setLevel(level)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(max(level, logging.WARNING))
    handler.setFormatter(fmt)
    root.addHandler(handler)

    logging.captureWarnings(True)
