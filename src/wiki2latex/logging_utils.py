"""Logging setup for the wiki2latex command line.

Diagnostics always go to stderr; stdout is reserved for the generated PDF or
LaTeX. A log file, when requested, receives the same records.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Replace the root logger's handlers for a command-line run.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``.
    log_file : str, optional
        Also append log records to this file.
    trace_mode : bool, default False
        Prefix records with a timestamp and the logger name.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    level = _resolve_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    _attach(root, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            _attach(root, logging.FileHandler(log_file, mode="a", encoding="utf-8"), level, formatter)
        except OSError as exc:
            root.warning("Could not open log file %s: %s", log_file, exc)
        else:
            root.info("Logging to file: %s", log_file)

    return root
