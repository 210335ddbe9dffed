#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/utils/decorators.py
"""Timing helpers for the conversion stages."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long a block took, when DEBUG logging is enabled.

    Parameters
    ----------
    logger : logging.Logger
        Logger to report to
    operation : str
        Description of the timed operation, e.g. ``"Processing media"``

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Generating LaTeX"):
        ...     pass

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
