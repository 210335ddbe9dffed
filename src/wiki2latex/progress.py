#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/progress.py
"""Staged progress reporting for bundle conversion.

A conversion runs through a fixed number of stages (workspace, media,
LaTeX generation, compilation). Each stage may announce how many steps it
has; :class:`StatusReporter` turns stage and step counts into an overall
percentage and hands a :class:`StatusEvent` to a callback after every
update.

Examples
--------
    >>> events = []
    >>> status = StatusReporter(2, events.append)
    >>> status.create_stage(2, "Processing media files")
    >>> status.report(file="a.png")
    >>> status.report(file="b.png")
    >>> status.create_stage(0, "Done")
    >>> [round(e.percent) for e in events]
    [0, 0, 25, 50]

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class StatusEvent:
    """A single progress update.

    Parameters
    ----------
    message : str
        Description of the current stage or step
    file : str or None
        File or item being processed, if any
    percent : float
        Overall completion, from 0 to 100

    """

    message: str
    file: Optional[str] = None
    percent: float = 0.0

    def __str__(self) -> str:
        suffix = f": {self.file}" if self.file else ""
        return f"[{self.percent:.0f}%] {self.message}{suffix}"


StatusCallback = Callable[[StatusEvent], None]
"""Type alias for status callbacks."""


class StatusReporter:
    """Convert stage and step counts into percentage progress.

    Parameters
    ----------
    num_stages : int
        Number of stages the conversion goes through
    callback : callable, optional
        Receives a :class:`StatusEvent` on every update

    """

    def __init__(self, num_stages: int, callback: Optional[StatusCallback] = None):
        self.callback = callback
        self.percent_complete = 0.0
        self.current_stage = 0
        self.stages_inv = 1.0 / num_stages if num_stages else 1.0
        self.stage_len = 0.0
        self.message = ""
        self.file: Optional[str] = None

    def _send(self) -> None:
        if self.callback is not None:
            self.callback(StatusEvent(self.message, self.file, self.percent_complete))

    def _report(self, message: Optional[str], file: Optional[str]) -> None:
        if message is not None:
            self.message = message
            self.file = file
        elif file:
            # keep the message, update the current file only
            self.file = file
        self._send()

    def create_stage(self, length: int = 0, message: str = "", file: Optional[str] = None) -> None:
        """Start the next stage, which will take ``length`` steps."""
        self.percent_complete = 100.0 * self.current_stage * self.stages_inv
        self.current_stage += 1
        self.stage_len = 1.0 / length if length else 0.0
        self._report(message, file)

    def report_n(self, n: int, message: Optional[str] = None, file: Optional[str] = None) -> None:
        """Report the current step, then advance the stage by ``n`` steps."""
        self._report(message, file)
        self.percent_complete += 100.0 * self.stages_inv * self.stage_len * n

    def report(self, message: Optional[str] = None, file: Optional[str] = None) -> None:
        """Report the current step, then advance the stage by one step."""
        self.report_n(1, message, file)
