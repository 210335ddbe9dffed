#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/options/convert.py
"""Configuration options for converting a whole bundle to PDF or LaTeX."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from wiki2latex.constants import (
    DEFAULT_MEDIA_WORKERS,
    DEFAULT_ONECOLUMN,
    DEFAULT_PAPER_SIZE,
    DEFAULT_PARINDENT,
    DEFAULT_SKIP_JPEGTRAN,
    PaperSize,
)
from wiki2latex.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ConvertOptions(CloneFrozenMixin):
    """Configuration options for a bundle conversion.

    Parameters
    ----------
    bundle : Path
        Zip file or directory holding the content bundle.
    output : Path or None, default None
        Where to save the PDF (or LaTeX driver). ``None`` writes to stdout.
    size : {"letter", "a4"}, default "letter"
        Paper size passed to xelatex.
    toc : bool or None, default None
        Force the table of contents on or off. ``None`` lets the bundle's
        metabook decide.
    onecolumn : bool, default False
        Single-column layout.
    parindent : bool, default False
        Indent paragraphs instead of spacing them.
    lang : str or None, default None
        Collection language override.
    latex_only : bool, default False
        Stop after writing LaTeX and emit the driver file instead of a PDF.
    tmpdir : Path or None, default None
        Where to create the build directory.
    debug : bool, default False
        Keep the build directory and re-raise errors.
    skip_jpegtran : bool, default False
        Skip JPEG metadata stripping.
    max_workers : int, default 5
        Parallel media conversions.

    """

    bundle: Path = field(metadata={"help": "Bundle zip file or directory", "importance": "core"})
    output: Path | None = field(
        default=None,
        metadata={"help": "Output file (default: stdout)", "importance": "core"},
    )
    size: PaperSize = field(
        default=DEFAULT_PAPER_SIZE,
        metadata={"help": "Paper size", "choices": ["letter", "a4"], "importance": "core"},
    )
    toc: bool | None = field(
        default=None,
        metadata={"help": "Force table of contents on or off", "importance": "core"},
    )
    onecolumn: bool = field(
        default=DEFAULT_ONECOLUMN,
        metadata={"help": "Single-column layout", "importance": "core"},
    )
    parindent: bool = field(
        default=DEFAULT_PARINDENT,
        metadata={"help": "Indent paragraphs", "importance": "advanced"},
    )
    lang: str | None = field(
        default=None,
        metadata={"help": "Collection language override", "importance": "core"},
    )
    latex_only: bool = field(
        default=False,
        metadata={"help": "Emit LaTeX instead of a PDF", "importance": "core"},
    )
    tmpdir: Path | None = field(
        default=None,
        metadata={"help": "Parent directory for the build directory", "importance": "advanced"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Keep build files and re-raise errors", "importance": "advanced"},
    )
    skip_jpegtran: bool = field(
        default=DEFAULT_SKIP_JPEGTRAN,
        metadata={"help": "Skip jpegtran when processing JPEGs", "importance": "advanced"},
    )
    max_workers: int = field(
        default=DEFAULT_MEDIA_WORKERS,
        metadata={"help": "Parallel media conversions", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.size not in ("letter", "a4"):
            raise ValueError(f"size must be 'letter' or 'a4', got {self.size!r}")
        if self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.lang is not None and not self.lang:
            raise ValueError("lang must be a non-empty language code")
