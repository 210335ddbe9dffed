#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/options/visitor.py
"""Configuration options for translating one HTML document to LaTeX.

These options are fixed for the lifetime of a Visitor and describe the
document's place in its collection (chapters, single item, attribution)
along with the resources it may reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from wiki2latex.constants import (
    DEFAULT_DIRECTION,
    DEFAULT_LANGUAGE,
    DEFAULT_MATH_PACKAGES,
    DEFAULT_PARINDENT,
    Direction,
)
from wiki2latex.options.base import CloneFrozenMixin, validate_direction


@dataclass(frozen=True)
class VisitorOptions(CloneFrozenMixin):
    r"""Configuration options for the HTML-to-LaTeX visitor.

    Parameters
    ----------
    base_url : str, default ""
        Base URL used to resolve relative links and image resources.
    lang : str, default "en"
        Collection language; headings' table-of-contents forms use it.
    dir : {"ltr", "rtl"}, default "ltr"
        Direction of the collection language.
    image_map : Mapping[str, str]
        Resolved resource URL to on-disk file name, as produced by the
        media pipeline.
    image_dir : Path or None, default None
        Directory holding the mapped images. When set, a PDF page that does
        not exist on disk falls back to page 1.
    single_item : bool, default False
        The collection holds a single article, so the document class has no
        ``\chapter``.
    has_chapters : bool, default False
        The collection groups articles into chapters.
    is_attribution : bool, default False
        This document is the attribution pseudo-chapter.
    parindent : bool, default False
        Indented paragraphs; selects ``quotation`` over ``quote`` for
        indentation-only description lists.
    math_packages : frozenset of str
        Packages guaranteed to be loaded; formulas needing others are dropped.

    """

    base_url: str = field(
        default="",
        metadata={"help": "Base URL for resolving links and resources", "importance": "core"},
    )
    lang: str = field(
        default=DEFAULT_LANGUAGE,
        metadata={"help": "Collection language code", "importance": "core"},
    )
    dir: Direction = field(
        default=DEFAULT_DIRECTION,
        metadata={"help": "Collection text direction", "choices": ["ltr", "rtl"], "importance": "core"},
    )
    image_map: Mapping[str, str] = field(
        default_factory=dict,
        metadata={"help": "Resource URL to image file name mapping", "importance": "advanced"},
    )
    image_dir: Path | None = field(
        default=None,
        metadata={"help": "Directory containing mapped images", "importance": "advanced"},
    )
    single_item: bool = field(
        default=False,
        metadata={"help": "Collection has a single article", "importance": "core"},
    )
    has_chapters: bool = field(
        default=False,
        metadata={"help": "Collection is organized into chapters", "importance": "core"},
    )
    is_attribution: bool = field(
        default=False,
        metadata={"help": "Document is the attribution section", "importance": "advanced"},
    )
    parindent: bool = field(
        default=DEFAULT_PARINDENT,
        metadata={"help": "Use paragraph indentation", "importance": "advanced"},
    )
    math_packages: frozenset[str] = field(
        default=DEFAULT_MATH_PACKAGES,
        metadata={"help": "LaTeX packages guaranteed to be loaded for math", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If the direction or language is invalid.

        """
        validate_direction("dir", self.dir)
        if not self.lang:
            raise ValueError("lang must be a non-empty language code")
