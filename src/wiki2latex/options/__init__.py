#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for wiki2latex.

Options are frozen dataclasses; use ``create_updated`` to derive a
modified copy.
"""

from __future__ import annotations

from wiki2latex.options.base import CloneFrozenMixin
from wiki2latex.options.convert import ConvertOptions
from wiki2latex.options.visitor import VisitorOptions

__all__ = ["CloneFrozenMixin", "ConvertOptions", "VisitorOptions"]
