"""wiki2latex - typeset wiki content as bidi-aware XeLaTeX.

wiki2latex translates wiki (Parsoid) HTML into XeLaTeX source that keeps
mixed left-to-right and right-to-left text in the right order, switches
languages and fonts through polyglossia, and compiles whole article
collections into a PDF.

Examples
--------
Translate a single document:

    >>> from wiki2latex import html_to_latex
    >>> result = html_to_latex('<p>Hello <span lang="he">שלום</span></p>')
    >>> sorted(result.used_languages)
    ['he']

Convert a content bundle to a PDF:

    >>> from wiki2latex import ConvertOptions, convert
    >>> convert(ConvertOptions(bundle="collection.zip", output="out.pdf"))  # doctest: +SKIP
    0

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "0.3.0"

from wiki2latex.api import LatexResult, convert, html_to_latex
from wiki2latex.exceptions import (
    CompilationError,
    DecorationBalanceError,
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
    Wiki2LatexError,
)
from wiki2latex.formatter import Formatter
from wiki2latex.options import ConvertOptions, VisitorOptions
from wiki2latex.progress import StatusEvent, StatusReporter
from wiki2latex.visitor import Visitor

__all__ = [
    "__version__",
    "convert",
    "html_to_latex",
    "LatexResult",
    "Formatter",
    "Visitor",
    "ConvertOptions",
    "VisitorOptions",
    "StatusEvent",
    "StatusReporter",
    "Wiki2LatexError",
    "ValidationError",
    "FileError",
    "ParsingError",
    "RenderingError",
    "DecorationBalanceError",
    "CompilationError",
    "DependencyError",
]
