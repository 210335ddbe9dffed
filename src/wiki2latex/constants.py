#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for wiki2latex.

Constants are organized by category:
1. Type Definitions - Literal types shared by options and the core
2. Conversion Defaults - Paper size, columns, language
3. LaTeX Structure - Sectioning levels, tag and environment tables
4. Media Handling - Concurrency and file name limits
5. Compilation - xelatex invocation details
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Direction = Literal["ltr", "rtl"]
PaperSize = Literal["letter", "a4"]

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_LANGUAGE = "en"
DEFAULT_DIRECTION: Direction = "ltr"
DEFAULT_PAPER_SIZE: PaperSize = "letter"
DEFAULT_ONECOLUMN = False
DEFAULT_PARINDENT = False
DEFAULT_SKIP_JPEGTRAN = False

# Packages every generated document loads for math
DEFAULT_MATH_PACKAGES: frozenset[str] = frozenset({"amsmath", "amssymb", "amsthm", "amstext"})

# =============================================================================
# LaTeX Structure
# =============================================================================

# h1..h6 map onto these after level adjustment; the tail bottoms out at subparagraph
SECTION_LEVELS = (
    "chapter",
    "section",
    "subsection",
    "subsubsection",
    "paragraph",
    "subparagraph",
    "subparagraph",
    "subparagraph",
    "subparagraph",
)

INLINE_COMMANDS = {
    "b": "\\textbf",
    "strong": "\\textbf",
    "i": "\\emph",
    "em": "\\emph",
    "sub": "\\textsubscript",
    # the starred form renders brackets correctly
    "sup": "\\textsuperscript*",
    "small": "\\textsmall",
}

BLOCK_ENVIRONMENTS = {
    "center": "center",
    "blockquote": "quotation",
    "ul": "itemize",
    "ol": "enumerate",
}

PARAGRAPH_TAGS = frozenset(
    {"blockquote", "body", "center", "div", "dl", "figure", "h1", "h2", "h3", "h4", "h5", "h6", "ol", "p", "table", "ul"}
)

HIDDEN_CLASSES = ("infobox", "navbox", "rellink", "dablink", "toplink", "metadata")

MULTIPLE_IMAGE_TEMPLATES = ("./Template:Triple_image", "./Template:Double_image")

# Definition terms longer than this are set in a parbox
LONG_TERM_LENGTH = 60

# Images at or below this size are treated as inline icons and skipped
ICON_MAX_PIXELS = 16

SKIPPED_IMAGE_FORMATS = re.compile(r"[.](svg|gif|ogg|ogv)$", re.IGNORECASE)

FIGURE_PLACEMENT = "tbh!"
FIGURE_WIDTH = "0.95\\columnwidth"

ZERO_WIDTH_SPACE = "\u200b"

# John Gruber's "Improved Liberal, Accurate Regex Pattern for Matching URLs"
URL_PATTERN = re.compile(
    r"\b((?:[a-z][\w\-]+:(?:/{1,3}|[a-z0-9%])|www\d{0,3}[.]|[a-z0-9.\-]+[.][a-z]{2,4}/)"
    r"(?:[^\s()<>]+|\((?:[^\s()<>]+|(?:\([^\s()<>]+\)))*\))+"
    r"(?:\((?:[^\s()<>]+|(?:\([^\s()<>]+\)))*\)|[^\s`!()\[\]{};:'\".,<>?«»“”‘’]))",
    re.IGNORECASE,
)

# =============================================================================
# Media Handling
# =============================================================================

DEFAULT_MEDIA_WORKERS = 5
MAX_SAFE_FILENAME_LENGTH = 64
JPEG_DENSITY = "600"

# =============================================================================
# Compilation
# =============================================================================

XELATEX_COMMAND = "xelatex"
XELATEX_OPTIONS = ("-interaction=nonstopmode", "-halt-on-error")
RERUN_INDICATORS = ("No file output.toc.", "Package hyperref Warning: Rerun")
MAX_XELATEX_PASSES = 3

# External programs needed by each stage, as (executable, purpose)
DEPS_GIF = [("convert", "GIF to PNG conversion")]
DEPS_SVG = [("rsvg-convert", "SVG to PDF conversion"), ("inkscape", "SVG to PDF conversion")]
DEPS_JPEG = [("jpegtran", "JPEG metadata stripping"), ("mogrify", "JPEG density reset")]
DEPS_PDF = [("pdfseparate", "PDF page extraction")]
