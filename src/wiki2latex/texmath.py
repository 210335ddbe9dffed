#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/texmath.py
"""Validation and translation of wiki math markup.

Wiki formulas use a TeX dialect with a few extra macros (``\\R``,
``\\infin``, ...) and must never carry commands that escape math mode or
touch the file system. :func:`check` validates a formula, rewrites the
dialect macros to standard LaTeX and reports which packages the result
needs, so the caller can drop formulas its preamble cannot support.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from pylatexenc.latexwalker import (
    LatexEnvironmentNode,
    LatexGroupNode,
    LatexMacroNode,
    LatexMathNode,
    LatexWalker,
    LatexWalkerError,
)

logger = logging.getLogger(__name__)

STATUS_OK = "+"
STATUS_LEXING_ERROR = "E"
STATUS_SYNTAX_ERROR = "S"
STATUS_UNKNOWN_FUNCTION = "F"

# Commands that are unsafe or meaningless inside a formula
FORBIDDEN_COMMANDS = frozenset(
    {
        "catcode",
        "csname",
        "def",
        "edef",
        "expandafter",
        "gdef",
        "immediate",
        "include",
        "input",
        "let",
        "newcommand",
        "openin",
        "openout",
        "read",
        "renewcommand",
        "special",
        "usepackage",
        "write",
        "xdef",
    }
)

# Wiki math macros and their standard LaTeX spelling
DIALECT_MACROS = {
    "Alpha": "\\mathrm{A}",
    "Beta": "\\mathrm{B}",
    "Epsilon": "\\mathrm{E}",
    "Zeta": "\\mathrm{Z}",
    "Eta": "\\mathrm{H}",
    "Iota": "\\mathrm{I}",
    "Kappa": "\\mathrm{K}",
    "Mu": "\\mathrm{M}",
    "Nu": "\\mathrm{N}",
    "Rho": "\\mathrm{P}",
    "Tau": "\\mathrm{T}",
    "Chi": "\\mathrm{X}",
    "C": "\\mathbb{C}",
    "Complex": "\\mathbb{C}",
    "H": "\\mathbb{H}",
    "N": "\\mathbb{N}",
    "natnums": "\\mathbb{N}",
    "Q": "\\mathbb{Q}",
    "R": "\\mathbb{R}",
    "Reals": "\\mathbb{R}",
    "reals": "\\mathbb{R}",
    "Z": "\\mathbb{Z}",
    "alef": "\\aleph",
    "alefsym": "\\aleph",
    "and": "\\land",
    "ang": "\\angle",
    "bull": "\\bullet",
    "clubs": "\\clubsuit",
    "dArr": "\\Downarrow",
    "darr": "\\downarrow",
    "diamonds": "\\diamondsuit",
    "empty": "\\emptyset",
    "exist": "\\exists",
    "hArr": "\\Leftrightarrow",
    "harr": "\\leftrightarrow",
    "hearts": "\\heartsuit",
    "image": "\\Im",
    "infin": "\\infty",
    "isin": "\\in",
    "lArr": "\\Leftarrow",
    "larr": "\\leftarrow",
    "lrarr": "\\leftrightarrow",
    "Lrarr": "\\Leftrightarrow",
    "O": "\\emptyset",
    "or": "\\lor",
    "part": "\\partial",
    "plusmn": "\\pm",
    "rArr": "\\Rightarrow",
    "rarr": "\\rightarrow",
    "real": "\\Re",
    "sdot": "\\cdot",
    "spades": "\\spadesuit",
    "sub": "\\subset",
    "sube": "\\subseteq",
    "supe": "\\supseteq",
    "thetasym": "\\vartheta",
    "uArr": "\\Uparrow",
    "uarr": "\\uparrow",
    "weierp": "\\wp",
}

# Commands that pull in a package beyond the standard AMS set
PACKAGE_COMMANDS = {
    "bcancel": "cancel",
    "cancel": "cancel",
    "cancelto": "cancel",
    "xcancel": "cancel",
    "euro": "eurosym",
    "geneuro": "eurosym",
    "Coppa": "teubner",
    "coppa": "teubner",
    "Digamma": "teubner",
    "Koppa": "teubner",
    "koppa": "teubner",
    "Sampi": "teubner",
    "sampi": "teubner",
    "Stigma": "teubner",
    "stigma": "teubner",
    "varstigma": "teubner",
    "ce": "mhchem",
    "pu": "mhchem",
}

_MACRO_RE = re.compile(r"\\([A-Za-z]+)")
# an odd number of backslashes escapes the following character
_UNESCAPED_RE = re.compile(r"(?<!\\)(?:\\\\)*([$%#])")


@dataclass(frozen=True)
class MathCheckResult:
    """Outcome of checking one formula.

    Parameters
    ----------
    status : str
        ``"+"`` when the formula is usable, otherwise an error code:
        ``"E"`` lexing error, ``"S"`` syntax error, ``"F"`` forbidden or
        unknown command
    output : str
        Translated formula, empty on error
    details : str
        Human-readable reason for a failure
    required_packages : frozenset of str
        Packages beyond the AMS set the output needs

    """

    status: str
    output: str = ""
    details: str = ""
    required_packages: frozenset[str] = field(default_factory=frozenset)

    @property
    def ok(self) -> bool:
        """True when the formula can be typeset."""
        return self.status == STATUS_OK

    def supported_by(self, packages: Iterable[str]) -> bool:
        """True when the formula is valid and needs only ``packages``."""
        return self.ok and self.required_packages <= frozenset(packages)


def _braces_balanced(source: str) -> bool:
    depth = 0
    escaped = False
    for char in source:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _walk_macros(nodes: Iterable) -> Iterator[str]:
    for node in nodes:
        if node is None:
            continue
        if isinstance(node, LatexMacroNode):
            yield node.macroname
            if node.nodeargd is not None and getattr(node.nodeargd, "argnlist", None):
                yield from _walk_macros(node.nodeargd.argnlist)
        elif isinstance(node, LatexEnvironmentNode):
            if node.nodeargd is not None and getattr(node.nodeargd, "argnlist", None):
                yield from _walk_macros(node.nodeargd.argnlist)
            yield from _walk_macros(node.nodelist)
        elif isinstance(node, (LatexGroupNode, LatexMathNode)):
            yield from _walk_macros(node.nodelist)


def check(source: str) -> MathCheckResult:
    r"""Validate and translate one wiki formula.

    Parameters
    ----------
    source : str
        Formula source, without math delimiters

    Returns
    -------
    MathCheckResult
        Check outcome; ``output`` is wrapped in a brace group

    Examples
    --------
        >>> check(r"x \in \R").output
        '{x \\in \\mathbb{R}}'
        >>> check(r"\frac{1}{2").status
        'E'

    """
    source = source.strip()
    if not source:
        return MathCheckResult(STATUS_SYNTAX_ERROR, details="empty formula")
    if not _braces_balanced(source):
        return MathCheckResult(STATUS_LEXING_ERROR, details="unbalanced braces")
    stray = _UNESCAPED_RE.search(source)
    if stray:
        return MathCheckResult(STATUS_LEXING_ERROR, details=f"unexpected {stray.group(1)!r}")

    try:
        nodes, _, _ = LatexWalker(source, tolerant_parsing=False).get_latex_nodes()
    except LatexWalkerError as e:
        return MathCheckResult(STATUS_SYNTAX_ERROR, details=str(e))

    macros = set(_walk_macros(nodes)) | set(_MACRO_RE.findall(source))
    forbidden = sorted(macros & FORBIDDEN_COMMANDS)
    if forbidden:
        return MathCheckResult(STATUS_UNKNOWN_FUNCTION, details=f"forbidden command \\{forbidden[0]}")

    required = frozenset(PACKAGE_COMMANDS[m] for m in macros if m in PACKAGE_COMMANDS)
    output = _MACRO_RE.sub(lambda m: DIALECT_MACROS.get(m.group(1), m.group(0)), source)
    return MathCheckResult(STATUS_OK, output=f"{{{output}}}", required_packages=required)
