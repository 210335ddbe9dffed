#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/utils/escape.py
"""TeX escaping utilities.

This module converts plain text (with HTML whitespace semantics) into
strings that XeLaTeX typesets literally, and escapes the narrower character
sets allowed inside URL and file name arguments.

"""

from __future__ import annotations

import re

from wiki2latex.constants import URL_PATTERN

# TeX special characters and their literal forms
SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "#": r"\#",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_SPECIALS_RE = re.compile("|".join(re.escape(c) for c in SPECIAL_CHARS))
_OPEN_QUOTE_RE = re.compile(r'(^|\s|\()"(\w)')
_CLOSE_QUOTE_RE = re.compile(r'(\w|[.,])"(\s|[.,\u2014)]|$)')
_APOSTROPHE_RE = re.compile(r"(s')|(\w's)")
_MINUS_RE = re.compile(r"(^|\W)-([0-9.]+)")


def escape_specials(text: str) -> str:
    r"""Escape the ten TeX special characters in a single pass.

    Examples
    --------
        >>> escape_specials("50% of $x_1")
        '50\\% of \\$x\\_1'

    """
    return _SPECIALS_RE.sub(lambda m: SPECIAL_CHARS[m.group(0)], text)


def tex_escape(text: str, detect_urls: bool = True) -> str:
    r"""Escape text for TeX, with typographic touch-ups.

    Parameters
    ----------
    text : str
        Plain text to escape
    detect_urls : bool, default True
        Wrap URLs in ``\nolinkurl`` so they may break across lines. Disabled
        for table-of-contents text, where the command is fragile.

    Returns
    -------
    str
        Escaped text

    Notes
    -----
    Besides escaping special characters this normalizes newlines, turns
    no-break spaces into ``~``, curls straight quotes and sets a hyphen
    in front of a number as a math minus sign.

    Examples
    --------
        >>> tex_escape("see http://example.com/a_b")
        'see \\nolinkurl{http://example.com/a\\_b}'

    """
    if detect_urls:
        # re.split with one capture group puts the URLs at odd indices
        out = []
        for i, piece in enumerate(URL_PATTERN.split(text)):
            escaped = tex_escape(piece, detect_urls=False)
            out.append(f"\\nolinkurl{{{escaped}}}" if i % 2 and escaped else escaped)
        return "".join(out)

    text = escape_specials(text)
    text = re.sub(r"\r\n?", "\n", text)
    text = re.sub(r"\n\n+", "\n", text)
    text = re.sub(r"^\n+", "", text)
    text = re.sub(r"\n$", "", text)
    text = text.replace("\xa0", "~")
    text = _OPEN_QUOTE_RE.sub("\\1\u201c\\2", text)
    text = _CLOSE_QUOTE_RE.sub("\\1\u201d\\2", text)
    text = _APOSTROPHE_RE.sub(lambda m: m.group(0).replace("'", "\u2019", 1), text, count=1)
    text = _MINUS_RE.sub("\\1$-$\\2", text)
    return text


def escape_url(url: str) -> str:
    r"""Escape the characters ``\href`` cannot take literally."""
    return re.sub(r"([#%\\])", r"\\\1", url)


def escape_filename(filename: str) -> str:
    r"""Escape the characters ``\includegraphics`` cannot take literally."""
    return re.sub(r"([%\\_])", r"\\\1", filename)
