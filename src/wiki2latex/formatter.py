#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/formatter.py
r"""Bidi-aware LaTeX text emitter.

The :class:`Formatter` tracks the details of LaTeX syntax, in particular
paragraph mode versus LR mode: it makes sure a line break is never issued
before a paragraph has started and that paragraph or line breaks never land
inside the braces of a command argument.

It also tags every left-to-right and right-to-left run of text explicitly,
because XeTeX's built-in handling of mixed-direction text is only an
approximation of the Unicode Bidirectional Algorithm. Text and LaTeX
"decorations" are buffered until a break; at that point the buffer is split
into directional runs and written out with ``\setLTR``/``\setRTL`` at
paragraph starts, or ``\LRE{...}``/``\RLE{...}`` wrappers elsewhere.

Examples
--------
    >>> import io
    >>> out = io.StringIO()
    >>> fmt = Formatter(out)
    >>> fmt.write_decorated(r"\textbf", "bold")
    >>> fmt.write(" and plain")
    >>> fmt.flush()
    >>> out.getvalue()
    '\\textbf{bold} and plain\n'

"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import IO, Callable, Iterator, Optional, Union

from wiki2latex.bidi import BidiAnalyzer
from wiki2latex.constants import Direction
from wiki2latex.exceptions import DecorationBalanceError, FormatterClosedError
from wiki2latex.languages import LanguageDescriptor
from wiki2latex.utils.escape import tex_escape

logger = logging.getLogger(__name__)

DEFAULT_DELIMITERS = ("{", "}")

# Whitespace other than no-break spaces, which are kept and set as ~
_WHITESPACE_RE = re.compile(r"[^\S\xa0]+")
_LEADING_WHITESPACE_RE = re.compile(r"^[^\S\xa0]+")
# A run made only of these is kept inside a surrounding right-to-left run
_NUMERIC_RE = re.compile(r"[\d,.]+")
_LATIN_WORD = "[A-Za-z\u00c0-\u024f\u1e00-\u1eff]+"
_LATIN_RE = re.compile(f"{_LATIN_WORD}(?:[ -@\\[-`{{-~]+{_LATIN_WORD})*")

Content = Union[str, Callable[[], object], None]


class DecorationType(Enum):
    """Kinds of positioned, non-text output."""

    RAW = "raw"
    START_INLINE = "start-inline"
    END_INLINE = "end-inline"
    START_BLOCK = "start-block"
    END_BLOCK = "end-block"
    # end-of-text sentinel used while emitting runs
    END = "end"


@dataclass
class Decoration:
    """A LaTeX fragment tied to an offset in the pending text.

    Parameters
    ----------
    type : DecorationType
        Kind of decoration
    value : str
        LaTeX emitted verbatim (for inline decorations, before the opening
        delimiter)
    delimiters : tuple of str
        Opening and closing delimiter of an inline decoration
    pos : int
        Offset into the pending text, set when the decoration is recorded

    """

    type: DecorationType
    value: str = ""
    delimiters: tuple[str, str] = DEFAULT_DELIMITERS
    pos: int = 0

    @property
    def is_end(self) -> bool:
        """True for decorations that close an inline or block region."""
        return self.type in (DecorationType.END_INLINE, DecorationType.END_BLOCK)


class Formatter:
    r"""Buffered LaTeX writer with explicit direction handling.

    Parameters
    ----------
    stream : IO[str]
        Output sink
    direction : {"ltr", "rtl"}, default "ltr"
        Direction the document starts in
    analyzer : BidiAnalyzer, optional
        Run analyzer; a default one is created if omitted

    Attributes
    ----------
    context_dir : {"ltr", "rtl"}
        Direction XeLaTeX currently assumes. Only changed at safe points
        (``\setLTR``/``\setRTL``) or when a language switch changes it
        implicitly.
    paragraph_dir : {"ltr", "rtl"}
        Base direction used to analyze the next paragraph.
    in_list : int
        Nesting depth of list-like environments. While positive, the ambient
        direction is never changed, since that would move list labels to the
        other margin mid-list.
    in_toc : int
        Nesting depth of table-of-contents text, where URL detection is off.
    latin_switch : bool
        Wrap Latin text in ``{\latinfont ...}`` because the current font
        lacks Latin glyphs.

    """

    def __init__(self, stream: IO[str], direction: Direction = "ltr", analyzer: Optional[BidiAnalyzer] = None):
        self.stream = stream
        self.analyzer = analyzer or BidiAnalyzer()
        self.buffer: list[str] = []
        self.decorations: list[Decoration] = []
        # open inline decorations
        self.stack: list[Decoration] = []
        self.pos = 0
        self.new_env = self.new_line = self.new_para = self.start_para = True
        self.in_list = 0
        self.in_toc = 0
        self.latin_switch = False
        self.context_dir: Direction = direction
        self.paragraph_dir: Direction = direction
        self.closed = False

    # ------------------------------------------------------------------
    # Output

    def _write_raw(self, text: str) -> None:
        if self.closed:
            raise FormatterClosedError("Formatter has already been flushed")
        if text:
            self.stream.write(text)

    def _escape(self, text: str) -> str:
        detect_urls = self.in_toc == 0
        if not self.latin_switch:
            return tex_escape(text, detect_urls=detect_urls)
        out = []
        last = 0
        for match in _LATIN_RE.finditer(text):
            out.append(tex_escape(text[last : match.start()], detect_urls=detect_urls))
            out.append(f"{{\\latinfont {tex_escape(match.group(0), detect_urls=detect_urls)}}}")
            last = match.end()
        out.append(tex_escape(text[last:], detect_urls=detect_urls))
        return "".join(out)

    def _emit_decoration(self, d: Decoration, invert: bool = False, update_stack: bool = False) -> None:
        if d.type in (DecorationType.START_INLINE, DecorationType.END_INLINE):
            is_start = (d.type is DecorationType.START_INLINE) != invert
            if is_start:
                if update_stack:
                    self.stack.append(d)
                self._write_raw(d.value + d.delimiters[0])
            else:
                if update_stack:
                    if not self.stack or self.stack[-1].value != d.value:
                        raise DecorationBalanceError(
                            f"Closing {d.value!r} but innermost open decoration is "
                            f"{self.stack[-1].value if self.stack else None!r}"
                        )
                    self.stack.pop()
                self._write_raw(d.delimiters[1])
        elif d.type in (DecorationType.RAW, DecorationType.START_BLOCK, DecorationType.END_BLOCK):
            self._write_raw(d.value)
        else:
            raise DecorationBalanceError(f"Unexpected decoration {d.type.value!r} in output")

    def _open_stack(self) -> None:
        for d in self.stack:
            self._emit_decoration(d)

    def _close_stack(self) -> None:
        for d in reversed(self.stack):
            self._emit_decoration(d, invert=True)

    def _write_runs(self) -> None:
        """Emit the buffered text and decorations as directional runs."""
        text = "".join(self.buffer)
        # inline decorations opened at the very end are carried over unemitted
        carried: list[Decoration] = []
        while (
            self.decorations
            and self.decorations[-1].type is DecorationType.START_INLINE
            and self.decorations[-1].pos == self.pos
        ):
            carried.insert(0, self.decorations.pop())
        if text or self.decorations:
            self._emit_runs(text)
        self.stack.extend(carried)
        self.buffer.clear()
        self.decorations.clear()
        self.pos = 0

    def _emit_runs(self, text: str) -> None:
        self.decorations.append(Decoration(DecorationType.END, pos=self.pos))
        paragraph = self.analyzer.paragraph(text, self.paragraph_dir)

        pos = j = 0
        while pos < len(text):
            run = paragraph.run_at(pos)
            dir_change = False
            if run.direction != self.context_dir:
                if self.start_para and self.in_list == 0 and run.direction == self.paragraph_dir:
                    # paragraph start: safe to change the ambient direction
                    self._write_raw(f"\\set{run.direction.upper()}\n")
                    self.context_dir = run.direction
                else:
                    self._write_raw("\\RLE{" if run.direction == "rtl" else "\\LRE{")
                    dir_change = True
                    if run.direction == "ltr":
                        # drop script-specific features for interposed ltr text
                        self._write_raw("\\LTRfont ")
            self.start_para = False
            self._open_stack()

            run_end = run.end
            if run.direction == "rtl" and self.context_dir == "rtl":
                # keep numbers inside an rtl run so they are not reordered
                while run_end < len(text):
                    following = paragraph.run_at(run_end)
                    if following.direction == "rtl" or _NUMERIC_RE.fullmatch(text[run_end : following.end]):
                        run_end = following.end
                    else:
                        break

            while True:
                d = self.decorations[j]
                if not (d.pos < run_end or (d.pos == run_end and d.is_end)):
                    break
                self._write_raw(self._escape(text[pos : d.pos]))
                pos = d.pos
                self._emit_decoration(d, update_stack=True)
                j += 1
            self._write_raw(self._escape(text[pos:run_end]))
            pos = run_end

            self._close_stack()
            if dir_change:
                self._write_raw("}")

        # decorations after the last character, excluding the sentinel
        if j < len(self.decorations) - 1:
            self._open_stack()
            for d in self.decorations[j:-1]:
                self._emit_decoration(d, update_stack=True)
            self._close_stack()

    # ------------------------------------------------------------------
    # Breaks

    def reset_sol(self) -> None:
        """Treat the current point as the start of a line, paragraph and environment.

        Used after decorations that emit no text, so following whitespace is
        stripped and breaks are not doubled.
        """
        self.new_env = self.new_line = self.new_para = True

    def dir_break(self) -> None:
        """Flush pending runs; the direction may change after this point."""
        self._write_runs()

    def env_break(self) -> None:
        """Make this a point where an environment may begin or end."""
        if self.new_env:
            return
        self.dir_break()
        self._write_raw("\n")
        self.new_env = True

    def paragraph_break(self) -> None:
        """End the current paragraph."""
        if self.new_para:
            return
        self.env_break()
        self._write_raw("\n")
        self.new_para = self.new_line = True
        self.dir_break()
        self.start_para = True

    def line_break(self) -> None:
        """Add a hard line break within the current paragraph."""
        if self.new_line:
            return
        self.env_break()
        self._write_raw("\\\\\n")
        self.new_line = True

    # ------------------------------------------------------------------
    # Content

    def _check_open(self) -> None:
        if self.closed:
            raise FormatterClosedError("Formatter has already been flushed")

    def _add_decoration(self, d: Decoration) -> None:
        self._check_open()
        d.pos = self.pos
        self.decorations.append(d)
        self.new_env = self.new_line = self.new_para = False

    def write(self, text: str) -> None:
        """Add literal text.

        Leading whitespace after a break is dropped, and whitespace runs are
        collapsed to a single space.
        """
        self._check_open()
        if self.new_env or self.new_line or self.new_para:
            text = _LEADING_WHITESPACE_RE.sub("", text)
            if not text:
                return
            self.new_env = self.new_line = self.new_para = False
        text = _WHITESPACE_RE.sub(" ", text)
        self.buffer.append(text)
        self.pos += len(text)

    def write_decorated(
        self,
        value: Union[str, Decoration],
        content: Content = None,
        delimiters: Optional[tuple[str, str]] = None,
    ) -> None:
        r"""Add a decoration, optionally wrapped around some content.

        Parameters
        ----------
        value : str or Decoration
            LaTeX fragment. Without ``content`` a string is recorded as a raw
            decoration; a :class:`Decoration` is recorded as given.
        content : str or callable, optional
            Text to wrap, or a callable producing it through nested ``write``
            calls. The inline decoration is closed even if the callable
            raises.
        delimiters : tuple of str, optional
            Opening and closing delimiters, ``{`` and ``}`` by default

        Examples
        --------
            >>> fmt.write_decorated(r"\emph", lambda: fmt.write("text"))  # doctest: +SKIP

        """
        if content is None:
            if isinstance(value, Decoration):
                self._add_decoration(value)
            else:
                self._add_decoration(Decoration(DecorationType.RAW, value))
            return
        command = value.value if isinstance(value, Decoration) else value
        delimiters = delimiters or DEFAULT_DELIMITERS
        self._add_decoration(Decoration(DecorationType.START_INLINE, command, delimiters))
        try:
            if callable(content):
                content = content()
            if isinstance(content, str):
                self.write(content)
        finally:
            self._add_decoration(Decoration(DecorationType.END_INLINE, command, delimiters))

    @contextmanager
    def no_stack(self) -> Iterator[None]:
        """Run a block with no inline decorations open.

        Structural commands emitted in the block are not wrapped in inline
        formatting left open by the caller. The block must leave no inline
        decoration open.

        Raises
        ------
        DecorationBalanceError
            If the block leaves an inline decoration open.

        """
        self.dir_break()
        saved, self.stack = self.stack, []
        try:
            yield
            self.dir_break()
            if self.stack:
                raise DecorationBalanceError(
                    f"Unclosed decorations in isolated scope: {[d.value for d in self.stack]}"
                )
        finally:
            self.stack = saved

    def begin(self, env: str, options: Optional[str] = None) -> None:
        """Begin a LaTeX environment."""
        self.env_break()
        with self.no_stack():
            self._add_decoration(
                Decoration(DecorationType.START_BLOCK, f"\\begin{{{env}}}" + (f"[{options}]" if options else ""))
            )
            self.env_break()
        self.reset_sol()

    def end(self, env: str) -> None:
        """End a LaTeX environment."""
        self.env_break()
        with self.no_stack():
            self._add_decoration(Decoration(DecorationType.END_BLOCK, f"\\end{{{env}}}"))
            self.env_break()
        self.new_line = self.new_para = True

    # ------------------------------------------------------------------
    # Direction and fonts

    def switch_dir(self, direction: Direction, implicit: bool = False) -> None:
        """Change direction after flushing pending runs.

        Parameters
        ----------
        direction : {"ltr", "rtl"}
            New direction
        implicit : bool, default False
            XeLaTeX has already switched (for example through a language
            command), so only record it as the ambient direction. Otherwise
            use it as the base direction of the following paragraphs.

        """
        self.dir_break()
        if implicit:
            self.context_dir = direction
        else:
            self.paragraph_dir = direction

    def set_coverage(self, descriptor: LanguageDescriptor) -> None:
        """Switch Latin font wrapping on when the language's font lacks Latin glyphs."""
        self.dir_break()
        self.latin_switch = not descriptor.latin_coverage

    def flush(self) -> None:
        """Write out everything pending and close the formatter.

        Raises
        ------
        DecorationBalanceError
            If an inline decoration is still open.

        """
        self.env_break()
        self.dir_break()
        if self.stack:
            raise DecorationBalanceError(f"Unclosed decorations at flush: {[d.value for d in self.stack]}")
        self.stream.flush()
        self.closed = True
        logger.debug("Formatter flushed")
