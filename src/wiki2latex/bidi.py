#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wiki2latex/bidi.py
"""Directional run analysis for mixed left-to-right/right-to-left text.

Embedding levels are resolved with the rule pipeline of python-bidi
(``bidi.algorithm``), which covers explicit embeddings and overrides (X1-X10)
along with the weak, neutral and implicit rules of UAX #9. The Formatter only
needs logical runs, never a visual reordering, so the reordering phase (L1-L4)
is not run.

Directional isolates (LRI, RLI, FSI, PDI) predate the rule set python-bidi
implements. They are skipped when the paragraph level is chosen and resolved
as the matching embedding otherwise.

Examples
--------
    >>> analyzer = BidiAnalyzer()
    >>> [(r.direction, r.start, r.end) for r in analyzer.analyze("abc אבג", "ltr")]
    [('ltr', 0, 4), ('rtl', 4, 7)]

"""

from __future__ import annotations

import bisect
import unicodedata
from dataclasses import dataclass
from typing import Sequence

from bidi.algorithm import (
    explicit_embed_and_overrides,
    get_embedding_levels,
    get_empty_storage,
    resolve_implicit_levels,
    resolve_neutral_types,
    resolve_weak_types,
)

from wiki2latex.constants import Direction

_ISOLATE_INITIATORS = frozenset({"LRI", "RLI", "FSI"})

_LRE, _RLE, _PDF = "\u202a", "\u202b", "\u202c"


@dataclass(frozen=True)
class BidiRun:
    """A maximal span of text with a single resolved direction.

    Parameters
    ----------
    direction : {"ltr", "rtl"}
        Resolved direction of the span
    start : int
        Offset of the first character
    end : int
        Offset one past the last character

    """

    direction: Direction
    start: int
    end: int

    def __len__(self) -> int:
        """Return the number of characters in the run."""
        return self.end - self.start


class BidiParagraph:
    """Runs of one paragraph, searchable by character offset."""

    def __init__(self, text: str, runs: Sequence[BidiRun], level: int):
        self.text = text
        self.runs = list(runs)
        self.level = level
        self._starts = [run.start for run in self.runs]

    @property
    def direction(self) -> Direction:
        """Paragraph direction resolved from the first strong character."""
        return "rtl" if self.level % 2 else "ltr"

    def run_at(self, offset: int) -> BidiRun:
        """Return the run containing ``offset``.

        Raises
        ------
        IndexError
            If ``offset`` lies outside the text.

        """
        if offset < 0 or offset >= len(self.text):
            raise IndexError(f"offset {offset} outside text of length {len(self.text)}")
        return self.runs[bisect.bisect_right(self._starts, offset) - 1]


def bidi_class(char: str) -> str:
    """Return the bidi class of ``char``; unassigned code points count as L."""
    return unicodedata.bidirectional(char) or "L"


def first_strong_level(text: str, start: int = 0) -> int | None:
    """Return the level implied by the first strong character of ``text``.

    Characters inside directional isolates are skipped (rules P2/P3). The scan
    stops at a PDI closing an isolate opened before ``start``.

    Returns
    -------
    int or None
        0 for L, 1 for R or AL, None when no strong character is found

    """
    depth = 0
    for char in text[start:]:
        t = bidi_class(char)
        if t in _ISOLATE_INITIATORS:
            depth += 1
        elif t == "PDI":
            if depth == 0:
                return None
            depth -= 1
        elif depth == 0:
            if t == "L":
                return 0
            if t in ("R", "AL"):
                return 1
    return None


class BidiAnalyzer:
    """Partition text into directional runs.

    The paragraph level comes from the first strong character of the text
    outside any isolate. When there is none, the caller's base direction is
    used instead.
    """

    def analyze(self, text: str, base_direction: Direction = "ltr") -> list[BidiRun]:
        """Return the directional runs of ``text``.

        Parameters
        ----------
        text : str
            Paragraph text
        base_direction : {"ltr", "rtl"}
            Fallback paragraph direction when ``text`` has no strong character

        Returns
        -------
        list of BidiRun
            Contiguous runs covering ``text``; empty for empty input

        """
        return self.paragraph(text, base_direction).runs

    def paragraph(self, text: str, base_direction: Direction = "ltr") -> BidiParagraph:
        """Resolve ``text`` and wrap the result in a :class:`BidiParagraph`."""
        level = first_strong_level(text)
        if level is None:
            level = 1 if base_direction == "rtl" else 0
        if not text:
            return BidiParagraph(text, [], level)
        levels = self._resolve_levels(self._isolates_as_embeddings(text), level)
        return BidiParagraph(text, self._build_runs(levels), level)

    @staticmethod
    def _isolates_as_embeddings(text: str) -> str:
        """Replace isolate controls with the embedding controls of the same direction."""
        chars = []
        for i, char in enumerate(text):
            t = bidi_class(char)
            if t == "LRI":
                chars.append(_LRE)
            elif t == "RLI":
                chars.append(_RLE)
            elif t == "FSI":
                chars.append(_RLE if first_strong_level(text, i + 1) == 1 else _LRE)
            elif t == "PDI":
                chars.append(_PDF)
            else:
                chars.append(char)
        return "".join(chars)

    @staticmethod
    def _resolve_levels(text: str, level: int) -> list[int]:
        """Return one embedding level per character of ``text``.

        Characters removed by rule X9 take the level of the character before
        them, or the paragraph level at the start of the text.
        """
        storage = get_empty_storage()
        storage["base_level"] = level
        storage["base_dir"] = ("L", "R")[level]
        get_embedding_levels(text, storage)
        explicit_embed_and_overrides(storage, False)
        resolve_weak_types(storage, False)
        resolve_neutral_types(storage, False)
        resolve_implicit_levels(storage, False)

        resolved = storage["chars"]
        levels = []
        previous = level
        j = 0
        for char in text:
            if j < len(resolved) and resolved[j]["ch"] == char:
                previous = resolved[j]["level"]
                j += 1
            levels.append(previous)
        return levels

    @staticmethod
    def _build_runs(levels: Sequence[int]) -> list[BidiRun]:
        runs: list[BidiRun] = []
        start = 0
        current: Direction = "rtl" if levels[0] % 2 else "ltr"
        for i in range(1, len(levels)):
            direction: Direction = "rtl" if levels[i] % 2 else "ltr"
            if direction != current:
                runs.append(BidiRun(current, start, i))
                start, current = i, direction
        runs.append(BidiRun(current, start, len(levels)))
        return runs
