"""Grapheme-cluster-aware representation of a single line of text.

A line is stored as a list of fragments, one per extended grapheme cluster,
so that cursor addressing, deletion and display width all work in units the
user perceives as one character. Each fragment remembers how many terminal
columns it occupies and, for clusters that can't be shown verbatim, which
glyph to draw instead.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

import grapheme
from wcwidth import wcswidth, wcwidth

from .constants import EditorConstants


class GraphemeWidth(Enum):
    """Number of terminal columns a fragment occupies."""
    HALF = 1
    FULL = 2


@dataclass(frozen=True)
class TextFragment:
    content: str
    width: GraphemeWidth
    replacement: Optional[str] = None

    @property
    def glyph(self) -> str:
        """What to draw for this fragment."""
        return self.replacement if self.replacement is not None else self.content


def _measure(cluster: str) -> int:
    """Column width of a cluster; non-printable characters count as zero."""
    width = wcswidth(cluster)
    if width < 0:
        width = sum(max(wcwidth(ch), 0) for ch in cluster)
    return width


def _make_fragment(cluster: str) -> TextFragment:
    if cluster == " ":
        return TextFragment(cluster, GraphemeWidth.HALF)
    if cluster == "\t":
        return TextFragment(cluster, GraphemeWidth.HALF, EditorConstants.TAB_GLYPH)

    measured = _measure(cluster)
    if measured == 0:
        if len(cluster) == 1 and unicodedata.category(cluster) == "Cc":
            replacement = EditorConstants.CONTROL_GLYPH
        else:
            replacement = EditorConstants.ZERO_WIDTH_GLYPH
        return TextFragment(cluster, GraphemeWidth.HALF, replacement)
    if cluster.isspace():
        return TextFragment(cluster, GraphemeWidth.HALF, EditorConstants.WHITESPACE_GLYPH)

    width = GraphemeWidth.HALF if measured <= 1 else GraphemeWidth.FULL
    return TextFragment(cluster, width)


def _segment(text: str) -> list[TextFragment]:
    return [_make_fragment(cluster) for cluster in grapheme.graphemes(text)]


class GraphemeLine:
    """One line of text addressed by grapheme index."""

    def __init__(self, fragments: Optional[Iterable[TextFragment]] = None):
        self._fragments: list[TextFragment] = list(fragments or [])

    @classmethod
    def from_str(cls, text: str) -> "GraphemeLine":
        return cls(_segment(text))

    def __str__(self) -> str:
        return "".join(fragment.content for fragment in self._fragments)

    def __repr__(self) -> str:
        return f"GraphemeLine({str(self)!r})"

    def __len__(self) -> int:
        return len(self._fragments)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GraphemeLine):
            return NotImplemented
        return self._fragments == other._fragments

    @property
    def fragments(self) -> tuple[TextFragment, ...]:
        return tuple(self._fragments)

    def width(self) -> int:
        return self.width_until(len(self._fragments))

    def width_until(self, index: int) -> int:
        """Number of columns taken by the first ``index`` graphemes."""
        return sum(fragment.width.value for fragment in self._fragments[:max(index, 0)])

    def get(self, start: int, end: int) -> str:
        """Return the printable text for the half-open column range [start, end).

        A full-width fragment cut in half by either edge of the range is
        drawn as a single ellipsis so the result never overflows the range.
        """
        if start > end:
            return ""
        result = []
        current = 0
        for fragment in self._fragments:
            fragment_end = current + fragment.width.value
            if current >= end:
                break
            if fragment_end > start:
                if fragment_end > end or current < start:
                    result.append(EditorConstants.ELLIPSIS_GLYPH)
                else:
                    result.append(fragment.glyph)
            current = fragment_end
        return "".join(result)

    def _replace_text(self, text: str) -> None:
        # Edits can move cluster boundaries (e.g. a combining mark joins
        # the previous character), so every edit re-segments the whole line.
        self._fragments = _segment(text)

    def insert_char(self, ch: str, index: int) -> None:
        """Insert ``ch`` before the grapheme at ``index`` (append if past the end)."""
        index = max(index, 0)
        before = "".join(f.content for f in self._fragments[:index])
        after = "".join(f.content for f in self._fragments[index:])
        self._replace_text(before + ch + after)

    def append_char(self, ch: str) -> None:
        self.insert_char(ch, len(self._fragments))

    def delete(self, index: int) -> None:
        """Remove the grapheme at ``index``. Does nothing past the end."""
        if index < 0 or index >= len(self._fragments):
            return
        kept = self._fragments[:index] + self._fragments[index + 1:]
        self._replace_text("".join(f.content for f in kept))

    def delete_last(self) -> None:
        if self._fragments:
            self.delete(len(self._fragments) - 1)

    def append(self, other: "GraphemeLine") -> None:
        self._replace_text(str(self) + str(other))

    def split(self, at: int) -> "GraphemeLine":
        """Truncate this line at ``at`` and return the removed tail."""
        if at >= len(self._fragments):
            return GraphemeLine()
        at = max(at, 0)
        remainder = GraphemeLine(self._fragments[at:])
        self._fragments = self._fragments[:at]
        return remainder
