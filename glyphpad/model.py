from dataclasses import dataclass

from .constants import EditorConstants


@dataclass
class Location:
    """Logical cursor: a line index and a grapheme index within that line."""
    line_index: int = 0
    grapheme_index: int = 0


@dataclass
class Position:
    """Screen cell coordinates. Also used for the viewport's scroll offset."""
    row: int = 0
    col: int = 0

    def saturating_sub(self, other: "Position") -> "Position":
        return Position(row=max(self.row - other.row, 0), col=max(self.col - other.col, 0))


@dataclass(frozen=True)
class Size:
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class DocumentStatus:
    """Snapshot of the document state for the status bar."""
    current_line_index: int = 0
    total_line_count: int = 0
    filename: str = EditorConstants.NO_NAME
    modified: bool = False

    def modified_indicator(self) -> str:
        return EditorConstants.MODIFIED_INDICATOR if self.modified else ""

    def line_count_text(self) -> str:
        return f"{self.total_line_count} lines"

    def position_indicator(self) -> str:
        return f"{self.current_line_index + 1}/{self.total_line_count}"
