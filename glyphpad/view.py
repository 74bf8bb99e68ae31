"""Viewport: cursor movement, scrolling and rendering of the document."""

from __future__ import annotations

import logging
from typing import Optional

from .buffer import Buffer
from .commands import Direction, Edit, EditKind, Move
from .components import UIComponent
from .constants import EditorConstants
from .model import DocumentStatus, Location, Position, Size
from .version import get_version

logger = logging.getLogger(__name__)


def build_welcome_message(width: int) -> str:
    """Welcome banner for an empty document, fitted to ``width`` columns."""
    if width <= 0:
        return ""
    message = f"{EditorConstants.NAME} editor -- version {get_version()}"
    remaining_width = width - 1
    if remaining_width < len(message):
        return EditorConstants.FILLER_GLYPH
    return f"{EditorConstants.FILLER_GLYPH}{message:^{remaining_width}}"


class Viewport(UIComponent):
    """Owns the buffer and the cursor, and maps the cursor onto the screen.

    The cursor is a logical Location (line, grapheme). Its screen Position
    takes display widths into account, and the scroll offset is adjusted
    after every move so that Position is always inside the visible area.
    """

    def __init__(self, terminal=None, buffer: Optional[Buffer] = None, size: Size = Size()):
        super().__init__(terminal)
        self.buffer = buffer or Buffer()
        self.size = size
        self.location = Location()
        self.scroll_offset = Position()

    # --- File handling ---

    def load(self, filename: str) -> None:
        """Replace the document with the contents of ``filename``.

        Raises:
            DocumentIOError: The file could not be read; the current
                document is left untouched.
        """
        self.buffer = Buffer.load(filename)
        self.location = Location()
        self.scroll_offset = Position()
        self.mark_redraw(True)

    def is_file_loaded(self) -> bool:
        return self.buffer.is_file_loaded()

    def save(self) -> None:
        self.buffer.save()

    def save_as(self, filename: str) -> None:
        self.buffer.save_as(filename)

    def status(self) -> DocumentStatus:
        return DocumentStatus(
            current_line_index=self.location.line_index,
            total_line_count=self.buffer.height(),
            filename=str(self.buffer.file_info),
            modified=self.buffer.modified,
        )

    # --- Geometry ---

    def set_size(self, size: Size) -> None:
        self.size = size
        self.scroll_location_into_view()

    def cursor_position(self) -> Position:
        """Document coordinates of the cursor, in columns and rows."""
        line_index = self.location.line_index
        col = 0
        if 0 <= line_index < self.buffer.height():
            col = self.buffer.lines[line_index].width_until(self.location.grapheme_index)
        return Position(row=line_index, col=col)

    def caret_position(self) -> Position:
        """Screen coordinates of the cursor relative to the viewport."""
        return self.cursor_position().saturating_sub(self.scroll_offset)

    def _scroll_vertically(self, to: int) -> None:
        height = self.size.height
        if to < self.scroll_offset.row:
            self.scroll_offset.row = to
        elif to >= self.scroll_offset.row + height:
            self.scroll_offset.row = max(to - height + 1, 0)
        else:
            return
        self.mark_redraw(True)

    def _scroll_horizontally(self, to: int) -> None:
        width = self.size.width
        if to < self.scroll_offset.col:
            self.scroll_offset.col = to
        elif to >= self.scroll_offset.col + width:
            self.scroll_offset.col = max(to - width + 1, 0)
        else:
            return
        self.mark_redraw(True)

    def scroll_location_into_view(self) -> None:
        position = self.cursor_position()
        self._scroll_horizontally(position.col)
        self._scroll_vertically(position.row)

    # --- Cursor movement ---

    def handle_move(self, move: Move) -> None:
        self.move(move.direction)

    def move(self, direction: Direction) -> None:
        page_size = max(self.size.height - 1, 0)
        if direction == Direction.UP:
            self._move_up(1)
        elif direction == Direction.DOWN:
            self._move_down(1)
        elif direction == Direction.PAGE_UP:
            self._move_up(page_size)
        elif direction == Direction.PAGE_DOWN:
            self._move_down(page_size)
        elif direction == Direction.LEFT:
            self._move_left()
        elif direction == Direction.RIGHT:
            self._move_right()
        elif direction == Direction.HOME:
            self._move_to_start_of_line()
        elif direction == Direction.END:
            self._move_to_end_of_line()
        self.scroll_location_into_view()

    def _move_up(self, step: int) -> None:
        self.location.line_index = max(self.location.line_index - step, 0)
        self._snap_to_valid_grapheme()

    def _move_down(self, step: int) -> None:
        self.location.line_index += step
        self._snap_to_valid_grapheme()
        self._snap_to_valid_line()

    def _move_left(self) -> None:
        if self.location.grapheme_index > 0:
            self.location.grapheme_index -= 1
        elif self.location.line_index > 0:
            self._move_up(1)
            self._move_to_end_of_line()

    def _move_right(self) -> None:
        line_length = self.buffer.line_length(self.location.line_index)
        if self.location.grapheme_index < line_length:
            self.location.grapheme_index += 1
        else:
            self._move_to_start_of_line()
            self._move_down(1)

    def _move_to_start_of_line(self) -> None:
        self.location.grapheme_index = 0

    def _move_to_end_of_line(self) -> None:
        self.location.grapheme_index = self.buffer.line_length(self.location.line_index)

    def _snap_to_valid_grapheme(self) -> None:
        line_length = self.buffer.line_length(self.location.line_index)
        self.location.grapheme_index = min(max(self.location.grapheme_index, 0), line_length)

    def _snap_to_valid_line(self) -> None:
        self.location.line_index = min(self.location.line_index, self.buffer.height())

    def restore_location(self, location: Location) -> None:
        """Put the cursor at ``location``, clamped to the document."""
        self.location = Location(max(location.line_index, 0), location.grapheme_index)
        self._snap_to_valid_line()
        self._snap_to_valid_grapheme()
        self.scroll_location_into_view()

    # --- Editing ---

    def handle_edit(self, edit: Edit) -> None:
        if edit.kind == EditKind.INSERT_CHAR:
            if edit.char:
                self.insert_char(edit.char)
        elif edit.kind == EditKind.INSERT_NEWLINE:
            self.insert_new_line()
        elif edit.kind == EditKind.DELETE_FORWARD:
            self.delete_forward()
        elif edit.kind == EditKind.DELETE_BACKWARD:
            self.delete_backward()

    def insert_char(self, ch: str) -> None:
        line_index = self.location.line_index
        old_length = self.buffer.line_length(line_index)
        if not self.buffer.insert_char(ch, self.location):
            return
        new_length = self.buffer.line_length(line_index)
        # A combining mark merges into the previous grapheme: the cursor stays
        if new_length - old_length > 0:
            self._move_right()
        self._edited()

    def insert_new_line(self) -> None:
        if not self.buffer.insert_new_line(self.location):
            return
        self._move_right()
        self._edited()

    def delete_forward(self) -> None:
        if self.buffer.delete(self.location):
            self._edited()

    def delete_backward(self) -> None:
        if self.location.line_index == 0 and self.location.grapheme_index == 0:
            return
        self._move_left()
        if not self.buffer.delete(self.location):
            # The cursor still moved
            self.scroll_location_into_view()
            return
        self._edited()

    def _edited(self) -> None:
        self.scroll_location_into_view()
        self.mark_redraw(True)

    # --- Rendering ---

    def visible_rows(self) -> list[str]:
        """Text of every row currently inside the viewport, top to bottom."""
        width, height = self.size.width, self.size.height
        top_third = height // 3
        left = self.scroll_offset.col
        right = left + width
        rows = []
        for row in range(height):
            line_index = self.scroll_offset.row + row
            if line_index < self.buffer.height():
                rows.append(self.buffer.lines[line_index].get(left, right))
            elif row == top_third and self.buffer.is_empty():
                rows.append(build_welcome_message(width))
            else:
                rows.append(EditorConstants.FILLER_GLYPH)
        return rows

    def draw(self, origin_row: int) -> None:
        for row, text in enumerate(self.visible_rows()):
            self.terminal.paint(origin_row + row, text)
