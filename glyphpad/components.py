"""Screen components sharing one draw/resize protocol.

Every component paints whole rows through the terminal's ``paint`` contract
and only repaints when its dirty flag is set, so the editor loop can call
``render`` on all of them after every event.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .commands import Edit, EditKind
from .constants import EditorConstants
from .line import GraphemeLine
from .model import DocumentStatus, Size


class UIComponent(ABC):
    """Base class for anything drawn on screen."""

    def __init__(self, terminal=None):
        self.terminal = terminal
        self.size = Size()
        self._needs_redraw = True

    def mark_redraw(self, redraw: bool = True) -> None:
        self._needs_redraw = redraw

    def needs_redraw(self) -> bool:
        return self._needs_redraw

    def set_size(self, size: Size) -> None:
        self.size = size

    def resize(self, size: Size) -> None:
        """Adopt a new size and force a full repaint."""
        self.set_size(size)
        self.mark_redraw(True)

    def render(self, origin_row: int) -> None:
        if self.needs_redraw():
            self.draw(origin_row)
            self.mark_redraw(False)

    @abstractmethod
    def draw(self, origin_row: int) -> None:
        """Paint the component starting at screen row ``origin_row``."""


class StatusBar(UIComponent):
    """One reverse-video row describing the document."""

    def __init__(self, terminal=None):
        super().__init__(terminal)
        self.current_status = DocumentStatus()

    def update_status(self, status: DocumentStatus) -> None:
        if status != self.current_status:
            self.current_status = status
            self.mark_redraw(True)

    def text(self) -> str:
        status = self.current_status
        beginning = f"{status.filename} - {status.line_count_text()} {status.modified_indicator()}"
        position = status.position_indicator()
        remainder = max(self.size.width - len(beginning), 0)
        line = f"{beginning}{position:>{remainder}}"
        # Rather blank than half a status line
        return line if len(line) <= self.size.width else ""

    def draw(self, origin_row: int) -> None:
        self.terminal.paint_inverted(origin_row, self.text())


class MessageBar(UIComponent):
    """Bottom row showing a transient message."""

    def __init__(self, terminal=None, clock: Callable[[], float] = time.monotonic,
                 duration: float = EditorConstants.MESSAGE_DURATION):
        super().__init__(terminal)
        self._clock = clock
        self.duration = duration
        self.message = ""
        self._shown_at = clock()
        self._cleared_after_expiry = False

    def update_message(self, message: str) -> None:
        self.message = message
        self._shown_at = self._clock()
        self._cleared_after_expiry = False
        self.mark_redraw(True)

    def clear(self) -> None:
        self.update_message("")

    def is_expired(self) -> bool:
        return self._clock() - self._shown_at > self.duration

    def time_remaining(self) -> Optional[float]:
        """Seconds until the current message should disappear, if one is showing."""
        if self._cleared_after_expiry or not self.message:
            return None
        return max(self.duration - (self._clock() - self._shown_at), 0.0)

    def needs_redraw(self) -> bool:
        return self._needs_redraw or (not self._cleared_after_expiry and self.is_expired())

    def text(self) -> str:
        return "" if self.is_expired() else self.message

    def draw(self, origin_row: int) -> None:
        if self.is_expired():
            self._cleared_after_expiry = True
        self.terminal.paint(origin_row, self.text())


class CommandBar(UIComponent):
    """Single-line prompt, used for asking the file name on save."""

    def __init__(self, terminal=None, prompt: str = ""):
        super().__init__(terminal)
        self.prompt = prompt
        self._value = GraphemeLine()

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt
        self.mark_redraw(True)

    def handle_edit(self, edit: Edit) -> None:
        if edit.kind == EditKind.INSERT_CHAR and edit.char:
            self._value.append_char(edit.char)
        elif edit.kind == EditKind.DELETE_BACKWARD:
            self._value.delete_last()
        else:
            return
        self.mark_redraw(True)

    def value(self) -> str:
        return str(self._value)

    def clear_value(self) -> None:
        self._value = GraphemeLine()
        self.mark_redraw(True)

    def caret_col(self) -> int:
        return min(len(self.prompt) + self._value.width(), max(self.size.width - 1, 0))

    def text(self) -> str:
        # Keep the end of a long value visible
        value_width = max(self.size.width - len(self.prompt), 0)
        value_end = self._value.width()
        value_start = max(value_end - value_width, 0)
        line = self.prompt + self._value.get(value_start, value_end)
        return line if len(line) <= self.size.width else ""

    def draw(self, origin_row: int) -> None:
        self.terminal.paint(origin_row, self.text())
