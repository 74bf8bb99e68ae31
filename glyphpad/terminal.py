"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from .model import Position, Size


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # Justification: curtsies may fail to initialize without a
                # real tty (CI, pipes). Run without input instead of crashing.
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Justification: teardown should never crash the app. Any
                # failure to exit raw mode is non-fatal at this point.
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def paint(self, row: int, text: str):
        """Clear row ``row`` and write ``text`` from its first column."""
        print(self.term.move(row, 0) + self.term.clear_eol + text, end='')

    def paint_inverted(self, row: int, text: str):
        """Like paint, in reverse video across the full width."""
        padded = self.term.ljust(text, self.term.width)
        print(self.term.move(row, 0) + self.term.reverse + padded + self.term.normal, end='')

    def hide_cursor(self):
        print(self.term.hide_cursor, end='')

    def move_cursor(self, position: Position):
        """Show the cursor at ``position`` and flush pending output."""
        print(self.term.move(position.row, position.col) + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if nothing arrived in time.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    def size(self) -> Size:
        return Size(width=self.term.width, height=self.term.height)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
