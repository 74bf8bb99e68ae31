import pytest

from glyphpad.model import Size


class FakeTerminal:
    """Records painted rows instead of writing to a real terminal."""

    def __init__(self, width=40, height=10):
        self._size = Size(width, height)
        self.rows = {}
        self.inverted_rows = set()
        self.paint_calls = []
        self.cursor = None

    def size(self):
        return self._size

    def paint(self, row, text):
        self.rows[row] = text
        self.inverted_rows.discard(row)
        self.paint_calls.append((row, text))

    def paint_inverted(self, row, text):
        self.rows[row] = text
        self.inverted_rows.add(row)
        self.paint_calls.append((row, text))

    def hide_cursor(self):
        pass

    def move_cursor(self, position):
        self.cursor = position

    def get_key(self, timeout=None):
        return None


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def make_terminal():
    return FakeTerminal
