from glyphpad.buffer import Buffer
from glyphpad.commands import Direction, Move
from glyphpad.model import Location, Size
from glyphpad.view import Viewport


def make_view(text, width=40, height=10):
    return Viewport(buffer=Buffer.from_text(text), size=Size(width, height))


def test_right_moves_one_grapheme():
    v = make_view("éx")
    v.move(Direction.RIGHT)
    assert v.location == Location(0, 1)
    # Column follows display width, not code points
    assert v.cursor_position().col == 1


def test_right_at_end_of_line_wraps_to_next_line():
    v = make_view("ab\ncd")
    v.location = Location(0, 2)
    v.move(Direction.RIGHT)
    assert v.location == Location(1, 0)


def test_left_at_start_of_line_wraps_to_end_of_previous():
    v = make_view("abc\nd")
    v.location = Location(1, 0)
    v.move(Direction.LEFT)
    assert v.location == Location(0, 3)


def test_left_at_document_start_stays():
    v = make_view("abc")
    v.move(Direction.LEFT)
    assert v.location == Location(0, 0)


def test_up_at_first_line_stays():
    v = make_view("abc\ndef")
    v.location = Location(0, 2)
    v.move(Direction.UP)
    assert v.location == Location(0, 2)


def test_up_clamps_to_shorter_line():
    v = make_view("ab\nlonger line")
    v.location = Location(1, 8)
    v.move(Direction.UP)
    assert v.location == Location(0, 2)


def test_down_from_last_line_reaches_virtual_line():
    v = make_view("ab\ncdef")
    v.location = Location(1, 3)
    v.move(Direction.DOWN)
    assert v.location == Location(2, 0)


def test_down_saturates_at_virtual_line():
    """Moving down from the last reachable line leaves the cursor in place."""
    v = make_view("ab\ncdef")
    v.location = Location(2, 0)
    v.move(Direction.DOWN)
    assert v.location == Location(2, 0)


def test_no_sticky_column():
    """Vertical moves clamp to the destination line and forget the old column."""
    v = make_view("long line here\nab\nanother long line")
    v.location = Location(0, 10)
    v.move(Direction.DOWN)
    assert v.location == Location(1, 2)
    v.move(Direction.DOWN)
    assert v.location == Location(2, 2)


def test_home_and_end():
    v = make_view("hello 世界")
    v.move(Direction.END)
    assert v.location == Location(0, 8)
    assert v.cursor_position().col == 10
    v.move(Direction.HOME)
    assert v.location == Location(0, 0)


def test_page_down_and_up_move_by_height_minus_one():
    v = make_view("\n".join(f"Line {i}" for i in range(20)), height=5)
    v.move(Direction.PAGE_DOWN)
    assert v.location.line_index == 4
    v.move(Direction.PAGE_DOWN)
    assert v.location.line_index == 8
    v.move(Direction.PAGE_UP)
    assert v.location.line_index == 4


def test_page_down_stops_at_virtual_line():
    v = make_view("a\nb\nc", height=10)
    v.move(Direction.PAGE_DOWN)
    assert v.location == Location(3, 0)


def test_handle_move_dispatches_direction():
    v = make_view("abc")
    v.handle_move(Move(Direction.END))
    assert v.location == Location(0, 3)


def test_moves_in_empty_buffer_stay_at_origin():
    v = make_view("")
    for direction in Direction:
        v.move(direction)
        assert v.location == Location(0, 0)


def test_restore_location_is_clamped():
    v = make_view("abc\nde")
    v.restore_location(Location(7, 9))
    assert v.location == Location(2, 0)
    v.restore_location(Location(1, 9))
    assert v.location == Location(1, 2)
