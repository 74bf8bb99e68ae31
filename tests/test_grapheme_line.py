from glyphpad.constants import EditorConstants
from glyphpad.line import GraphemeLine, GraphemeWidth


def test_combining_mark_is_one_grapheme():
    """A base letter followed by a combining mark is a single grapheme."""
    assert len(GraphemeLine.from_str("e\u0301")) == 1
    assert len(GraphemeLine.from_str("Cafe\u0301")) == 4
    assert len(GraphemeLine.from_str("a\u0308\u0304")) == 1


def test_length_counts_graphemes_not_code_points():
    line = GraphemeLine.from_str("n\u0303o\u0303")
    assert len("n\u0303o\u0303") == 4
    assert len(line) == 2


def test_get_full_range_reproduces_narrow_text():
    text = "Hello,World!"
    line = GraphemeLine.from_str(text)
    assert line.get(0, len(line)) == text


def test_get_partial_range():
    line = GraphemeLine.from_str("abcdefgh")
    assert line.get(2, 5) == "cde"
    assert line.get(6, 100) == "gh"
    assert line.get(20, 30) == ""


def test_get_reversed_range_is_empty():
    line = GraphemeLine.from_str("abcdef")
    assert line.get(5, 3) == ""


def test_wide_glyph_straddling_end_is_ellipsis():
    """A full-width glyph cut off by the end of the range becomes an ellipsis."""
    line = GraphemeLine.from_str("a世b")
    assert line.get(0, 2) == "a" + EditorConstants.ELLIPSIS_GLYPH
    assert line.get(0, 4) == "a世b"


def test_wide_glyph_straddling_start_is_ellipsis():
    line = GraphemeLine.from_str("a世b")
    assert line.get(2, 4) == EditorConstants.ELLIPSIS_GLYPH + "b"


def test_wide_glyph_widths():
    line = GraphemeLine.from_str("a世界b")
    widths = [fragment.width for fragment in line.fragments]
    assert widths == [GraphemeWidth.HALF, GraphemeWidth.FULL, GraphemeWidth.FULL, GraphemeWidth.HALF]
    assert line.width_until(0) == 0
    assert line.width_until(2) == 3
    assert line.width_until(3) == 5
    assert line.width() == 6


def test_width_until_past_end_is_clamped():
    line = GraphemeLine.from_str("ab世")
    assert line.width_until(10) == 4


def test_space_is_shown_verbatim():
    fragment = GraphemeLine.from_str(" ").fragments[0]
    assert fragment.replacement is None
    assert fragment.width == GraphemeWidth.HALF


def test_tab_is_replaced_by_single_column_glyph():
    line = GraphemeLine.from_str("a\tb")
    assert len(line) == 3
    tab = line.fragments[1]
    assert tab.replacement == EditorConstants.TAB_GLYPH
    assert tab.width == GraphemeWidth.HALF
    assert line.width() == 3
    # Replacements are render-only
    assert str(line) == "a\tb"


def test_control_character_gets_control_marker():
    line = GraphemeLine.from_str("a\x01b")
    assert line.fragments[1].replacement == EditorConstants.CONTROL_GLYPH
    assert line.get(0, 3) == "a" + EditorConstants.CONTROL_GLYPH + "b"


def test_zero_width_character_gets_zero_width_marker():
    line = GraphemeLine.from_str("\u200b")
    assert line.fragments[0].replacement == EditorConstants.ZERO_WIDTH_GLYPH
    assert line.fragments[0].width == GraphemeWidth.HALF


def test_lone_combining_mark_gets_zero_width_marker():
    line = GraphemeLine.from_str("\u0301")
    assert line.fragments[0].replacement == EditorConstants.ZERO_WIDTH_GLYPH


def test_other_whitespace_gets_space_marker():
    for ch in ("\u00a0", "\u3000"):
        fragment = GraphemeLine.from_str(ch).fragments[0]
        assert fragment.replacement == EditorConstants.WHITESPACE_GLYPH
        assert fragment.width == GraphemeWidth.HALF


def test_to_string_reproduces_text():
    text = "tab\there, wide 世界, e\u0301, ctrl \x07"
    assert str(GraphemeLine.from_str(text)) == text


def test_segmentation_is_idempotent():
    line = GraphemeLine.from_str("x\u0301 世\t\u200b!")
    assert GraphemeLine.from_str(str(line)) == line


def test_insert_then_delete_restores_ascii_line():
    original = GraphemeLine.from_str("hello")
    line = GraphemeLine.from_str("hello")
    line.insert_char("X", 2)
    assert str(line) == "heXllo"
    line.delete(2)
    assert line == original


def test_insert_past_end_appends():
    line = GraphemeLine.from_str("abc")
    line.insert_char("d", 10)
    assert str(line) == "abcd"


def test_insert_combining_mark_merges_with_previous_grapheme():
    line = GraphemeLine.from_str("e")
    line.insert_char("\u0301", 1)
    assert len(line) == 1
    assert str(line) == "e\u0301"


def test_delete_past_end_is_noop():
    line = GraphemeLine.from_str("abc")
    line.delete(3)
    line.delete(99)
    assert str(line) == "abc"


def test_delete_removes_whole_cluster():
    line = GraphemeLine.from_str("ae\u0301b")
    line.delete(1)
    assert str(line) == "ab"


def test_split_then_append_reconstructs_line():
    text = "split 世界 here"
    line = GraphemeLine.from_str(text)
    remainder = line.split(6)
    assert str(line) == "split "
    assert str(remainder) == "世界 here"
    line.append(remainder)
    assert str(line) == text
    assert line == GraphemeLine.from_str(text)


def test_split_past_end_returns_empty_line():
    line = GraphemeLine.from_str("abc")
    remainder = line.split(3)
    assert len(remainder) == 0
    assert str(line) == "abc"


def test_append_merges_clusters_across_join():
    line = GraphemeLine.from_str("e")
    line.append(GraphemeLine.from_str("\u0301x"))
    assert len(line) == 2


def test_append_char_and_delete_last():
    line = GraphemeLine()
    line.append_char("a")
    line.append_char("世")
    assert str(line) == "a世"
    line.delete_last()
    assert str(line) == "a"
    line.delete_last()
    line.delete_last()
    assert len(line) == 0
