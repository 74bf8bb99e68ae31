import os
import tempfile

import pytest

from glyphpad.buffer import Buffer, DocumentIOError
from glyphpad.model import Location


def test_load_file_reads_lines_and_binds_name():
    """Loading a file reads its lines and remembers the file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.txt', delete=False, encoding='utf-8') as f:
        f.write("Line 1\nLine 2\nLine 3\n")
        temp_filename = f.name

    try:
        buf = Buffer.load(temp_filename)
        assert [str(line) for line in buf] == ["Line 1", "Line 2", "Line 3"]
        assert buf.is_file_loaded()
        assert str(buf.file_info) == os.path.basename(temp_filename)
        assert buf.modified == False
    finally:
        os.remove(temp_filename)


def test_save_writes_newline_after_every_line(tmp_path):
    path = tmp_path / "out.txt"
    buf = Buffer.from_text("First line\nSecond line")
    buf.save_as(str(path))
    assert path.read_text(encoding='utf-8') == "First line\nSecond line\n"


def test_load_save_reload_round_trip(tmp_path):
    """Saving without edits and reloading gives the same lines."""
    path = tmp_path / "doc.txt"
    path.write_text("Hello 世界\nCafé\n\n\ttabbed\nlast", encoding='utf-8')

    first = Buffer.load(str(path))
    first.save()
    second = Buffer.load(str(path))

    assert [str(line) for line in second] == [str(line) for line in first]
    assert list(second) == list(first)


def test_save_clears_modified_flag(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("abc\n", encoding='utf-8')
    buf = Buffer.load(str(path))
    buf.insert_char("x", Location(0, 0))
    assert buf.modified

    buf.save()

    assert not buf.modified
    assert path.read_text(encoding='utf-8') == "xabc\n"


def test_save_as_rebinds_file(tmp_path):
    buf = Buffer.from_text("content")
    assert not buf.is_file_loaded()
    buf.save_as(str(tmp_path / "new.txt"))
    assert buf.is_file_loaded()
    assert str(buf.file_info) == "new.txt"


def test_save_without_file_raises():
    buf = Buffer.from_text("content")
    buf.insert_char("x", Location(0, 0))
    with pytest.raises(DocumentIOError):
        buf.save()
    assert buf.modified


def test_load_missing_file_raises_io_error():
    with pytest.raises(DocumentIOError) as excinfo:
        Buffer.load("/nonexistent/file.txt")
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert excinfo.value.path == "/nonexistent/file.txt"


def test_load_invalid_utf8_raises_io_error(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"ok\n\xff\xfe\xfa\n")
    with pytest.raises(DocumentIOError) as excinfo:
        Buffer.load(str(path))
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_failed_save_keeps_modified_flag(tmp_path):
    buf = Buffer.from_text("abc")
    buf.insert_char("x", Location(0, 0))
    with pytest.raises(DocumentIOError):
        buf.save_as(str(tmp_path / "missing_dir" / "doc.txt"))
    assert buf.modified
    assert not buf.is_file_loaded()


def test_save_leaves_no_temporary_files(tmp_path):
    path = tmp_path / "doc.txt"
    buf = Buffer.from_text("a\nb")
    buf.save_as(str(path))
    buf.save()
    assert os.listdir(tmp_path) == ["doc.txt"]


def test_save_overwrites_existing(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("Old content", encoding='utf-8')
    buf = Buffer.from_text("New content\nLine 2")
    buf.save_as(str(path))
    assert path.read_text(encoding='utf-8') == "New content\nLine 2\n"
