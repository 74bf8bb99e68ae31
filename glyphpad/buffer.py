"""Document buffer: the lines of a file plus its identity and modified state."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, Optional

from .constants import EditorConstants
from .line import GraphemeLine
from .model import Location

logger = logging.getLogger(__name__)


class DocumentIOError(OSError):
    """Loading or saving a document failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class FileInfo:
    """Identity of the file backing a buffer, if any."""

    def __init__(self, path: Optional[str] = None):
        self.path: Optional[Path] = Path(path) if path is not None else None

    def has_path(self) -> bool:
        return self.path is not None

    def __str__(self) -> str:
        if self.path is None or not self.path.name:
            return EditorConstants.NO_NAME
        return self.path.name


def _split_lines(content: str) -> list[str]:
    """Split file content on line terminators.

    A terminator ending the file does not produce an extra empty line, and
    CRLF endings are accepted.
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Buffer:
    """Ordered lines of a document.

    Locations handed to the editing methods are never treated as errors:
    out-of-range values are clamped or make the call a no-op. The mutating
    methods return True when they changed the document.
    """

    def __init__(self, lines: Optional[list[GraphemeLine]] = None, file_info: Optional[FileInfo] = None):
        self.lines: list[GraphemeLine] = list(lines or [])
        self.file_info = file_info or FileInfo()
        self.modified = False

    @classmethod
    def from_text(cls, text: str) -> "Buffer":
        return cls([GraphemeLine.from_str(line) for line in _split_lines(text)])

    @classmethod
    def load(cls, filename: str) -> "Buffer":
        """Read a UTF-8 file into a new buffer bound to ``filename``.

        Raises:
            DocumentIOError: The file can't be read or isn't valid UTF-8.
        """
        try:
            with open(filename, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise DocumentIOError(f"{filename} is not valid UTF-8", filename) from e
        except OSError as e:
            raise DocumentIOError(f"Cannot read {filename}: {e.strerror or e}", filename) from e
        buf = cls.from_text(content)
        buf.file_info = FileInfo(filename)
        logger.debug("Loaded %s (%d lines)", filename, buf.height())
        return buf

    def __iter__(self) -> Iterator[GraphemeLine]:
        return iter(self.lines)

    def height(self) -> int:
        return len(self.lines)

    def is_empty(self) -> bool:
        return self.height() == 0

    def is_file_loaded(self) -> bool:
        return self.file_info.has_path()

    def line_length(self, line_index: int) -> int:
        """Grapheme count of a line; 0 for lines that don't exist."""
        if 0 <= line_index < len(self.lines):
            return len(self.lines[line_index])
        return 0

    def insert_char(self, ch: str, at: Location) -> bool:
        if at.line_index > self.height() or at.line_index < 0:
            return False
        if at.line_index == self.height():
            self.lines.append(GraphemeLine.from_str(ch))
        else:
            self.lines[at.line_index].insert_char(ch, at.grapheme_index)
        self.modified = True
        return True

    def delete(self, at: Location) -> bool:
        # Nothing is ever deleted at (0, 0), so the first grapheme of a
        # document can only be removed by editing around it. Keep this no-op.
        if at.line_index == 0 and at.grapheme_index == 0:
            return False
        if not 0 <= at.line_index < self.height() or at.grapheme_index < 0:
            return False
        line = self.lines[at.line_index]
        if at.grapheme_index >= len(line):
            if at.line_index + 1 >= self.height():
                return False
            line.append(self.lines.pop(at.line_index + 1))
        else:
            line.delete(at.grapheme_index)
        self.modified = True
        return True

    def insert_new_line(self, at: Location) -> bool:
        if at.line_index == self.height():
            self.lines.append(GraphemeLine())
        elif 0 <= at.line_index < self.height():
            remainder = self.lines[at.line_index].split(at.grapheme_index)
            self.lines.insert(at.line_index + 1, remainder)
        else:
            return False
        self.modified = True
        return True

    def to_text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def save(self) -> None:
        """Write the buffer back to its file.

        Raises:
            DocumentIOError: No file is bound or the write failed.
        """
        if self.file_info.path is None:
            raise DocumentIOError("No file name")
        self._write(str(self.file_info.path))
        self.modified = False

    def save_as(self, filename: str) -> None:
        """Write the buffer to ``filename`` and bind the buffer to it."""
        self._write(filename)
        self.file_info = FileInfo(filename)
        self.modified = False

    def _write(self, filename: str) -> None:
        # Temp file in the target directory, renamed over the target
        dir_name = os.path.dirname(filename) or '.'
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                             dir=dir_name, prefix='.', suffix='.tmp',
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(self.to_text())
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except OSError as e:
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_filename)
            logger.warning("Saving %s failed: %s", filename, e)
            raise DocumentIOError(f"Cannot save to {filename}: {e.strerror or e}", filename) from e
        logger.info("Saved %s (%d lines)", filename, self.height())
