"""glyphpad - A grapheme-aware terminal text editor."""

from .line import GraphemeLine, GraphemeWidth, TextFragment
from .buffer import Buffer, DocumentIOError, FileInfo
from .model import DocumentStatus, Location, Position, Size
from .view import Viewport

__all__ = [
    'GraphemeLine',
    'GraphemeWidth',
    'TextFragment',
    'Buffer',
    'DocumentIOError',
    'FileInfo',
    'DocumentStatus',
    'Location',
    'Position',
    'Size',
    'Viewport',
]
