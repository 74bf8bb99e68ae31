#!/usr/bin/env python3
"""glyphpad - A grapheme-aware terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Move the cursor
    Ctrl-S: Save file (asks for a name if the document has none)
    Ctrl-Q: Quit (asks whether to save if modified)
    Esc: Cancel a prompt
    Type to insert text
    Backspace / Delete: Delete character before / under the cursor
    Enter: Split the line
"""

from glyphpad.__main__ import main


if __name__ == "__main__":
    main()
