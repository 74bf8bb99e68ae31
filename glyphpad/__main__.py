"""glyphpad CLI entry point.

Allows running via `python -m glyphpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import EditorConstants
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def _configure_logging() -> None:
    # The editor owns the screen, so logs only ever go to a file
    log_file = os.environ.get(EditorConstants.LOG_FILE_ENV)
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def run_keyboard_test() -> None:
    """Print parsed key events and the command each maps to. Quit with ESC."""
    from .commands import System, SystemKind, command_from_key
    from .keyboard import KeyboardHandler
    from .terminal import TerminalInterface

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            command = command_from_key(ev)
            print(f"type={ev.key_type.value} value={ev.value} raw='{_escape_bytes(ev.raw)}' command={command}\r")
            if isinstance(command, System) and command.kind == SystemKind.DISMISS:
                print("Exiting keyboard test.\r")
                break
    finally:
        term.cleanup()


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    _configure_logging()
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args:
        editor.load_file(args[0])
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
