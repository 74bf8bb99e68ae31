"""Main editor controller: event loop, prompts and screen layout."""

import logging
import os
import sys
import select
import signal
import termios
from typing import Optional

from .buffer import Buffer, DocumentIOError, FileInfo
from .commands import Command, Edit, EditKind, Move, System, SystemKind, command_from_key
from .components import CommandBar, MessageBar, StatusBar
from .constants import EditorConstants
from .keyboard import KeyboardHandler
from .model import Position, Size
from .settings_persistence import SettingsPersistence, get_persistence
from .terminal import TerminalInterface
from .view import Viewport

logger = logging.getLogger(__name__)

SAVE_PROMPT_MODES = ('save_as', 'save_as_quit')


class Editor:
    """Main text editor application controller."""

    def __init__(self, terminal=None, persistence: Optional[SettingsPersistence] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = Viewport(self.terminal)
        self.status_bar = StatusBar(self.terminal)
        self.message_bar = MessageBar(self.terminal)
        self.command_bar = CommandBar(self.terminal)
        self.persistence = persistence or get_persistence()
        self.size = Size()
        self.running = False
        self.prompt_mode = None  # None, 'save_as', 'save_as_quit' or 'quit_confirm'
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self.message_bar.update_message(EditorConstants.HELP_MESSAGE)
        self.resize(self.terminal.size())

    # --- Layout ---

    def resize(self, size: Size) -> None:
        """Lay the components out for a terminal of ``size``."""
        self.size = size
        reserved = EditorConstants.STATUS_BAR_HEIGHT + EditorConstants.MESSAGE_BAR_HEIGHT
        self.view.resize(Size(size.width, max(size.height - reserved, 0)))
        bar_size = Size(size.width, 1)
        self.status_bar.resize(bar_size)
        self.message_bar.resize(bar_size)
        self.command_bar.resize(bar_size)

    def refresh_screen(self) -> None:
        """Repaint whatever is dirty and place the caret."""
        self.terminal.hide_cursor()
        self.view.render(0)
        status_row = self.size.height - EditorConstants.MESSAGE_BAR_HEIGHT - EditorConstants.STATUS_BAR_HEIGHT
        bottom_row = self.size.height - 1
        self.status_bar.update_status(self.view.status())
        if status_row >= 0:
            self.status_bar.render(status_row)

        caret = self.view.caret_position()
        if bottom_row >= 0:
            if self.prompt_mode is not None:
                self.command_bar.render(bottom_row)
                if self.prompt_mode in SAVE_PROMPT_MODES:
                    caret = Position(row=bottom_row, col=self.command_bar.caret_col())
            else:
                self.message_bar.render(bottom_row)
        self.terminal.move_cursor(caret)

    # --- Files ---

    def load_file(self, filename: str) -> None:
        """Open ``filename``; a missing file starts an empty document with that name."""
        try:
            self.view.load(filename)
        except DocumentIOError as e:
            if isinstance(e.__cause__, FileNotFoundError):
                self.view.buffer = Buffer(file_info=FileInfo(filename))
                self.view.mark_redraw(True)
            else:
                logger.warning("Opening %s failed: %s", filename, e)
                self.message_bar.update_message(EditorConstants.OPEN_ERROR_MESSAGE.format(filename))
            return
        location = self.persistence.load_cursor(filename)
        if location is not None:
            self.view.restore_location(location)

    def save_file(self, filename: Optional[str] = None) -> bool:
        """Save the document, to ``filename`` if given.

        Returns:
            True if the save succeeded
        """
        try:
            if filename is None:
                self.view.save()
            else:
                self.view.save_as(filename)
        except DocumentIOError as e:
            logger.warning("Save failed: %s", e)
            self.message_bar.update_message(EditorConstants.SAVE_ERROR_MESSAGE)
            return False
        self.message_bar.update_message(EditorConstants.SAVED_MESSAGE)
        path = self.view.buffer.file_info.path
        if path is not None:
            self.persistence.save_cursor(str(path), self.view.location)
        return True

    # --- Commands ---

    def handle_command(self, command: Command) -> None:
        if isinstance(command, System) and command.kind == SystemKind.RESIZE:
            if command.size is not None:
                self.resize(command.size)
            return
        if self.prompt_mode is not None:
            self._handle_prompt_command(command)
            return

        if isinstance(command, Move):
            self.view.handle_move(command)
        elif isinstance(command, Edit):
            self.view.handle_edit(command)
        elif command.kind == SystemKind.SAVE:
            self._handle_save()
        elif command.kind == SystemKind.QUIT:
            self._handle_quit()
        elif command.kind == SystemKind.DISMISS:
            self.message_bar.clear()

    def wait_timeout(self) -> Optional[float]:
        """How long the loop may block before the screen needs attention.

        A visible message must be cleared when it expires. While a prompt
        covers the message bar there is nothing to wait for.
        """
        if self.prompt_mode is not None:
            return None
        return self.message_bar.time_remaining()

    def _handle_save(self) -> None:
        if self.view.is_file_loaded():
            self.save_file()
        else:
            self._start_prompt('save_as', EditorConstants.SAVE_AS_PROMPT)

    def _handle_quit(self) -> None:
        if self.view.buffer.modified:
            self._start_prompt('quit_confirm', EditorConstants.QUIT_CONFIRM_PROMPT)
        else:
            self.running = False

    def _start_prompt(self, mode: str, prompt: str) -> None:
        self.prompt_mode = mode
        self.command_bar.set_prompt(prompt)
        self.command_bar.clear_value()

    def _end_prompt(self) -> None:
        self.prompt_mode = None
        self.command_bar.clear_value()
        # The message bar shares the bottom row with the prompt
        self.message_bar.mark_redraw(True)

    def _handle_prompt_command(self, command: Command) -> None:
        if self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(command)
        elif self.prompt_mode in SAVE_PROMPT_MODES:
            self._handle_filename_prompt(command)

    def _handle_filename_prompt(self, command: Command) -> None:
        if isinstance(command, System) and command.kind == SystemKind.DISMISS:
            self._end_prompt()
            self.message_bar.update_message(EditorConstants.SAVE_ABORTED_MESSAGE)
        elif isinstance(command, Edit) and command.kind == EditKind.INSERT_NEWLINE:
            filename = self.command_bar.value()
            if not filename:
                return
            quit_after = self.prompt_mode == 'save_as_quit'
            self._end_prompt()
            if self.save_file(filename) and quit_after:
                self.running = False
        elif isinstance(command, Edit):
            self.command_bar.handle_edit(command)

    def _handle_quit_confirm(self, command: Command) -> None:
        answer = command.char.lower() if isinstance(command, Edit) and command.char else None
        self._end_prompt()
        if answer == 'y':
            if self.view.is_file_loaded():
                if self.save_file():
                    self.running = False
            else:
                self._start_prompt('save_as_quit', EditorConstants.SAVE_AS_PROMPT)
        elif answer == 'n':
            self.running = False

    # --- Event loop ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                # Disable flow control so Ctrl-S and Ctrl-Q reach us
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError):
                    pass

                try:
                    while self.running:
                        self.refresh_screen()
                        ready, _, _ = select.select([0, self._resize_pipe_r], [], [], self.wait_timeout())

                        if self._resize_pipe_r in ready:
                            os.read(self._resize_pipe_r, 1024)
                            self.handle_command(System.resize(self.terminal.size()))
                        elif 0 in ready:
                            key_event = self.keyboard.get_key_event(timeout=0)
                            if key_event is None:
                                continue
                            command = command_from_key(key_event)
                            if command is None:
                                logger.debug("Ignoring key %r", key_event.raw)
                                continue
                            self.handle_command(command)
                finally:
                    if old_settings:
                        try:
                            termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                        except (termios.error, OSError):
                            pass
        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()
