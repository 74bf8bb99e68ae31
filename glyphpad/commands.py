"""Abstract editor commands and the key bindings that produce them."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .keyboard import KeyEvent, KeyType
from .model import Size


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


class EditKind(Enum):
    INSERT_CHAR = "insert_char"
    INSERT_NEWLINE = "insert_newline"
    DELETE_FORWARD = "delete_forward"
    DELETE_BACKWARD = "delete_backward"


class SystemKind(Enum):
    SAVE = "save"
    RESIZE = "resize"
    QUIT = "quit"
    DISMISS = "dismiss"


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class Edit:
    kind: EditKind
    char: Optional[str] = None

    @classmethod
    def insert(cls, ch: str) -> "Edit":
        return cls(EditKind.INSERT_CHAR, ch)


@dataclass(frozen=True)
class System:
    kind: SystemKind
    size: Optional[Size] = None

    @classmethod
    def resize(cls, size: Size) -> "System":
        return cls(SystemKind.RESIZE, size)


Command = Union[Move, Edit, System]


class CommandRegistry:
    """Maps decoded keys to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], Command] = {}
        self._register_default_commands()

    def _register_default_commands(self):
        for direction in Direction:
            self.register((KeyType.SPECIAL, direction.value), Move(direction))

        self.register((KeyType.SPECIAL, 'enter'), Edit(EditKind.INSERT_NEWLINE))
        self.register((KeyType.SPECIAL, 'backspace'), Edit(EditKind.DELETE_BACKWARD))
        self.register((KeyType.SPECIAL, 'delete'), Edit(EditKind.DELETE_FORWARD))
        # Ctrl-H is backspace on many terminals
        self.register((KeyType.CTRL, 'h'), Edit(EditKind.DELETE_BACKWARD))

        self.register((KeyType.CTRL, 's'), System(SystemKind.SAVE))
        self.register((KeyType.CTRL, 'q'), System(SystemKind.QUIT))
        self.register((KeyType.SPECIAL, 'escape'), System(SystemKind.DISMISS))

    def register(self, key: Tuple[KeyType, str], command: Command):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_event: KeyEvent) -> Optional[Command]:
        """Return the command bound to ``key_event``, or None if it has none."""
        command = self._commands.get((key_event.key_type, key_event.value))
        if command is not None:
            return command
        if key_event.key_type == KeyType.REGULAR and len(key_event.value) == 1:
            return Edit.insert(key_event.value)
        return None


_registry: Optional[CommandRegistry] = None


def command_from_key(key_event: KeyEvent) -> Optional[Command]:
    """Translate a key event using the default bindings."""
    global _registry
    if _registry is None:
        _registry = CommandRegistry()
    return _registry.get_command(key_event)
