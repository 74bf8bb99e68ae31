"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key token from the terminal
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None if nothing arrived before ``timeout``."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a key token into a KeyEvent.

        Args:
            key: curtsies key name such as '<UP>' or '<Ctrl-s>', or a plain
                character

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # curtsies-style names like '<LEFT>', '<Ctrl-x>', '<Esc+u>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = parts[-1]
            mods = set(parts[:-1])
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are how terminals send Enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
                return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
            if base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str,
                                is_shift='shift' in mods)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
            if o == 27:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if o == 127:
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
