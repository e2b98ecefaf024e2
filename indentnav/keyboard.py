"""Keyboard input parsing for curtsies-style key tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'j', 'down', 'escape')
    raw: str  # The token as read from the terminal
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert',
}

_KEY_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'return': 'enter',
    'esc': 'escape',
}


class KeyboardHandler:
    """Reads keys from a terminal interface and turns them into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, or None if no key arrived in time."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a key token into a KeyEvent.

        Args:
            key: curtsies key name such as '<UP>', '<Ctrl-q>' or 'j'

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o == 27:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if o in (9,):
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if o in (10, 13):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Modifier names are case-insensitive, the base key keeps its case
        # for single characters ('<Esc+J>' differs from '<Esc+j>')
        parts = name.replace('+', '-').split('-')
        if name.endswith('-') or name.endswith('+'):
            # '<Ctrl-->' style tokens: the base key is the separator itself
            parts = parts[:-2] + [name[-1]]
        base = parts[-1]
        mods = {p.lower() for p in parts[:-1] if p}
        if len(base) != 1:
            base = base.lower()
        base = _KEY_ALIASES.get(base, base)

        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')

        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if base == 'escape':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        if 'ctrl' in mods and len(base) == 1:
            base = base.lower()
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)

        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)

        if 'shift' in mods and base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key_str,
                            is_shift=True, is_sequence=True)

        # Plain specials and anything unrecognised
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
