"""Test keyboard input handling."""

import pytest

from indentnav.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key(']')

    event = handler.get_key_event()

    assert event == KeyEvent(key_type=KeyType.REGULAR, value=']', raw=']')
    assert handler.get_key_event(timeout=0) is None


def test_regular_characters_keep_case(handler):
    assert handler.parse_key('V').value == 'V'
    assert handler.parse_key('v').value == 'v'
    assert handler.parse_key('[').key_type == KeyType.REGULAR


@pytest.mark.parametrize("token,value", [
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<PAGEDOWN>', 'page_down'),
    ('<F1>', 'f1'),
])
def test_named_specials(handler, token, value):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value
    assert event.is_sequence


def test_alt_arrows(handler):
    for token in ('<Alt-down>', '<Esc+down>', '<Meta-down>'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.ALT
        assert event.value == 'down'
        assert event.is_alt


def test_ctrl_letters(handler):
    event = handler.parse_key('<Ctrl-q>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 'q'
    assert event.is_ctrl

    raw = handler.parse_key('\x13')  # Ctrl-S
    assert raw.key_type == KeyType.CTRL
    assert raw.value == 's'


def test_ctrl_j_and_m_are_enter(handler):
    assert handler.parse_key('<Ctrl-j>').value == 'enter'
    assert handler.parse_key('\r').value == 'enter'


def test_escape_variants(handler):
    for token in ('<ESC>', '\x1b'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.SPECIAL
        assert event.value == 'escape'


def test_named_whitespace(handler):
    assert handler.parse_key('<SPACE>') == KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
    assert handler.parse_key('<TAB>').value == '\t'


def test_shift_arrows(handler):
    event = handler.parse_key('<Shift-up>')
    assert event.key_type == KeyType.SHIFT_SPECIAL
    assert event.value == 'up'


def test_separator_as_base_key(handler):
    event = handler.parse_key('<Esc+->')
    assert event.key_type == KeyType.ALT
    assert event.value == '-'
