import os
import stat
import tempfile
from unittest.mock import Mock

import pytest

from indentnav.editor import Editor
from indentnav.keyboard import KeyEvent, KeyType
from indentnav.line_source import BufferLineSource


def make_editor():
    terminal = Mock()
    terminal.width = 80
    terminal.height = 10
    return Editor(terminal=terminal)


def test_save_file_creates_file():
    """Test that save_file writes lines joined by newlines."""
    editor = make_editor()
    editor.source = BufferLineSource(["def f():", "    pass"])

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "out.py")
        assert editor.save_file(path) is True
        with open(path, encoding='utf-8') as f:
            assert f.read() == "def f():\n    pass\n"
        assert editor.filename == path
        assert editor.modified is False
        # No temp files left behind
        assert os.listdir(tmp) == ["out.py"]


def test_load_file_sets_filename_and_lines():
    editor = make_editor()
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "in.py")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("a\n  b\n\tc\n")
        editor.load_file(path)

    assert editor.filename == path
    assert editor.source.lines == ["a", "  b", "\tc"]
    assert editor.source.tab_width == 8
    assert editor.modified is False


def test_load_then_save_round_trips_content():
    editor = make_editor()
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "in.txt")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("x\n  y\n")
        editor.load_file(path)
        editor.save_file(path)
        with open(path, encoding='utf-8') as f:
            assert f.read() == "x\n  y\n"


def test_load_missing_file_starts_empty():
    editor = make_editor()
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "new.py")
        editor.load_file(path)
    assert editor.filename == path
    assert editor.source.lines == [""]
    assert editor.modified is False


def test_load_undecodable_file_exits():
    editor = make_editor()
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "bin.dat")
        with open(path, 'wb') as f:
            f.write(b"\xff\xfe\x00bad")
        with pytest.raises(SystemExit):
            editor.load_file(path)


@pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
def test_save_to_read_only_directory_reports_error():
    editor = make_editor()
    editor.source = BufferLineSource(["a"])
    with tempfile.TemporaryDirectory() as tmp:
        os.chmod(tmp, stat.S_IRUSR | stat.S_IXUSR)
        try:
            assert editor.save_file(os.path.join(tmp, "out.txt")) is False
        finally:
            os.chmod(tmp, stat.S_IRWXU)
    assert editor.status_message.startswith("Error:")


def test_ctrl_s_without_filename_sets_message():
    editor = make_editor()
    editor._handle_key_event(KeyEvent(key_type=KeyType.CTRL, value='s', raw='\x13', is_ctrl=True))
    assert editor.status_message.startswith("No file name")


def test_ctrl_s_saves_to_loaded_file():
    editor = make_editor()
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "doc.txt")
        editor.load_file(path)
        editor.source = BufferLineSource(["hello"])
        editor.modified = True
        editor._handle_key_event(KeyEvent(key_type=KeyType.CTRL, value='s', raw='\x13', is_ctrl=True))
        with open(path, encoding='utf-8') as f:
            assert f.read() == "hello\n"
    assert editor.modified is False
    assert editor.status_message == f"Saved to {path}"
