"""Tests for the command-line entry point."""

from unittest.mock import patch

import pytest

from indentnav.__main__ import build_parser, main
from indentnav.settings import DEFAULT_SETTINGS


def test_version_flag_prints_version(capsys):
    with patch("indentnav.__main__.get_version_string", return_value="0.1.0 (abc1234)"):
        main(["--version"])
    assert capsys.readouterr().out.strip() == "0.1.0 (abc1234)"


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.file is None
    assert args.tab_width is None
    assert args.log_file is None
    assert not args.keytest


def test_invalid_tab_width_exits(capsys):
    with patch("indentnav.settings.get_persistence") as get_persistence:
        get_persistence.return_value.load_settings.return_value = dict(DEFAULT_SETTINGS)
        get_persistence.return_value.validate_setting.return_value = False
        with pytest.raises(SystemExit) as exc:
            main(["--tab-width", "0", "file.py"])
    assert exc.value.code == 2
    assert "Invalid tab width" in capsys.readouterr().err


def test_main_starts_editor_with_loaded_settings():
    with patch("indentnav.settings.get_persistence") as get_persistence, \
         patch("indentnav.editor.Editor") as editor_cls:
        persistence = get_persistence.return_value
        persistence.load_settings.return_value = {"tab_width": 8, "show_line_numbers": False}
        persistence.validate_setting.return_value = True

        main(["--tab-width", "4", "file.py"])

    persistence.load_settings.assert_called_once_with("file.py")
    editor_cls.assert_called_once_with(settings={"tab_width": 4, "show_line_numbers": False})
    editor = editor_cls.return_value
    editor.load_file.assert_called_once_with("file.py")
    editor.run.assert_called_once_with()


def test_main_without_file_skips_loading():
    with patch("indentnav.settings.get_persistence") as get_persistence, \
         patch("indentnav.editor.Editor") as editor_cls:
        get_persistence.return_value.load_settings.return_value = dict(DEFAULT_SETTINGS)
        main([])

    get_persistence.return_value.load_settings.assert_called_once_with(None)
    editor_cls.return_value.load_file.assert_not_called()
    editor_cls.return_value.run.assert_called_once_with()
