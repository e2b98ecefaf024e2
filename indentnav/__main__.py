"""indentnav CLI entry point.

Allows running via `python -m indentnav` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

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
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                           ('shift', ev.is_shift), ('seq', ev.is_sequence)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts) + '\r')
    finally:
        term.cleanup()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="indentnav",
        description="Browse and edit a file by indentation blocks.",
    )
    parser.add_argument("file", nargs="?", help="file to open")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    parser.add_argument("--keytest", "--keyboard-test", action="store_true",
                        help="print parsed key events (quit with ESC)")
    parser.add_argument("--tab-width", type=int, help="tab stop used to measure indentation")
    parser.add_argument("--log-file", help="write debug log to this file")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if args.keytest:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .settings import get_persistence

    persistence = get_persistence()
    settings = persistence.load_settings(args.file)
    if args.tab_width is not None:
        if not persistence.validate_setting('tab_width', args.tab_width):
            print(f"Invalid tab width: {args.tab_width}", file=sys.stderr)
            sys.exit(2)
        settings['tab_width'] = args.tab_width

    editor = Editor(settings=settings)
    if args.file:
        editor.load_file(args.file)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
