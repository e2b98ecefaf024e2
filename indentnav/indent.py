"""Per-line indentation helpers.

Everything here works on a single line of text and holds no state, so the
results always reflect the current content of the document.
"""

from .constants import NavigatorConstants


def is_blank(text: str) -> bool:
    """Return True if the line is empty or consists only of whitespace."""
    return not text.strip()


def indent_width(text: str, tab_width: int = NavigatorConstants.DEFAULT_TAB_WIDTH) -> int:
    """Return the number of leading whitespace columns of a line.

    A tab advances to the next multiple of ``tab_width``; every other
    whitespace character counts as one column. A whitespace-only line
    measures its full width.
    """
    width = 0
    for ch in text:
        if ch == '\t':
            width += tab_width - (width % tab_width)
        elif ch.isspace():
            width += 1
        else:
            break
    return width


def first_non_whitespace_column(text: str) -> int:
    """Return the 1-based column of the first non-whitespace character.

    Falls back to column 1 for blank lines.
    """
    stripped = text.lstrip()
    if not stripped:
        return 1
    return len(text) - len(stripped) + 1
