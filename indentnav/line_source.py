"""Line-indexed document access for the navigator, plus an in-memory buffer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .constants import NavigatorConstants
from .indent import indent_width, first_non_whitespace_column, is_blank


@dataclass
class CursorPosition:
    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class SelectionRange:
    """Inclusive, linewise range of 1-based line positions."""
    start: int
    end: int

    @classmethod
    def between(cls, a: int, b: int) -> "SelectionRange":
        """Build a range from two endpoints given in either order."""
        return cls(min(a, b), max(a, b))


class LineSource(ABC):
    """Line-indexed view of a host document.

    Positions are 1-based. Lookups on positions outside the document never
    raise: ``text_of`` returns None and ``indent_width_of`` returns
    ``NavigatorConstants.INVALID_INDENT``.
    """

    @abstractmethod
    def line_count(self) -> int:
        """Number of lines currently in the document."""

    @abstractmethod
    def text_of(self, pos: int) -> Optional[str]:
        """Text of line ``pos``, or None if it does not exist."""

    @abstractmethod
    def indent_width_of(self, pos: int) -> int:
        """Indentation width of line ``pos``, negative if it does not exist."""

    @abstractmethod
    def current_cursor(self) -> int:
        """Line the cursor is on."""

    @abstractmethod
    def set_cursor(self, pos: int, column: int) -> None:
        """Move the cursor to ``pos`` at a 1-based ``column``."""

    @abstractmethod
    def current_selection_start(self) -> Optional[int]:
        """First line of the active selection, or None without a selection."""

    @abstractmethod
    def set_selection(self, start: int, end: int) -> None:
        """Select lines ``start`` through ``end`` inclusive, linewise."""

    @abstractmethod
    def first_non_whitespace_column(self, pos: int) -> int:
        """1-based column of the first non-blank character; 1 as fallback."""

    def is_blank(self, pos: int) -> bool:
        """Whether line ``pos`` is empty or whitespace only.

        Lines that do not exist are reported as not blank so scans never
        treat them as skippable.
        """
        text = self.text_of(pos)
        if text is None:
            return False
        return is_blank(text)


class BufferLineSource(LineSource):
    """In-memory LineSource that owns its lines, cursor and selection."""

    lines: list[str]
    cursor_position: CursorPosition
    selection: Optional[SelectionRange]

    def __init__(self, lines: Optional[list[str]] = None,
                 tab_width: int = NavigatorConstants.DEFAULT_TAB_WIDTH):
        self.lines = list(lines) if lines else [""]
        self.tab_width = tab_width
        self.cursor_position = CursorPosition()
        self.selection = None
        # Line where a manual (host-driven) linewise selection started
        self.selection_anchor: Optional[int] = None

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "BufferLineSource":
        return cls(text.split('\n') if text else [""], **kwargs)

    def to_text(self) -> str:
        return '\n'.join(self.lines)

    def _valid(self, pos: int) -> bool:
        return 1 <= pos <= len(self.lines)

    # --- LineSource ---

    def line_count(self) -> int:
        return len(self.lines)

    def text_of(self, pos: int) -> Optional[str]:
        if not self._valid(pos):
            return None
        return self.lines[pos - 1]

    def indent_width_of(self, pos: int) -> int:
        if not self._valid(pos):
            return NavigatorConstants.INVALID_INDENT
        return indent_width(self.lines[pos - 1], self.tab_width)

    def current_cursor(self) -> int:
        return self.cursor_position.line

    def set_cursor(self, pos: int, column: int) -> None:
        if not self._valid(pos):
            raise ValueError(f"Line {pos} is outside the document (1..{len(self.lines)})")
        self.cursor_position = CursorPosition(pos, max(1, column))

    def current_selection_start(self) -> Optional[int]:
        if self.selection is None:
            return None
        return self.selection.start

    def set_selection(self, start: int, end: int) -> None:
        """Select ``start``..``end`` and leave the cursor on ``end``.

        The anchor is reset to ``start`` so later manual extension keeps
        the block's first line.
        """
        if not (self._valid(start) and self._valid(end)) or start > end:
            raise ValueError(f"Invalid selection {start}..{end} for {len(self.lines)} lines")
        self.selection = SelectionRange(start, end)
        self.selection_anchor = start
        self.cursor_position = CursorPosition(end, self.first_non_whitespace_column(end))

    def first_non_whitespace_column(self, pos: int) -> int:
        text = self.text_of(pos)
        if text is None:
            return 1
        return first_non_whitespace_column(text)

    # --- Host helpers ---

    def start_line_selection(self):
        """Start a linewise selection on the cursor line."""
        line = self.cursor_position.line
        self.selection_anchor = line
        self.selection = SelectionRange(line, line)

    def update_selection_end(self):
        """Stretch the manual selection from its anchor to the cursor line."""
        if self.selection_anchor is not None:
            self.selection = SelectionRange.between(self.selection_anchor, self.cursor_position.line)

    def clear_selection(self):
        self.selection = None
        self.selection_anchor = None

    def delete_lines(self, start: int, end: int) -> list[str]:
        """Remove lines ``start``..``end`` inclusive and return them.

        The document never becomes empty: deleting every line leaves a
        single empty line. The cursor lands on the line that followed the
        deleted range (or the new last line) and the selection is cleared.
        """
        if not (self._valid(start) and self._valid(end)) or start > end:
            raise ValueError(f"Invalid line range {start}..{end} for {len(self.lines)} lines")
        removed = self.lines[start - 1:end]
        del self.lines[start - 1:end]
        if not self.lines:
            self.lines = [""]
        line = min(start, len(self.lines))
        self.cursor_position = CursorPosition(line, self.first_non_whitespace_column(line))
        self.clear_selection()
        return removed

    def move_up(self):
        if self.cursor_position.line > 1:
            self._move_to_line(self.cursor_position.line - 1)

    def move_down(self):
        if self.cursor_position.line < len(self.lines):
            self._move_to_line(self.cursor_position.line + 1)

    def _move_to_line(self, line: int):
        # Keep the column where possible; clamp to just past end of line
        column = min(self.cursor_position.column, len(self.lines[line - 1]) + 1)
        self.cursor_position = CursorPosition(line, max(1, column))
