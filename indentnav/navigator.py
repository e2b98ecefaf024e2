"""Indentation-aware cursor motions and block extents.

The navigator holds no state of its own. Every call reads the live document
through a LineSource and either applies the resulting cursor or selection
change or leaves everything untouched.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .line_source import LineSource

logger = logging.getLogger(__name__)


class ExtentMode(Enum):
    """Context a block extent is computed for."""
    OPERATOR_PENDING = "operator_pending"
    VISUAL_EXTEND = "visual_extend"


class IndentNavigator:
    """Moves between lines of equal or lower indentation and measures blocks."""

    def skip_forward(self, source: LineSource) -> Optional[int]:
        """Move to the next non-blank line indented no deeper than the cursor line.

        Returns:
            The line the cursor moved to, or None if nothing changed.
        """
        return self._skip(source, step=1)

    def skip_backward(self, source: LineSource) -> Optional[int]:
        """Move to the previous non-blank line indented no deeper than the cursor line.

        Returns:
            The line the cursor moved to, or None if nothing changed.
        """
        return self._skip(source, step=-1)

    def _skip(self, source: LineSource, step: int) -> Optional[int]:
        current = source.current_cursor()
        count = source.line_count()
        boundary = count if step > 0 else 1
        if current == boundary:
            logger.debug("skip from line %d: already at document boundary", current)
            return None

        base_indent = source.indent_width_of(current)
        if base_indent < 0:
            logger.debug("skip from line %d: indent lookup failed", current)
            return None

        pos = current + step
        while 1 <= pos <= count:
            if not source.is_blank(pos):
                indent = source.indent_width_of(pos)
                if indent < 0:
                    logger.debug("skip from line %d: indent lookup failed at %d", current, pos)
                    return None
                if indent <= base_indent:
                    source.set_cursor(pos, source.first_non_whitespace_column(pos))
                    return pos
            pos += step

        logger.debug("skip from line %d: no line with indent <= %d", current, base_indent)
        return None

    def compute_block_extent(self, source: LineSource, mode: ExtentMode,
                             start_line: Optional[int] = None) -> Optional[int]:
        """Find the last line of the indented block rooted at ``start_line``.

        The block is the run of lines indented strictly deeper than the start
        line, followed by any blank lines directly after that run. When the
        block extends past the start line, the selection is set to cover it.

        Args:
            source: Document to measure.
            mode: VISUAL_EXTEND anchors at the start of the current selection;
                OPERATOR_PENDING anchors at the cursor line.
            start_line: Explicit anchor overriding the one implied by ``mode``.

        Returns:
            The end line (equal to the start line when no lines qualify), or
            None if the anchor does not resolve to a line.
        """
        if start_line is None:
            if mode is ExtentMode.VISUAL_EXTEND:
                start_line = source.current_selection_start()
            else:
                start_line = source.current_cursor()
        if start_line is None:
            logger.debug("block extent (%s): no selection to extend", mode.value)
            return None

        base_indent = source.indent_width_of(start_line)
        if base_indent < 0:
            logger.debug("block extent (%s): line %d does not exist", mode.value, start_line)
            return None

        count = source.line_count()
        end_line = start_line

        # Indented body: strictly deeper than the anchor
        while end_line + 1 <= count and source.indent_width_of(end_line + 1) > base_indent:
            end_line += 1

        # Trailing blank lines belong to the block
        while end_line + 1 <= count and source.is_blank(end_line + 1):
            end_line += 1

        if end_line > start_line:
            source.set_selection(start_line, end_line)
        else:
            logger.debug("block extent (%s): line %d has no indented block", mode.value, start_line)
        return end_line


_navigator: Optional[IndentNavigator] = None


def get_navigator() -> IndentNavigator:
    """Get the process-wide navigator, creating it on first use.

    Returns:
        The singleton IndentNavigator instance.
    """
    global _navigator
    if _navigator is None:
        _navigator = IndentNavigator()
    return _navigator
