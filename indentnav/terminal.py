"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input = None

    def setup(self):
        """Enter fullscreen mode and start reading keys through curtsies."""
        from curtsies import Input

        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            # Entering the context puts the tty in raw mode
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None

    def draw_lines(self, lines: list[str], cursor_y: int, cursor_x: int,
                   selected_rows: Optional[set[int]] = None, status: str = ""):
        """Draw text rows and position the cursor.

        Args:
            lines: Rows to display, already including any gutter
            cursor_y: Cursor row position (0-based)
            cursor_x: Cursor column position (0-based)
            selected_rows: Rows drawn in reverse video
            status: Text for the status line at the bottom
        """
        width = self.term.width
        out = [self.term.home + self.term.clear]
        for y, line in enumerate(lines):
            display_line = line[:width].ljust(width)
            out.append(self.term.move(y, 0))
            if selected_rows and y in selected_rows:
                out.append(self.term.reverse + display_line + self.term.normal)
            else:
                out.append(display_line)

        out.append(self.term.move(self.term.height - 1, 0))
        out.append(self.term.reverse + status[:width].ljust(width) + self.term.normal)
        out.append(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        print(self.term.home + self.term.clear, end='')
        center_y = self.term.height // 2
        for offset, message in enumerate((message1, message2)):
            if message:
                x = max(0, (self.term.width - len(message)) // 2)
                print(self.term.move(center_y + offset, x) + message, end='')
        print('', end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name, or None if nothing arrived.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1  # Reserve one line for status
