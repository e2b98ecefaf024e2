"""Terminal host that drives the indent navigation commands."""

import errno
import logging
import os
import select
import signal
import sys
import tempfile
import termios
from typing import Optional

from .commands import CommandRegistry
from .constants import NavigatorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .line_source import BufferLineSource
from .modes import EditorMode, Operator
from .navigator import IndentNavigator, get_navigator
from .settings import DEFAULT_SETTINGS
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


def _lines_word(count: int) -> str:
    return "1 line" if count == 1 else f"{count} lines"


class Editor:
    """Line-oriented viewer/editor with indent-block motions."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[dict] = None,
                 navigator: Optional[IndentNavigator] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = {**DEFAULT_SETTINGS, **(settings or {})}
        self.source = BufferLineSource(tab_width=self.settings['tab_width'])
        self.navigator = navigator or get_navigator()
        self.command_registry = CommandRegistry()
        self.mode = EditorMode.NORMAL
        self.pending_operator: Optional[Operator] = None
        self.register: list[str] = []  # Lines taken by the last d/y
        self.top_line = 1  # First document line shown on screen
        self.running = False
        self.error_mode = False  # True when terminal is too narrow
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.quit_requested = False

    # --- Modes and operators ---

    def set_mode(self, mode: EditorMode):
        """Switch mode, dropping state that belongs to the mode being left."""
        if self.mode == EditorMode.VISUAL_LINE and mode != EditorMode.VISUAL_LINE:
            self.source.clear_selection()
        if mode != EditorMode.OPERATOR_PENDING:
            self.pending_operator = None
        self.mode = mode

    def apply_operator(self, operator: Operator, start: int, end: int) -> bool:
        """Apply ``operator`` to lines ``start``..``end``.

        Both operators copy the lines into the register; DELETE also removes
        them.

        Returns:
            True if the document was modified
        """
        self.register = self.source.lines[start - 1:end]
        count = end - start + 1
        if operator == Operator.DELETE:
            self.source.delete_lines(start, end)
            self.status_message = f"{_lines_word(count)} deleted"
            logger.debug("deleted lines %d..%d", start, end)
            return True
        self.source.clear_selection()
        self.source.set_cursor(start, self.source.first_non_whitespace_column(start))
        self.status_message = f"{_lines_word(count)} yanked"
        return False

    # --- Main loop ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, NavigatorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        old_settings = None
        try:
            # Let Ctrl-S and Ctrl-Q through instead of flow control
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, OSError) as e:
                logger.debug("could not disable flow control: %s", e)

            need_draw = True
            while self.running:
                if need_draw:
                    self.draw()
                    need_draw = False

                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self._handle_key_event(key_event)
                        need_draw = True
        except KeyboardInterrupt:
            pass
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    pass
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        self.status_message = None
        is_quit = key_event.key_type == KeyType.CTRL and key_event.value == 'q'
        if not is_quit:
            self.quit_requested = False

        # Only quitting works while the terminal is too narrow
        if self.error_mode and not is_quit:
            return

        if self.command_registry.execute(self, key_event):
            self.modified = True

    # --- Drawing ---

    def gutter_width(self) -> int:
        if not self.settings['show_line_numbers']:
            return 0
        return len(str(self.source.line_count())) + NavigatorConstants.GUTTER_PADDING

    def scroll_to_cursor(self):
        """Adjust ``top_line`` so the cursor line is on screen."""
        rows = max(1, self.terminal.height)
        line = self.source.current_cursor()
        if line < self.top_line:
            self.top_line = line
        elif line >= self.top_line + rows:
            self.top_line = line - rows + 1
        self.top_line = max(1, min(self.top_line, self.source.line_count()))

    def visible_lines(self) -> list[str]:
        """Screen rows for the current window, gutter included."""
        rows = max(1, self.terminal.height)
        last = min(self.source.line_count(), self.top_line + rows - 1)
        gutter = self.gutter_width()
        tab_width = self.source.tab_width
        out = []
        for line in range(self.top_line, last + 1):
            text = self.source.lines[line - 1].expandtabs(tab_width)
            if gutter:
                text = str(line).rjust(gutter - NavigatorConstants.GUTTER_PADDING) + ' ' + text
            out.append(text)
        return out

    def status_line(self) -> str:
        if self.status_message:
            return f" {self.status_message}"
        label = {
            EditorMode.NORMAL: "",
            EditorMode.VISUAL_LINE: "-- VISUAL LINE -- ",
            EditorMode.OPERATOR_PENDING: f"-- {self.pending_operator.value if self.pending_operator else ''} -- ",
        }[self.mode]
        name = self.filename or "[No Name]"
        flag = " [+]" if self.modified else ""
        return f" {label}{name}{flag}  {self.source.current_cursor()}/{self.source.line_count()}"

    def draw(self):
        """Draw the current editor state to terminal."""
        if self.terminal.width < NavigatorConstants.MIN_TERMINAL_WIDTH:
            self.error_mode = True
            self.terminal.draw_error_message(
                NavigatorConstants.TERMINAL_TOO_NARROW_MESSAGE.format(NavigatorConstants.MIN_TERMINAL_WIDTH),
                NavigatorConstants.CURRENT_WIDTH_MESSAGE.format(self.terminal.width),
            )
            return
        self.error_mode = False

        self.scroll_to_cursor()
        cursor = self.source.cursor_position
        selected_rows = set()
        if self.source.selection is not None:
            selected_rows = {line - self.top_line for line in range(self.source.selection.start,
                                                                    self.source.selection.end + 1)}
        text = self.source.lines[cursor.line - 1]
        cursor_x = self.gutter_width() + len(text[:cursor.column - 1].expandtabs(self.source.tab_width))
        self.terminal.draw_lines(
            self.visible_lines(),
            cursor.line - self.top_line,
            cursor_x,
            selected_rows=selected_rows,
            status=self.status_line(),
        )

    # --- Files ---

    def load_file(self, filename: str):
        """Load a file into the editor.

        Args:
            filename: Path to file to load
        """
        self.filename = filename
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            # New file - start with empty document
            logger.debug("%s does not exist, starting empty", filename)
            self.modified = False
            return
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load %s: %s", filename, e)
            print(f"Error loading file: {e}")
            sys.exit(1)
        if content.endswith('\n'):
            content = content[:-1]
        self.source = BufferLineSource.from_text(content, tab_width=self.settings['tab_width'])
        self.top_line = 1
        self.set_mode(EditorMode.NORMAL)
        self.modified = False

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        content = self.source.to_text() + '\n'
        dir_name = os.path.dirname(filename) or '.'
        temp_filename = None
        try:
            # Temp file in the target directory so the rename stays on one filesystem
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=dir_name,
                                             suffix=NavigatorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except OSError as e:
            logger.warning("Could not save %s: %s", filename, e)
            if isinstance(e, PermissionError):
                self.status_message = f"Error: Permission denied saving {filename}"
            elif e.errno == errno.ENOSPC:
                self.status_message = "Error: No space left on device"
            else:
                self.status_message = f"Error: Cannot save to {filename}"
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            return False

        self.filename = filename
        self.modified = False
        return True

    def _handle_save(self):
        """Handle Ctrl-S save command."""
        if not self.filename:
            self.status_message = "No file name (start with: indentnav FILE)"
            return
        if self.save_file(self.filename):
            self.status_message = f"Saved to {self.filename}"
