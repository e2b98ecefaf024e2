"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .modes import EditorMode, Operator
from .navigator import ExtentMode

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    # Name hosts can bind the command by
    name: str = ""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands.

    In visual-line mode the selection follows the cursor; otherwise any
    selection is dropped. A pending operator is cancelled, since only the
    indent block is supported as its motion.
    """

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        if editor.mode == EditorMode.OPERATOR_PENDING:
            editor.set_mode(EditorMode.NORMAL)
        self._move(editor, key_event)
        if editor.mode == EditorMode.VISUAL_LINE:
            editor.source.update_selection_end()
        else:
            editor.source.clear_selection()
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.source.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.source.move_down()


class NextIndentBlockCommand(MovementCommand):
    name = "NextIndentBlock"

    def _move(self, editor, key_event):
        editor.navigator.skip_forward(editor.source)


class PrevIndentBlockCommand(MovementCommand):
    name = "PrevIndentBlock"

    def _move(self, editor, key_event):
        editor.navigator.skip_backward(editor.source)


class SelectIndentBlockCommand(EditorCommand):
    """Extend the visual-line selection over the indented block under its first line."""

    name = "SelectIndentBlock"

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        if editor.mode != EditorMode.VISUAL_LINE:
            return False
        end = editor.navigator.compute_block_extent(editor.source, ExtentMode.VISUAL_EXTEND)
        if end is None:
            editor.status_message = "No selection to extend"
        return False


class IndentBlockMotionCommand(EditorCommand):
    """Apply the pending operator to the indented block under the cursor line."""

    name = "IndentBlockMotion"

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        operator = editor.pending_operator
        if editor.mode != EditorMode.OPERATOR_PENDING or operator is None:
            return False
        start = editor.source.current_cursor()
        end = editor.navigator.compute_block_extent(editor.source, ExtentMode.OPERATOR_PENDING)
        editor.set_mode(EditorMode.NORMAL)
        if end is None:
            return False
        return editor.apply_operator(operator, start, end)


class StartOperatorCommand(EditorCommand):
    """'d' / 'y': wait for a motion in normal mode, act on the selection in visual mode."""

    def __init__(self, operator: Operator):
        self.operator = operator

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        if editor.mode == EditorMode.VISUAL_LINE:
            selection = editor.source.selection
            editor.set_mode(EditorMode.NORMAL)
            if selection is None:
                return False
            return editor.apply_operator(self.operator, selection.start, selection.end)
        if editor.mode == EditorMode.OPERATOR_PENDING:
            # Repeating the operator key cancels it
            editor.set_mode(EditorMode.NORMAL)
            return False
        editor.pending_operator = self.operator
        editor.set_mode(EditorMode.OPERATOR_PENDING)
        return False


class ToggleVisualLineCommand(EditorCommand):
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        if editor.mode == EditorMode.VISUAL_LINE:
            editor.set_mode(EditorMode.NORMAL)
        else:
            editor.set_mode(EditorMode.VISUAL_LINE)
            editor.source.start_line_selection()
        return False


class BlockObjectCommand(EditorCommand):
    """'i' after an operator or inside visual mode: the indented block."""

    def __init__(self):
        self._select = SelectIndentBlockCommand()
        self._motion = IndentBlockMotionCommand()

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        if editor.mode == EditorMode.VISUAL_LINE:
            return self._select.execute(editor, key_event)
        if editor.mode == EditorMode.OPERATOR_PENDING:
            return self._motion.execute(editor, key_event)
        return False


class EscapeCommand(EditorCommand):
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.set_mode(EditorMode.NORMAL)
        return False


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.modified and not editor.quit_requested:
            editor.quit_requested = True
            editor.status_message = "Unsaved changes! Ctrl-Q again to discard them"
        else:
            editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor._handle_save()


class CommandRegistry:
    """Registry for mapping key combinations and names to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._named: Dict[str, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        up = UpLineCommand()
        down = DownLineCommand()
        next_block = NextIndentBlockCommand()
        prev_block = PrevIndentBlockCommand()

        # Line movement
        self.register((KeyType.SPECIAL, 'up'), up)
        self.register((KeyType.SPECIAL, 'down'), down)
        self.register((KeyType.REGULAR, 'k'), up)
        self.register((KeyType.REGULAR, 'j'), down)

        # Indent block navigation
        self.register((KeyType.REGULAR, ']'), next_block)
        self.register((KeyType.REGULAR, '['), prev_block)
        self.register((KeyType.ALT, 'down'), next_block)
        self.register((KeyType.ALT, 'up'), prev_block)

        # Selection and operators
        self.register((KeyType.REGULAR, 'V'), ToggleVisualLineCommand())
        self.register((KeyType.REGULAR, 'i'), BlockObjectCommand())
        self.register((KeyType.REGULAR, 'd'), StartOperatorCommand(Operator.DELETE))
        self.register((KeyType.REGULAR, 'y'), StartOperatorCommand(Operator.YANK))
        self.register((KeyType.SPECIAL, 'escape'), EscapeCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

        # Host-facing names
        for command in (next_block, prev_block, SelectIndentBlockCommand(), IndentBlockMotionCommand()):
            self.register_named(command)

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def register_named(self, command: EditorCommand):
        """Register a command under its ``name``."""
        if not command.name:
            raise ValueError(f"{type(command).__name__} has no name")
        self._named[command.name] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def get_named(self, name: str) -> Optional[EditorCommand]:
        """Get a command by its host-facing name."""
        return self._named.get(name)

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)
        return False
