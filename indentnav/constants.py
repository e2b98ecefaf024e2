"""Constants and configuration defaults for indentnav."""

class NavigatorConstants:
    """Central configuration constants."""

    # Indentation measurement
    DEFAULT_TAB_WIDTH = 8  # Tab stop used when measuring leading tabs
    MIN_TAB_WIDTH = 1
    MAX_TAB_WIDTH = 16

    # Lookup failure marker returned by LineSource.indent_width_of
    INVALID_INDENT = -1

    # Display
    DEFAULT_SHOW_LINE_NUMBERS = True
    GUTTER_PADDING = 1  # Spaces between line number and text
    MIN_TERMINAL_WIDTH = 20  # Minimum terminal width required for display

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Status messages
    TERMINAL_TOO_NARROW_MESSAGE = "Terminal too narrow! Need at least {} columns."
    CURRENT_WIDTH_MESSAGE = "Current width: {} columns."
