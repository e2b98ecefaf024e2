"""indentnav - indentation-aware cursor navigation and block selection."""

from .line_source import LineSource, BufferLineSource, CursorPosition, SelectionRange
from .navigator import IndentNavigator, ExtentMode, get_navigator

__all__ = [
    'LineSource',
    'BufferLineSource',
    'CursorPosition',
    'SelectionRange',
    'IndentNavigator',
    'ExtentMode',
    'get_navigator',
]
