"""Editor modes and the linewise operators that wait for a motion."""

from enum import Enum


class EditorMode(Enum):
    NORMAL = "normal"
    VISUAL_LINE = "visual_line"
    OPERATOR_PENDING = "operator_pending"


class Operator(Enum):
    DELETE = "d"
    YANK = "y"
