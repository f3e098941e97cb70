"""Interactive terminal single- and multi-select menus."""

from .controller import SelectorController, SelectorState, select
from .errors import (
    InputClosed,
    NotATerminal,
    SelectorConfigError,
    SelectorError,
    TerminalSignal,
)
from .keys import Command, KeyDecoder
from .model import Mode, SelectionModel, SessionResult
from .terminal import TerminalSession
from .window import ViewWindow

__version__ = "0.1.0"

__all__ = [
    "Command",
    "InputClosed",
    "KeyDecoder",
    "Mode",
    "NotATerminal",
    "SelectionModel",
    "SelectorConfigError",
    "SelectorController",
    "SelectorError",
    "SelectorState",
    "SessionResult",
    "TerminalSession",
    "TerminalSignal",
    "ViewWindow",
    "select",
]
