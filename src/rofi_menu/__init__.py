"""rofi-menu - run rofi as a selector from Python

rofi-menu formats entries (plain or aligned into columns), feeds them to
rofi in dmenu mode and dispatches the selection to a callback chosen by
rofi's exit code: success, canceled, a custom keybinding, or a default.
"""

from rofi_menu.callbacks import Callback, print_output
from rofi_menu.layout import BreakdownError, ColumnLayout, Layout, PlainLayout
from rofi_menu.session import (
    OutputFormat,
    SelectionResult,
    SelectorSession,
    SessionError,
    SpawnError,
)

__version__ = "0.1.0"
__all__ = [
    "BreakdownError",
    "Callback",
    "ColumnLayout",
    "Layout",
    "OutputFormat",
    "PlainLayout",
    "SelectionResult",
    "SelectorSession",
    "SessionError",
    "SpawnError",
    "__version__",
    "print_output",
]
