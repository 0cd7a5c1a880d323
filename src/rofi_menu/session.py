"""Selector session module.

A SelectorSession collects entries, layout, keybindings and callbacks, runs
rofi in dmenu mode over them and hands the selection to exactly one callback,
chosen by rofi's exit code:

    0       entry confirmed        -> success callback
    1       selection canceled     -> canceled callback
    10 + i  custom keybinding i    -> callback of keybinding i
    other                          -> default callback

Example:
    >>> session = SelectorSession.new_instance()
    >>> session.set_name("branch").add_entries(["main", "develop"])
    >>> session.set_success_callback(lambda out: print(f"checkout {out}"))
    >>> session.add_keybinding("Alt+d", lambda out: print(f"delete {out}"))
    >>> result = session.start()

Security:
- No shell=True, arguments are passed as a list
"""

import contextlib
import logging
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import IO

from rofi_menu.callbacks import Callback, print_output
from rofi_menu.config_manager import ConfigError
from rofi_menu.executable import ExecutableLocator, ExecutableNotFoundError
from rofi_menu.layout import Layout, PlainLayout

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_CANCELED = 1
# Exit code of the first custom keybinding
KEYBINDING_EXIT_OFFSET = 10


class SessionError(Exception):
    """Raised when a selector session cannot be created or run."""

    pass


class SpawnError(SessionError):
    """Raised when the selector process cannot be started."""

    pass


class OutputFormat(str, Enum):
    """Values accepted by rofi's ``-format`` option."""

    STRING = "s"
    INDEX = "i"
    INDEX_ONE_BASED = "d"
    QUOTED = "q"
    FILTER = "p"
    FILTER_QUOTED = "f"
    FILTER_WORDS = "F"


VALID_FORMATS = frozenset(fmt.value for fmt in OutputFormat)


@dataclass
class SelectionResult:
    """Outcome of one selector run."""

    returncode: int
    output: str


class SelectorSession:
    """Configure and run one rofi selection.

    Setters return the session so calls can be chained. The exception is
    set_format(), which returns whether rofi knows the format character.
    All configuration must be done before start(); start() itself only
    reads it.
    """

    MODE_FLAG = "-dmenu"
    PROMPT_FLAG = "-p"
    MESSAGE_FLAG = "-mesg"
    FORMAT_FLAG = "-format"
    KEYBINDING_FLAG = "-kb-custom-{index}"

    def __init__(self, executable_path: str):
        """Initialize session.

        Args:
            executable_path: Path of the rofi executable
        """
        self._executable_path = executable_path
        self.name = ""
        self.message = ""
        self.format = ""
        self.layout: Layout = PlainLayout()
        self.entries: list[str] = []
        self.keys: list[str] = []
        self.callbacks: list[Callback] = []
        self.default_callback: Callback = print_output
        self.success_callback: Callback = print_output
        self.canceled_callback: Callback = print_output

    @classmethod
    def new_instance(cls, config_path: str | None = None) -> "SelectorSession":
        """Create a session with the executable resolved from config or PATH.

        Args:
            config_path: Custom config file path (optional)

        Returns:
            SelectorSession with default settings

        Raises:
            SessionError: If the config file is malformed or rofi cannot be found
        """
        try:
            executable_path = ExecutableLocator.locate(config_path)
        except ConfigError as e:
            raise SessionError(f"Failed to read configuration: {e}") from e
        except ExecutableNotFoundError as e:
            raise SessionError(str(e)) from e

        logger.debug(f"Selector session using {executable_path}")
        return cls(executable_path)

    @property
    def executable_path(self) -> str:
        return self._executable_path

    def set_name(self, name: str) -> "SelectorSession":
        """Set the prompt shown left of the input bar."""
        self.name = name
        return self

    def set_message(self, message: str) -> "SelectorSession":
        """Set the message shown below the input bar."""
        self.message = message
        return self

    def set_layout(self, layout: Layout) -> "SelectorSession":
        self.layout = layout
        return self

    def set_format(self, fmt: str | OutputFormat) -> bool:
        """Set rofi's output format.

        An unknown format is logged and stored anyway; rofi reports it
        when started.

        Args:
            fmt: One of the OutputFormat characters

        Returns:
            True if the format is known, False otherwise
        """
        value = fmt.value if isinstance(fmt, OutputFormat) else fmt
        self.format = value

        if value not in VALID_FORMATS:
            logger.warning(
                f"Unknown output format '{value}', expected one of "
                f"{', '.join(sorted(VALID_FORMATS))}"
            )
            return False
        return True

    def set_default_callback(self, callback: Callback) -> "SelectorSession":
        self.default_callback = callback
        return self

    def set_success_callback(self, callback: Callback) -> "SelectorSession":
        self.success_callback = callback
        return self

    def set_canceled_callback(self, callback: Callback) -> "SelectorSession":
        self.canceled_callback = callback
        return self

    def add_keybinding(self, key: str, callback: Callback) -> "SelectorSession":
        """Bind a key to a callback.

        The n-th binding (0-based) is reported by rofi as exit code 10 + n.
        """
        self.keys.append(key)
        self.callbacks.append(callback)
        return self

    def add_entry(self, entry: str) -> "SelectorSession":
        self.entries.append(entry)
        return self

    def add_entries(self, entries: Iterable[str]) -> "SelectorSession":
        self.entries.extend(entries)
        return self

    def build_args(self) -> list[str]:
        """Build the rofi command line.

        Keybinding n (1-based) becomes rofi's ``-kb-custom-<n>`` option, the
        custom-binding slot that makes rofi exit with code 9 + n.

        Returns:
            Command and arguments in a fixed order: mode, prompt, message,
            keybindings in insertion order, output format
        """
        args = [self._executable_path, self.MODE_FLAG]

        if self.name:
            args.extend([self.PROMPT_FLAG, self.name])
        if self.message:
            args.extend([self.MESSAGE_FLAG, self.message])

        for i, key in enumerate(self.keys, 1):
            args.extend([self.KEYBINDING_FLAG.format(index=i), key])

        if self.format:
            args.extend([self.FORMAT_FLAG, self.format])

        return args

    def format_entries(self) -> list[str]:
        """Apply the layout to every entry, newline-terminated."""
        lines = []
        for entry in self.entries:
            line = self.layout.apply(entry)
            if not line.endswith("\n"):
                line += "\n"
            lines.append(line)
        return lines

    def start(self) -> SelectionResult:
        """Run rofi and dispatch its result.

        Blocks until rofi exits, then invokes exactly one callback with the
        captured output.

        Returns:
            SelectionResult with rofi's exit code and output

        Raises:
            SpawnError: If rofi cannot be started
        """
        args = self.build_args()
        logger.debug(f"Starting selector: {args}")

        try:
            process = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise SpawnError(f"Failed to start {self._executable_path}: {e}") from e

        # Popen's context manager closes both pipes and waits on every path
        with process:
            self._feed(process.stdin)
            output = process.stdout.read()
            returncode = process.wait()

        logger.debug(f"Selector exited with code {returncode}")
        self.dispatch(returncode, output)
        return SelectionResult(returncode=returncode, output=output)

    def _feed(self, stdin: IO[str]) -> None:
        try:
            for line in self.format_entries():
                stdin.write(line)
            stdin.close()
        except BrokenPipeError:
            logger.debug("Selector closed its input before all entries were written")
            with contextlib.suppress(BrokenPipeError):
                stdin.close()

    def resolve_callback(self, returncode: int) -> Callback:
        """Return the callback responsible for an exit code."""
        if returncode == EXIT_SUCCESS:
            return self.success_callback
        if returncode == EXIT_CANCELED:
            return self.canceled_callback

        index = returncode - KEYBINDING_EXIT_OFFSET
        if 0 <= index < len(self.callbacks):
            return self.callbacks[index]
        return self.default_callback

    def dispatch(self, returncode: int, output: str) -> None:
        """Invoke the callback for an exit code with the captured output."""
        callback = self.resolve_callback(returncode)
        callback(output)


__all__ = [
    "EXIT_CANCELED",
    "EXIT_SUCCESS",
    "KEYBINDING_EXIT_OFFSET",
    "OutputFormat",
    "SelectionResult",
    "SelectorSession",
    "SessionError",
    "SpawnError",
    "VALID_FORMATS",
]
