"""Console output abstraction.

Services print through ``ConsoleProtocol`` and never import Rich directly.
Two Actions-specific operations sit next to the styled printers:

- ``group(title)`` folds everything printed inside it into one collapsible
  section of the workflow log.
- ``fail(message)`` reports a fatal error through the runner's failure channel
  (an ``::error::`` annotation) in addition to printing it.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ContextManager, Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()  # Green, positive message
    ERROR = auto()  # Red, error message
    WARNING = auto()  # Yellow, warning message
    INFO = auto()  # Cyan, informational
    DIM = auto()  # Echoed commands and payloads
    HEADER = auto()  # Section header / group title

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def fail(self, message: str) -> None:
        """Report a fatal error to the CI failure channel."""
        ...

    def group(self, title: str) -> ContextManager[None]:
        """Fold output printed inside the block under ``title``."""
        ...


class RichConsole:
    """Console implementation using Rich.

    With ``actions=True`` groups and failures are emitted as GitHub Actions
    workflow commands; otherwise they render as a header and a red error.
    """

    def __init__(self, *, actions: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console()
        self._actions = actions
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        # Payload dumps and commands contain brackets; never read them as markup.
        if rich_style:
            self._console.print(message, style=rich_style, markup=False, highlight=False)
        else:
            self._console.print(message, markup=False, highlight=False)

    def success(self, message: str) -> None:
        self._console.print("[green]OK[/green] ", end="")
        self.print(message)

    def error(self, message: str) -> None:
        self._console.print("[red bold]error:[/red bold] ", end="")
        self.print(message)

    def warning(self, message: str) -> None:
        self._console.print("[yellow]warning:[/yellow] ", end="")
        self.print(message)

    def info(self, message: str) -> None:
        self._console.print("[cyan]info:[/cyan] ", end="")
        self.print(message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def fail(self, message: str) -> None:
        if self._actions:
            self._command(f"::error::{_escape_data(message)}")
        self.error(message)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        if not self._actions:
            self.header(title)
            yield
            return

        self._command(f"::group::{_escape_data(title)}")
        try:
            yield
        finally:
            self._command("::endgroup::")

    def _command(self, line: str) -> None:
        self._console.print(line, markup=False, highlight=False, soft_wrap=True)


def _escape_data(value: str) -> str:
    # Workflow command data escaping as documented for the Actions toolkit.
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


def _empty_strs() -> list[str]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    failures: list[str] = field(default_factory=_empty_strs)
    groups: list[str] = field(default_factory=_empty_strs)
    open_groups: int = 0

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def fail(self, message: str) -> None:
        self.failures.append(message)
        self.error(message)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self.groups.append(title)
        self.header(title)
        self.open_groups += 1
        try:
            yield
        finally:
            self.open_groups -= 1

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        """Get all output messages as a list of strings."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Get all output as a single newline-separated string."""
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
