"""Panel host interface the commit session renders through."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable


class Severity(Enum):
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'


@dataclass
class PanelSpec:
    """How a panel should be opened: size and position in cells, border and title."""
    name: str
    title: str
    width: int
    height: int
    row: int
    col: int
    border: str = "round"
    subtitle: str = ""


class Panel(ABC):
    """A text panel owned by one session."""

    def __init__(self, spec: PanelSpec):
        self.spec = spec

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        pass

    @abstractmethod
    def write(self, lines: list[str]) -> None:
        """Replace the panel content."""
        pass

    @abstractmethod
    def read(self) -> list[str]:
        pass

    @abstractmethod
    def set_editable(self, editable: bool) -> None:
        pass

    @abstractmethod
    def bind(self, key: str, action: Callable[[], None]) -> None:
        """Run ``action`` when ``key`` is pressed while this panel has focus.

        While the panel is editable only the escape binding fires.
        """
        pass

    @abstractmethod
    def cursor_line(self) -> int:
        """Zero-based line the cursor is on."""
        pass

    @abstractmethod
    def set_cursor_line(self, line: int) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the panel. Safe to call on an already closed panel."""
        pass


class PanelHost(ABC):
    """Creates panels, moves focus between them and shows notifications."""

    @abstractmethod
    def open_panel(self, spec: PanelSpec) -> Panel:
        pass

    @abstractmethod
    def focus(self, panel: Panel) -> None:
        pass

    @abstractmethod
    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        pass

    @abstractmethod
    def screen_size(self) -> tuple[int, int]:
        """Terminal size as (columns, lines)."""
        pass
