"""Textual implementation of the panel host."""

import logging
from typing import Callable, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import TextArea

from autocommit.config import Config, VALID_BORDERS
from autocommit.git import Repository
from autocommit.session import Session
from autocommit.ui.base import Panel, PanelHost, PanelSpec, Severity
from autocommit.ui.layout import DIFF, FILES, MESSAGE

logger = logging.getLogger(__name__)

NOTIFY_SEVERITIES = {
    Severity.INFO: "information",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}

_BORDER_CSS = "\n".join(
    f"PanelArea.border-{border} {{ border: {border} $secondary; }}\n"
    f"PanelArea.border-{border}:focus {{ border: {border} $accent; }}"
    for border in sorted(VALID_BORDERS)
)


class PanelArea(TextArea):
    """Text area that runs the session action bound to a pressed key.

    While editable only escape is dispatched, every other key edits text.
    """

    DEFAULT_CSS = "PanelArea { border: round $secondary; }\n" + _BORDER_CSS

    def __init__(self, name: str):
        super().__init__("", id=name, read_only=True, soft_wrap=False)
        self.key_actions: dict[str, Callable[[], object]] = {}
        self.display = False

    def on_key(self, event: events.Key) -> None:
        action = self.key_actions.get(event.key)
        if action is None:
            return
        if not self.read_only and event.key != "escape":
            return
        event.prevent_default()
        event.stop()
        action()


class TextualPanel(Panel):
    """One of the app's pre-composed panel areas, shown for the session's lifetime."""

    def __init__(self, spec: PanelSpec, widget: PanelArea):
        super().__init__(spec)
        self.widget = widget
        self._valid = True

        widget.border_title = spec.title
        widget.border_subtitle = spec.subtitle
        widget.set_class(True, f"border-{spec.border}")
        widget.styles.width = spec.width
        widget.styles.height = spec.height
        widget.display = True

    @property
    def is_valid(self) -> bool:
        return self._valid

    def write(self, lines: list[str]) -> None:
        self.widget.load_text('\n'.join(lines))

    def read(self) -> list[str]:
        return self.widget.text.split('\n')

    def set_editable(self, editable: bool) -> None:
        self.widget.read_only = not editable

    def bind(self, key: str, action: Callable[[], object]) -> None:
        self.widget.key_actions[key] = action

    def cursor_line(self) -> int:
        return self.widget.cursor_location[0]

    def set_cursor_line(self, line: int) -> None:
        self.widget.move_cursor((line, 0))

    def close(self) -> None:
        if not self._valid:
            return
        self._valid = False
        widget = self.widget
        widget.key_actions.clear()
        widget.read_only = True
        widget.load_text("")
        widget.set_class(False, f"border-{self.spec.border}")
        widget.display = False


class TextualHost(PanelHost):
    def __init__(self, app: 'CommitApp'):
        self.app = app

    def open_panel(self, spec: PanelSpec) -> Panel:
        return TextualPanel(spec, self.app.query_one(f"#{spec.name}", PanelArea))

    def focus(self, panel: Panel) -> None:
        if isinstance(panel, TextualPanel):
            panel.widget.focus()

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.app.notify(message, title="GitCommit", severity=NOTIFY_SEVERITIES[severity])

    def screen_size(self) -> tuple[int, int]:
        return self.app.size.width, self.app.size.height


class CommitApp(App[Optional[str]]):
    """Runs one commit session; exits with the committed message or None."""

    TITLE = "GitCommit"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        align: center middle;
    }
    #panels, #lower {
        width: auto;
        height: auto;
    }
    #lower {
        margin-top: 1;
    }
    #diff {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("tab", "next_panel", "Next panel", show=False, priority=True),
        Binding("shift+tab", "prev_panel", "Previous panel", show=False, priority=True),
    ]

    def __init__(self, repo: Repository, config: Config):
        super().__init__()
        self.session = Session(repo, TextualHost(self), config, on_close=self._session_closed)

    def compose(self) -> ComposeResult:
        with Vertical(id="panels"):
            yield PanelArea(MESSAGE)
            with Horizontal(id="lower"):
                yield PanelArea(FILES)
                yield PanelArea(DIFF)

    def on_mount(self) -> None:
        if not self.session.open():
            logger.debug("session did not open: %s", self.session.last_error)
            self.exit(None)

    def _session_closed(self, session: Session) -> None:
        self.exit(session.committed_message)

    def action_next_panel(self) -> None:
        self.session.focus_next()

    def action_prev_panel(self) -> None:
        self.session.focus_prev()
