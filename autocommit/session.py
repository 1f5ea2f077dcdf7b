"""Panel Session - Stage files, preview diffs and commit from three panels.

One Session object owns every panel it opens and all derived state. It is
driven by key actions bound on those panels; each action runs to completion
(git call, status refresh, re-render) before the next key is handled.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from autocommit.config import Config, DEFAULT_KEYS
from autocommit.git import CommandFailure, DiffRenderer, FileEntry, GitError, Repository
from autocommit.git.status import ChangeKind
from autocommit.message import generate_message
from autocommit.ui.base import Panel, PanelHost, Severity
from autocommit.ui.layout import DIFF, FILES, MESSAGE, compute_layout
from autocommit.ui.listing import FileListing, key_label, render_file_list

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base for errors raised by session actions."""
    pass


class CommitValidationError(SessionError):
    """The commit request was rejected before git was called."""
    pass


class EmptyMessage(CommitValidationError):
    def __init__(self):
        super().__init__("No commit message provided")


class NoStagedFiles(CommitValidationError):
    def __init__(self):
        super().__init__("No staged files to commit")


class NoFilesSelected(CommitValidationError):
    def __init__(self):
        super().__init__("No files selected")


class SessionState(Enum):
    CLOSED = 'closed'
    OPEN = 'open'


class Focus(Enum):
    FILES = FILES
    MESSAGE = MESSAGE
    DIFF = DIFF


FOCUS_ORDER = [Focus.FILES, Focus.MESSAGE, Focus.DIFF]


class Session:
    """One open instance of the commit workflow.

    ``config.mode`` selects the variant: ``"staged"`` works on whatever is
    in the index, ``"select"`` lets the user mark files that get staged
    at commit time.
    """

    def __init__(
        self,
        repo: Repository,
        host: PanelHost,
        config: Config | None = None,
        on_close: Optional[Callable[['Session'], None]] = None,
    ):
        self.repo = repo
        self.host = host
        self.config = config or Config()
        self.keys = {**DEFAULT_KEYS, **self.config.keys}
        self.diffs = DiffRenderer(repo)
        self.on_close = on_close
        self.state = SessionState.CLOSED
        self.committed_message: Optional[str] = None
        self._reset()

    def _reset(self) -> None:
        self.files: list[FileEntry] = []
        self.commit_message = ""
        self.focus = Focus.FILES
        self.focused_path: Optional[str] = None
        self.editing = False
        self.message_edited = False
        self.last_error: Optional[Exception] = None
        self._selected_paths: set[str] = set()
        self._listing = FileListing()
        self._panels: dict[str, Panel] = {}

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    @property
    def select_mode(self) -> bool:
        return self.config.mode == "select"

    @property
    def staged_files(self) -> list[FileEntry]:
        return [f for f in self.files if f.staged]

    @property
    def selected_files(self) -> list[FileEntry]:
        return [f for f in self.files if f.selected]

    @property
    def message_files(self) -> list[FileEntry]:
        """Files the generated message describes."""
        return self.selected_files if self.select_mode else self.staged_files

    @property
    def focused_file_index(self) -> Optional[int]:
        if self.focused_path is None:
            return None
        return self._index_of(self.focused_path)

    def panel(self, name: str) -> Optional[Panel]:
        return self._panels.get(name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> bool:
        """Check the repository, load status and show the panels.

        Returns False (and stays closed) when not in a repository, when
        status fails, or when there is nothing to commit.
        """
        if self.is_open:
            self._notify("Commit panel is already open", Severity.WARNING)
            return False

        self._reset()
        self.committed_message = None

        try:
            self.repo.ensure_repository()
        except GitError as e:
            return self._fail(e)

        try:
            self.refresh()
        except CommandFailure as e:
            return self._fail(e, "Failed to get git status")

        if not self.files:
            self._notify("No changes to commit")
            return False

        self.commit_message = generate_message(self.message_files)
        self._open_panels()
        self.state = SessionState.OPEN
        self.render()
        self._set_focus(Focus.FILES)

        if self.select_mode:
            self._notify(f"Git Commit UI opened - select files with {key_label(self.keys['toggle_select'])}")
        else:
            self._notify(f"Git Commit UI opened - stage files with {key_label(self.keys['stage_toggle'])}")
        return True

    def close(self) -> None:
        """Release every panel and drop session state."""
        if not self.is_open and not self._panels:
            return
        try:
            self._release_panels()
        finally:
            self._reset()
            self.state = SessionState.CLOSED
            if self.on_close:
                self.on_close(self)

    def quit(self) -> bool:
        self.close()
        return True

    def refresh(self) -> None:
        """Rebuild file entries from git status. Raises CommandFailure."""
        files = self.repo.status()
        for entry in files:
            entry.selected = entry.path in self._selected_paths
        self._selected_paths = {f.path for f in files if f.selected}
        self.files = files

        if self.focused_path is not None and self._index_of(self.focused_path) is None:
            self.focused_path = None

    def _open_panels(self) -> None:
        columns, lines = self.host.screen_size()
        specs = compute_layout(self.config, columns, lines)
        specs[MESSAGE].subtitle = (
            f" {key_label(self.keys['commit'])} commit"
            f"  {key_label(self.keys['edit'])} edit"
            f"  {key_label(self.keys['regenerate'])} regenerate "
        )
        try:
            for name in (MESSAGE, FILES, DIFF):
                self._panels[name] = self.host.open_panel(specs[name])
        except Exception:
            self._release_panels()
            raise
        self._bind_keys()

    def _bind_keys(self) -> None:
        files = self._panels[FILES]
        message = self._panels[MESSAGE]
        keys = self.keys

        if self.select_mode:
            files.bind(keys['toggle_select'], self._on_toggle_select)
        files.bind(keys['preview'], self._on_preview)
        files.bind(keys['stage_toggle'], self._on_stage_toggle)
        files.bind(keys['regenerate'], self.regenerate_message)

        message.bind(keys['commit'], self.commit)
        message.bind(keys['edit'], self.edit_message)
        message.bind(keys['regenerate'], self.regenerate_message)

        for panel in self._panels.values():
            panel.bind(keys['quit'], self.quit)
            panel.bind('escape', self._on_escape)

    def _release_panels(self) -> None:
        panels, self._panels = self._panels, {}
        errors = []
        for panel in panels.values():
            if not panel.is_valid:
                continue
            try:
                panel.close()
            except Exception as e:
                logger.exception("closing panel %s failed", panel.name)
                errors.append(e)
        if errors:
            raise errors[0]

    # ------------------------------------------------------------------
    # Key actions
    # ------------------------------------------------------------------

    def toggle_select(self, index: int) -> bool:
        """Flip selection of one file (select mode only)."""
        entry = self._entry(index)
        if entry is None or not self.select_mode:
            return False

        entry.selected = not entry.selected
        if entry.selected:
            self._selected_paths.add(entry.path)
        else:
            self._selected_paths.discard(entry.path)

        self._auto_regenerate()
        self._render_files()
        self._render_message()
        return True

    def stage_toggle(self, index: int) -> bool:
        """Unstage a staged file or stage an unstaged one, then refresh everything."""
        entry = self._entry(index)
        if entry is None:
            return False

        was_staged = entry.staged
        try:
            if was_staged:
                self.repo.unstage(entry)
            else:
                self.repo.stage(entry)
        except CommandFailure as e:
            return self._fail(e, f"Failed to {'unstage' if was_staged else 'stage'} {entry.path}")

        try:
            self.refresh()
        except CommandFailure as e:
            self._mark_staged(entry, not was_staged)
            self._fail(e, "Failed to refresh git status")

        self._auto_regenerate()
        self.render()
        self._notify(f"{'Unstaged' if was_staged else 'Staged'}: {entry.path}")
        return True

    def preview_file(self, index: int) -> bool:
        entry = self._entry(index)
        if entry is None:
            return False
        self.focused_path = entry.path
        self._render_diff()
        return True

    def regenerate_message(self) -> bool:
        self.finish_edit()
        if self.select_mode and not self.selected_files:
            self.last_error = NoFilesSelected()
            self._notify(str(self.last_error), Severity.WARNING)
            return False

        self.commit_message = generate_message(self.message_files)
        self.message_edited = False
        self._render_message()
        self._set_focus(Focus.MESSAGE)
        return True

    def edit_message(self) -> bool:
        """Make the message panel editable and move focus there."""
        panel = self._panels.get(MESSAGE)
        if panel is None or not panel.is_valid:
            return False
        self.editing = True
        panel.set_editable(True)
        self._set_focus(Focus.MESSAGE)
        return True

    def finish_edit(self) -> None:
        """Adopt the edited text and make the message panel read-only again."""
        if not self.editing:
            return
        self.editing = False
        self._adopt_message()
        panel = self._panels.get(MESSAGE)
        if panel is not None and panel.is_valid:
            panel.set_editable(False)

    def commit(self) -> bool:
        """Validate, stage the selection (select mode) and commit.

        Closes the session on success; stays open on any failure.
        """
        if not self.is_open:
            return False

        self.finish_edit()
        self._adopt_message()
        message = self.commit_message.strip()

        try:
            if not message:
                raise EmptyMessage()
            if self.select_mode:
                if not self.selected_files:
                    raise NoFilesSelected()
            elif not self.staged_files:
                raise NoStagedFiles()
        except CommitValidationError as e:
            return self._fail(e)

        if self.select_mode and not self._stage_selection():
            return False

        if not self.staged_files:
            return self._fail(NoStagedFiles())

        subject = message.split('\n', 1)[0]
        if len(subject) > self.config.max_subject_length:
            self._notify(
                f"Subject is {len(subject)} characters (max {self.config.max_subject_length})",
                Severity.WARNING,
            )

        count = len(self.staged_files)
        try:
            self.repo.commit(message)
        except CommandFailure as e:
            self._refresh_and_render()
            return self._fail(e, "Failed to commit")

        self.committed_message = message
        self._notify(f"Successfully committed {count} {'file' if count == 1 else 'files'}")
        self.close()
        return True

    def focus_next(self) -> None:
        self._cycle_focus(1)

    def focus_prev(self) -> None:
        self._cycle_focus(-1)

    # ------------------------------------------------------------------
    # Key handlers resolving the file under the cursor
    # ------------------------------------------------------------------

    def _cursor_index(self) -> Optional[int]:
        panel = self._panels.get(FILES)
        if panel is None or not panel.is_valid:
            return None
        path = self._listing.path_at(panel.cursor_line())
        if path is None:
            return None
        return self._index_of(path)

    def _on_toggle_select(self) -> None:
        index = self._cursor_index()
        if index is not None:
            self.toggle_select(index)

    def _on_preview(self) -> None:
        index = self._cursor_index()
        if index is not None:
            self.preview_file(index)

    def _on_stage_toggle(self) -> None:
        index = self._cursor_index()
        if index is not None:
            self.stage_toggle(index)

    def _on_escape(self) -> None:
        if self.editing:
            self.finish_edit()
        else:
            self.quit()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> None:
        self._render_files()
        self._render_message()
        self._render_diff()

    def _render_files(self) -> None:
        panel = self._panels.get(FILES)
        if panel is None or not panel.is_valid:
            return

        previous_line = panel.cursor_line()
        previous_path = self._listing.path_at(previous_line)

        self._listing = render_file_list(self.files, self.keys, select_mode=self.select_mode)
        panel.write(self._listing.lines)

        line = self._listing.line_of(previous_path) if previous_path else None
        if line is None:
            line = previous_line if self._listing.path_at(previous_line) else self._listing.first_file_line
        if line is not None:
            panel.set_cursor_line(line)

    def _render_message(self) -> None:
        panel = self._panels.get(MESSAGE)
        if panel is None or not panel.is_valid or self.editing:
            return
        panel.write(self.commit_message.split('\n'))

    def _render_diff(self) -> None:
        panel = self._panels.get(DIFF)
        if panel is None or not panel.is_valid:
            return

        index = self.focused_file_index
        try:
            if index is not None:
                text = self.diffs.render_file_diff(self.files[index])
            else:
                text = self.diffs.render_all_staged_diffs(self.files)
        except CommandFailure as e:
            self._fail(e, "Failed to load diff")
            text = f"Failed to load diff:\n\n{e}"
        panel.write(text.split('\n'))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _entry(self, index: int) -> Optional[FileEntry]:
        if 0 <= index < len(self.files):
            return self.files[index]
        return None

    def _index_of(self, path: str) -> Optional[int]:
        for i, entry in enumerate(self.files):
            if entry.path == path:
                return i
        return None

    def _adopt_message(self) -> None:
        panel = self._panels.get(MESSAGE)
        if panel is None or not panel.is_valid:
            return
        text = '\n'.join(panel.read()).strip()
        if text != self.commit_message.strip():
            self.commit_message = text
            self.message_edited = True

    def _auto_regenerate(self) -> None:
        """Keep the generated message in step with the files unless the user edited it."""
        if not self.message_edited:
            self.commit_message = generate_message(self.message_files)

    def _stage_selection(self) -> bool:
        for entry in self.selected_files:
            if entry.staged:
                continue
            try:
                self.repo.stage(entry)
            except CommandFailure as e:
                self._fail(e, f"Failed to stage {entry.path}")
                self._refresh_and_render()
                return False
        return self._refresh_and_render()

    def _refresh_and_render(self) -> bool:
        try:
            self.refresh()
        except CommandFailure as e:
            self._fail(e, "Failed to refresh git status")
            return False
        finally:
            self.render()
        return True

    @staticmethod
    def _mark_staged(entry: FileEntry, staged: bool) -> None:
        """Show the expected index state until the next successful refresh."""
        if staged:
            kind = entry.worktree_status
            entry.index_status = ChangeKind.ADDED if kind is ChangeKind.UNTRACKED else kind
            entry.worktree_status = ChangeKind.UNMODIFIED
        else:
            if entry.worktree_status is ChangeKind.UNMODIFIED:
                entry.worktree_status = (
                    ChangeKind.UNTRACKED if entry.index_status is ChangeKind.ADDED else entry.index_status
                )
            entry.index_status = (
                ChangeKind.UNTRACKED if entry.worktree_status is ChangeKind.UNTRACKED else ChangeKind.UNMODIFIED
            )

    def _cycle_focus(self, step: int) -> None:
        if not self.is_open:
            return
        position = FOCUS_ORDER.index(self.focus)
        self._set_focus(FOCUS_ORDER[(position + step) % len(FOCUS_ORDER)])

    def _set_focus(self, focus: Focus) -> None:
        if self.editing and focus is not Focus.MESSAGE:
            self.finish_edit()
        self.focus = focus
        panel = self._panels.get(focus.value)
        if panel is not None and panel.is_valid:
            self.host.focus(panel)

    def _notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        logger.debug("%s: %s", severity.value, message)
        if severity is not Severity.ERROR and not self.config.show_notifications:
            return
        self.host.notify(message, severity)

    def _fail(self, error: Exception, context: str | None = None) -> bool:
        self.last_error = error
        self._notify(f"{context}: {error}" if context else str(error), Severity.ERROR)
        return False


def dry_run(repo: Repository) -> tuple[str, list[FileEntry]]:
    """Message that would be generated, without staging or committing.

    Describes the staged files, or every changed file when nothing is staged.
    Raises GitError.
    """
    repo.ensure_repository()
    files = repo.status()
    staged = [f for f in files if f.staged]
    targets = staged or files
    return generate_message(targets), targets
