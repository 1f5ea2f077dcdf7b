"""
Shared fixtures: an in-memory git and a recording panel host.

FakeGit answers the handful of git commands the Repository issues, backed by
three dicts (HEAD, index, work tree) of path -> content.
"""

import shutil
import subprocess
from typing import Callable

import pytest

from autocommit.config import Config
from autocommit.git import CommandFailure, CommandRunner, Repository
from autocommit.session import Session
from autocommit.ui.base import Panel, PanelHost, PanelSpec, Severity


class FakeGit(CommandRunner):
    """Command runner that emulates git status/diff/add/reset/commit."""

    def __init__(self, head=None, index=None, worktree=None, is_repo=True, work_tree=True):
        self.head: dict[str, str] = dict(head or {})
        self.index: dict[str, str] = dict(self.head if index is None else index)
        self.worktree: dict[str, str] = dict(self.index if worktree is None else worktree)
        self.is_repo = is_repo
        self.work_tree = work_tree
        self.toplevel = "/work/repo"
        self.commits: list[str] = ["initial"] if self.head else []
        self.calls: list[tuple[str, ...]] = []
        self.failures: dict[str, str] = {}

    # -- test helpers ---------------------------------------------------

    def write(self, path: str, content: str) -> None:
        self.worktree[path] = content

    def delete(self, path: str) -> None:
        self.worktree.pop(path, None)

    def fail(self, subcommand: str, output: str) -> None:
        """Make every later `git <subcommand>` fail with ``output``."""
        self.failures[subcommand] = output

    def commands(self, subcommand: str) -> list[tuple[str, ...]]:
        return [c for c in self.calls if c and c[0] == subcommand]

    # -- CommandRunner --------------------------------------------------

    def run(self, *args: str) -> str:
        self.calls.append(args)
        subcommand = args[0]
        if subcommand in self.failures:
            raise CommandFailure(self.failures[subcommand], ['git', *args], 1)
        if not self.is_repo:
            raise CommandFailure(
                "fatal: not a git repository (or any of the parent directories): .git",
                ['git', *args], 128,
            )
        handler = getattr(self, f"_git_{subcommand.replace('-', '_')}")
        return handler(list(args[1:])).rstrip()

    def _git_rev_parse(self, args):
        if '--verify' in args:
            if not self.commits:
                raise CommandFailure("", ['git', 'rev-parse', *args], 1)
            return "0" * 40
        if '--is-inside-work-tree' in args:
            return "true" if self.work_tree else "false"
        if '--show-toplevel' in args:
            return self.toplevel
        raise AssertionError(f"unexpected rev-parse {args}")

    def _git_status(self, args):
        lines = []
        tracked = sorted(set(self.head) | set(self.index))
        for path in tracked:
            x = self._code(self.head, self.index, path)
            if path in self.index and path not in self.worktree:
                y = 'D'
            elif path in self.index and self.index[path] != self.worktree[path]:
                y = 'M'
            else:
                y = ' '
            if x != ' ' or y != ' ':
                lines.append(f"{x}{y} {path}")
        for path in sorted(set(self.worktree) - set(self.index) - set(self.head)):
            lines.append(f"?? {path}")
        return '\n'.join(lines)

    @staticmethod
    def _code(base, other, path):
        if path in other and path not in base:
            return 'A'
        if path in base and path not in other:
            return 'D'
        if base[path] != other[path]:
            return 'M'
        return ' '

    def _git_diff(self, args):
        path = args[args.index('--') + 1]
        if '--cached' in args:
            before, after = self.head.get(path), self.index.get(path)
        else:
            if path not in self.index:
                return ""
            before, after = self.index.get(path), self.worktree.get(path)
        if before == after:
            return ""
        lines = [f"diff --git a/{path} b/{path}", f"--- a/{path}", f"+++ b/{path}"]
        if before is not None:
            lines.append(f"-{before}")
        if after is not None:
            lines.append(f"+{after}")
        return '\n'.join(lines)

    def _git_add(self, args):
        for path in args[args.index('--') + 1:]:
            if path in self.worktree:
                self.index[path] = self.worktree[path]
            else:
                self.index.pop(path, None)
        return ""

    def _git_reset(self, args):
        for path in args[args.index('--') + 1:]:
            if path in self.head:
                self.index[path] = self.head[path]
            else:
                self.index.pop(path, None)
        return ""

    def _git_rm(self, args):
        for path in args[args.index('--') + 1:]:
            self.index.pop(path, None)
        return ""

    def _git_commit(self, args):
        message = args[args.index('-m') + 1]
        if self.index == self.head:
            raise CommandFailure("nothing to commit, working tree clean", ['git', 'commit', *args], 1)
        self.head = dict(self.index)
        self.commits.append(message)
        return f"[main abc1234] {message.splitlines()[0]}"


class FakePanel(Panel):
    """Panel that keeps its text in memory and dispatches keys like the real host."""

    def __init__(self, spec: PanelSpec):
        super().__init__(spec)
        self.lines: list[str] = []
        self.editable = False
        self.bindings: dict[str, Callable] = {}
        self.cursor = 0
        self.valid = True
        self.close_calls = 0

    @property
    def is_valid(self) -> bool:
        return self.valid

    def write(self, lines):
        self.lines = list(lines)

    def read(self):
        return list(self.lines)

    def set_editable(self, editable):
        self.editable = editable

    def bind(self, key, action):
        self.bindings[key] = action

    def cursor_line(self):
        return self.cursor

    def set_cursor_line(self, line):
        self.cursor = line

    def close(self):
        self.close_calls += 1
        self.valid = False

    # -- test helpers ---------------------------------------------------

    def press(self, key: str):
        action = self.bindings.get(key)
        if action is None or (self.editable and key != 'escape'):
            return None
        return action()

    def type_text(self, text: str) -> None:
        assert self.editable, "panel is read-only"
        self.lines = text.split('\n')

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)


class FakeHost(PanelHost):
    def __init__(self, size=(120, 40)):
        self.size = size
        self.panels: dict[str, FakePanel] = {}
        self.opened: list[PanelSpec] = []
        self.notifications: list[tuple[str, Severity]] = []
        self.focused: str | None = None

    def open_panel(self, spec):
        panel = FakePanel(spec)
        self.panels[spec.name] = panel
        self.opened.append(spec)
        return panel

    def focus(self, panel):
        self.focused = panel.name

    def notify(self, message, severity=Severity.INFO):
        self.notifications.append((message, severity))

    def screen_size(self):
        return self.size

    def messages(self, severity: Severity | None = None) -> list[str]:
        return [m for m, s in self.notifications if severity is None or s is severity]


@pytest.fixture
def fake_git():
    return FakeGit(head={"README.md": "hello", "app.py": "print(1)"})


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def make_session(host):
    """Factory: Session over a FakeGit with the given config overrides."""
    def _make(git: FakeGit, **config):
        return Session(Repository(git), host, Config(**config))
    return _make


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """A real, empty git repository in a temp dir (skipped without git)."""
    if shutil.which('git') is None:
        pytest.skip("git is not installed")

    def git(*args):
        return subprocess.run(
            ['git', *args], cwd=tmp_path, check=True,
            capture_output=True, text=True,
        ).stdout

    git('init', '-q')
    git('config', 'user.email', 'dev@example.com')
    git('config', 'user.name', 'Dev')
    git('config', 'commit.gpgsign', 'false')
    monkeypatch.chdir(tmp_path)
    return tmp_path, git
