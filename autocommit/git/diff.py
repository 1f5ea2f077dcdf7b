"""Diff Renderer - Format git diffs for the preview panel."""

from dataclasses import dataclass
from typing import Optional

from autocommit.git.repository import Repository
from autocommit.git.status import ChangeKind, FileEntry

DIVIDER = '─' * 60

NO_DIFF_DELETED = "File deleted - no diff"
NO_DIFF_NEW_FILE = "New file - content not shown"
NO_DIFF_AVAILABLE = "No diff available (binary or unchanged)"


@dataclass
class FileDiff:
    """Raw diff text for one path and where it came from."""
    path: str
    text: str
    source: Optional[str] = None  # 'staged' or 'unstaged'

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


class DiffRenderer:
    """Fetches diffs through the repository and lays them out as text."""

    def __init__(self, repo: Repository):
        self.repo = repo

    def fetch(self, entry: FileEntry, staged_only: bool = False) -> FileDiff:
        """Staged diff first for staged entries, then the working-tree diff."""
        if staged_only or entry.staged:
            staged = self.repo.diff(entry.path, staged=True)
            if staged.strip() or staged_only:
                return FileDiff(path=entry.path, text=staged, source='staged')
        return FileDiff(path=entry.path, text=self.repo.diff(entry.path), source='unstaged')

    @staticmethod
    def placeholder(entry: FileEntry) -> str:
        if entry.kind is ChangeKind.DELETED:
            return NO_DIFF_DELETED
        if entry.kind in (ChangeKind.ADDED, ChangeKind.UNTRACKED):
            return NO_DIFF_NEW_FILE
        return NO_DIFF_AVAILABLE

    def render_file_diff(self, entry: FileEntry, staged_only: bool = False) -> str:
        diff = self.fetch(entry, staged_only=staged_only)
        if diff.is_empty:
            return '\n'.join([
                f"No changes to preview for: {entry.path}",
                "",
                f"Status: {entry.kind.description}",
                "",
                self.placeholder(entry),
            ])

        header = [
            f"{entry.path} ({diff.source})",
            f"Status: {entry.kind.description}",
            DIVIDER,
            "",
        ]
        return '\n'.join(header) + '\n' + diff.text

    def render_all_staged_diffs(self, files: list[FileEntry]) -> str:
        """Manifest of staged files followed by one section per file."""
        staged = [f for f in files if f.staged]
        if not staged:
            return '\n'.join([
                "No staged changes",
                "",
                "Stage files to preview their combined diff here.",
            ])

        total = len(staged)
        lines = [f"Staged changes ({total} {'file' if total == 1 else 'files'}):"]
        lines.extend(f"  {f.display_name}" for f in staged)
        lines.append("")

        for i, entry in enumerate(staged, 1):
            lines.append(DIVIDER)
            lines.append(f"[{i}/{total}] {entry.path} ({entry.kind.description})")
            lines.append(DIVIDER)
            text = self.repo.diff(entry.path, staged=True)
            if text.strip():
                lines.extend(text.split('\n'))
            else:
                lines.append(self.placeholder(entry))
            lines.append("")

        return '\n'.join(lines).rstrip('\n')
