"""Status Parser - Turn `git status --porcelain` output into file entries."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Optional


class ChangeKind(Enum):
    """Single-character change code reported for the index or the work tree."""
    UNMODIFIED = ' '
    MODIFIED = 'M'
    ADDED = 'A'
    DELETED = 'D'
    RENAMED = 'R'
    COPIED = 'C'
    UNTRACKED = '?'

    @classmethod
    def from_code(cls, code: str) -> 'ChangeKind':
        """Map a raw status character; unknown codes count as modified."""
        try:
            return cls(code)
        except ValueError:
            return cls.MODIFIED

    @property
    def code(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return self.name.capitalize()


_OCTAL_ESCAPE = re.compile(r'[0-7]{3}')
_C_ESCAPES = {
    'a': '\a', 'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r',
    't': '\t', 'v': '\v', '"': '"', '\\': '\\',
}


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of paths with special characters."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == '\\' and i + 1 < len(body):
            octal = body[i + 1:i + 4]
            if _OCTAL_ESCAPE.fullmatch(octal):
                out.append(int(octal, 8))
                i += 4
                continue
            nxt = body[i + 1]
            out.extend(_C_ESCAPES.get(nxt, nxt).encode('utf-8'))
            i += 2
            continue
        out.extend(ch.encode('utf-8'))
        i += 1
    return out.decode('utf-8', errors='replace')


@dataclass
class FileEntry:
    """One tracked or untracked path in the working tree."""
    path: str
    index_status: ChangeKind
    worktree_status: ChangeKind
    orig_path: Optional[str] = None
    selected: bool = False

    @property
    def staged(self) -> bool:
        return self.index_status not in (ChangeKind.UNMODIFIED, ChangeKind.UNTRACKED)

    @property
    def kind(self) -> ChangeKind:
        """The change that applies to this entry: staged change first, then work tree."""
        if self.staged:
            return self.index_status
        if self.worktree_status is not ChangeKind.UNMODIFIED:
            return self.worktree_status
        return self.index_status

    @property
    def basename(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip('.').lower()

    @property
    def display_name(self) -> str:
        return f"[{self.kind.code}] {self.path}"


def parse_status(output: str) -> list[FileEntry]:
    """Parse porcelain v1 status text.

    Each line is two status characters, a space, then the path. Lines of
    three characters or fewer are noise and skipped. Order is preserved.
    """
    if not output:
        return []

    files = []
    for line in output.splitlines():
        if len(line) <= 3:
            continue

        index_status = ChangeKind.from_code(line[0])
        worktree_status = ChangeKind.from_code(line[1])
        path = line[3:]
        orig_path = None

        if ChangeKind.RENAMED in (index_status, worktree_status) or ChangeKind.COPIED in (index_status, worktree_status):
            if ' -> ' in path:
                orig_path, path = path.split(' -> ', 1)
                orig_path = _unquote(orig_path)

        files.append(FileEntry(
            path=_unquote(path),
            index_status=index_status,
            worktree_status=worktree_status,
            orig_path=orig_path,
        ))

    return files
