"""Commit Message Heuristic - Conventional-commit subject from changed files."""

from autocommit.git.status import ChangeKind, FileEntry

DOCS_EXTENSIONS = {'md', 'txt', 'rst'}

SOURCE_EXTENSIONS = {
    'py', 'js', 'lua', 'java', 'ts', 'jsx', 'tsx', 'go', 'rs', 'rb',
    'c', 'h', 'cc', 'cpp', 'hpp', 'cs', 'kt', 'swift', 'php', 'sh', 'vim',
}

ADDED_KINDS = (ChangeKind.ADDED, ChangeKind.UNTRACKED)
MODIFIED_KINDS = (ChangeKind.MODIFIED, ChangeKind.RENAMED, ChangeKind.COPIED)


def partition(files: list[FileEntry]) -> tuple[list[FileEntry], list[FileEntry], list[FileEntry]]:
    """Split files into (added, modified, deleted). Renames and copies count as modified."""
    added, modified, deleted = [], [], []
    for entry in files:
        kind = entry.kind
        if kind in ADDED_KINDS:
            added.append(entry)
        elif kind in MODIFIED_KINDS:
            modified.append(entry)
        elif kind is ChangeKind.DELETED:
            deleted.append(entry)
    return added, modified, deleted


def _single_update(entry: FileEntry) -> str:
    if entry.extension in DOCS_EXTENSIONS:
        return f"docs: update {entry.basename}"
    if entry.extension in SOURCE_EXTENSIONS:
        return f"fix: update {entry.basename}"
    return f"chore: update {entry.basename}"


def generate_message(files: list[FileEntry]) -> str:
    """Build a one-line message. Same files in, same message out."""
    if not files:
        return "chore: update files"

    added, modified, deleted = partition(files)

    if added and not modified and not deleted:
        if len(added) == 1:
            return f"feat: add {added[0].basename}"
        return f"feat: add {len(added)} new files"

    if deleted and not added and not modified:
        if len(deleted) == 1:
            return f"remove: delete {deleted[0].basename}"
        return f"remove: delete {len(deleted)} files"

    if modified and not added and not deleted:
        if len(modified) == 1:
            return _single_update(modified[0])
        return f"chore: update {len(modified)} files"

    parts = []
    if added:
        parts.append(f"add {len(added)} files")
    if modified:
        parts.append(f"update {len(modified)} files")
    if deleted:
        parts.append(f"remove {len(deleted)} files")

    if not parts:
        return "chore: update repository"
    return "chore: " + ", ".join(parts)
