"""File list rendering with an explicit line -> path mapping."""

from dataclasses import dataclass, field
from typing import Optional

from autocommit.git.status import FileEntry
from autocommit.output import CHECK, STAGED_MARK, UNSTAGED_MARK

FILE_KEY_HELP = [
    ("toggle_select", "Toggle file selection"),
    ("preview", "Preview file diff"),
    ("stage_toggle", "Stage/unstage file"),
    ("regenerate", "Regenerate commit message"),
    ("quit", "Quit"),
]


def key_label(key: str) -> str:
    """Display form of a key name: 's' stays 's', 'enter' becomes '<Enter>'."""
    if len(key) == 1:
        return key
    return f"<{key.capitalize()}>"


@dataclass
class FileListing:
    """Rendered file panel text. Only lines that show a file map to a path."""
    lines: list[str] = field(default_factory=list)
    paths: dict[int, str] = field(default_factory=dict)

    def path_at(self, line: int) -> Optional[str]:
        return self.paths.get(line)

    def line_of(self, path: str) -> Optional[int]:
        for line, mapped in self.paths.items():
            if mapped == path:
                return line
        return None

    @property
    def first_file_line(self) -> Optional[int]:
        return min(self.paths) if self.paths else None


def render_file_list(files: list[FileEntry], keys: dict[str, str], select_mode: bool = False) -> FileListing:
    listing = FileListing()
    staged = sum(1 for f in files if f.staged)

    if select_mode:
        listing.lines.append("Select files to commit:")
    else:
        listing.lines.append("Changed files:")
    listing.lines.append(f"{len(files)} changed, {staged} staged")
    listing.lines.append("")

    for entry in files:
        mark = STAGED_MARK if entry.staged else UNSTAGED_MARK
        row = f"{mark} {entry.kind.code} {entry.path}"
        if select_mode:
            row = f"{CHECK if entry.selected else ' '} {row}"
        listing.paths[len(listing.lines)] = entry.path
        listing.lines.append(row)

    listing.lines.append("")
    listing.lines.append("Keys:")
    for action, label in FILE_KEY_HELP:
        if action == "toggle_select" and not select_mode:
            continue
        listing.lines.append(f"  {key_label(keys[action]):<10}{label}")
    listing.lines.append(f"  {key_label('tab'):<10}Next panel")

    return listing
