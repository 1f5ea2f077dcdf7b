"""Git Operations Package"""

from autocommit.git.runner import CommandRunner, GitRunner, GitError, CommandFailure, NotARepository
from autocommit.git.status import ChangeKind, FileEntry, parse_status
from autocommit.git.repository import Repository
from autocommit.git.diff import DiffRenderer

__all__ = [
    "CommandRunner",
    "GitRunner",
    "GitError",
    "CommandFailure",
    "NotARepository",
    "ChangeKind",
    "FileEntry",
    "parse_status",
    "Repository",
    "DiffRenderer",
]
