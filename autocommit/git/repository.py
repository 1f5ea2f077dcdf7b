"""Repository - The git operations the commit workflow needs."""

import logging

from autocommit.git.runner import CommandRunner, CommandFailure, GitRunner, NotARepository
from autocommit.git.status import FileEntry, parse_status

logger = logging.getLogger(__name__)


class Repository:
    """Status, diff, stage/unstage and commit against one local checkout.

    Every call goes through the injected runner, so tests can swap git for
    canned output. Arguments are passed as an argv list, never through a
    shell, so paths and messages need no quoting.
    """

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or GitRunner()
        self.root: str | None = None

    def ensure_repository(self) -> None:
        """Fail fast if we're not in a git work tree, then run from its top level.

        Status paths are relative to the top level, so every later command
        (add, reset, diff) has to run there too.
        """
        try:
            inside = self.runner.run('rev-parse', '--is-inside-work-tree')
        except CommandFailure:
            raise NotARepository("Not in a git repository")
        if inside != 'true':
            raise NotARepository("Not in a git work tree")

        self.root = self.runner.run('rev-parse', '--show-toplevel')
        self.runner.cwd = self.root
        logger.debug("repository root: %s", self.root)

    def status(self) -> list[FileEntry]:
        return parse_status(self.runner.run('status', '--porcelain'))

    def diff(self, path: str, staged: bool = False) -> str:
        args = ['diff']
        if staged:
            args.append('--cached')
        return self.runner.run(*args, '--', path)

    def stage(self, entry: FileEntry) -> None:
        self.runner.run('add', '--', entry.path)

    def unstage(self, entry: FileEntry) -> None:
        """Drop the entry from the index without touching the working copy."""
        paths = [entry.path]
        if entry.orig_path:
            paths.insert(0, entry.orig_path)

        if self.has_head():
            self.runner.run('reset', '-q', 'HEAD', '--', *paths)
        else:
            # Nothing to reset to before the first commit
            self.runner.run('rm', '--cached', '-q', '--', entry.path)

    def commit(self, message: str) -> str:
        output = self.runner.run('commit', '-m', message)
        logger.debug("commit output: %s", output)
        return output

    def has_head(self) -> bool:
        try:
            self.runner.run('rev-parse', '--verify', '-q', 'HEAD')
        except CommandFailure:
            return False
        return True
