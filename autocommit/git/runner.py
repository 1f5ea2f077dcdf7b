"""Command Runner - Execute git and capture its output."""

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class CommandFailure(GitError):
    """A git command could not start or exited non-zero.

    The message is the captured output of the command, so it can be shown
    to the user as-is.
    """

    def __init__(self, output: str, command: list[str] | None = None, returncode: int | None = None):
        super().__init__(output)
        self.output = output
        self.command = command or []
        self.returncode = returncode

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)


class NotARepository(GitError):
    """Raised when the working directory is not inside a git work tree."""
    pass


class CommandRunner(ABC):
    """Runs one version-control command and returns its output.

    ``cwd`` is the directory commands run in; None means the process cwd.
    """

    cwd: str | Path | None = None

    @abstractmethod
    def run(self, *args: str) -> str:
        """Run the command with ``args``.

        Returns combined stdout/stderr with trailing whitespace stripped.
        Raises CommandFailure when the process can't start or exits non-zero.
        """
        pass


class GitRunner(CommandRunner):
    """Runs git as a blocking subprocess. No timeout is applied."""

    def __init__(self, executable: str = 'git', cwd: str | Path | None = None):
        self.executable = executable
        self.cwd = cwd

    def run(self, *args: str) -> str:
        command = [self.executable, *args]
        logger.debug("running %s", shlex.join(command))
        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
        except subprocess.CalledProcessError as e:
            output = (e.output or '').rstrip()
            logger.debug("%s exited with %s: %s", shlex.join(command), e.returncode, output)
            raise CommandFailure(output or f"git {' '.join(args)} failed", command, e.returncode)
        except OSError as e:
            raise CommandFailure(f"Could not run {self.executable}: {e}", command)
        return result.stdout.rstrip()
