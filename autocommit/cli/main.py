"""CLI Main Entry Point"""

import logging
import os
import sys

from textual.logging import TextualHandler

from autocommit.config import Config, VALID_MODES, load_config
from autocommit.git import FileEntry, GitError, Repository
from autocommit.output import (
    RULE, STAGED_MARK, UNSTAGED_MARK,
    bold, colorize_commit_type, dim, print_error, print_success, print_warning,
)
from autocommit.session import dry_run
from autocommit.ui.app import CommitApp

from autocommit.cli.args import parse_args
from autocommit.cli.commands import display_config, run_setup, run_install_completion

MAX_FILES_SHOWN = 8


def _display_file_list(files: list[FileEntry], max_shown: int = MAX_FILES_SHOWN) -> None:
    """Show which files the message describes, collapsing long lists."""
    if not files:
        return
    print(bold("Changes:"))
    shown = files[:max_shown]
    remaining = len(files) - len(shown)
    for entry in shown:
        mark = STAGED_MARK if entry.staged else UNSTAGED_MARK
        print(dim(f"  {mark} {entry.display_name}"))
    if remaining > 0:
        print(dim(f"  ... and {remaining} more files"))


def _display_message(message: str) -> None:
    """Display commit message with horizontal rules and colored type."""
    colored = colorize_commit_type(message)
    lines = colored.split('\n')
    # Use raw message for width calculation (no ANSI codes)
    raw_lines = message.split('\n')
    width = max((len(line) for line in raw_lines), default=40)
    print(f"\n{dim(RULE * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim(RULE * width))


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.setup:
        return run_setup(), True
    return 0, False


def _resolve_mode(args, config: Config) -> str:
    """Resolve workflow mode.

    Precedence: CLI args > environment variables > config file
    """
    if args.mode:
        return args.mode
    env_mode = os.environ.get('AUTOCOMMIT_MODE')
    if env_mode:
        if env_mode in VALID_MODES:
            return env_mode
        print_warning(f"Ignoring AUTOCOMMIT_MODE={env_mode} (expected one of: {', '.join(sorted(VALID_MODES))})")
    return config.mode


def _configure_logging(args, interactive: bool) -> None:
    if not args.verbose:
        return
    if args.log_file:
        handler = logging.FileHandler(args.log_file, encoding='utf-8')
    elif interactive:
        # The UI owns the terminal; records go to the textual devtools console
        handler = TextualHandler()
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s %(message)s'))
    logging.basicConfig(level=logging.DEBUG, handlers=[handler], force=True)


def _prepare_repository(repo: Repository) -> list[FileEntry] | None:
    """Pre-flight checks before the UI takes over the terminal.

    Returns:
        list of changed files, or None when git failed (already reported)
    """
    try:
        repo.ensure_repository()
        return repo.status()
    except GitError as e:
        print_error(str(e))
        return None


def run_dry(repo: Repository, is_pipe: bool = False) -> int:
    """Print the message that would be used, without staging or committing."""
    try:
        message, files = dry_run(repo)
    except GitError as e:
        print_error(str(e))
        return 1

    if not files:
        print(dim("No changes to commit"))
        return 0

    # Pipe mode: output raw message and exit
    if is_pipe:
        print(message)
        return 0

    _display_file_list(files)
    print("\nWould commit with message:")
    _display_message(message)
    return 0


def run_interactive(repo: Repository, config: Config) -> int:
    files = _prepare_repository(repo)
    if files is None:
        return 1
    if not files:
        print(dim("No changes to commit"))
        return 0

    app = CommitApp(repo, config)
    committed = app.run()

    if committed:
        subject = committed.split("\n", 1)[0]
        print_success(f"Committed: {colorize_commit_type(subject)}")
        return 0

    if app.session.last_error is not None:
        print_error(str(app.session.last_error))
        return 1

    print(dim("Cancelled."))
    return 0


def main(argv: list[str] | None = None, prog: str | None = None, dry_run_only: bool = False) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv, prog)

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    config = load_config()
    config.mode = _resolve_mode(args, config)

    interactive = not (args.dry_run or dry_run_only)
    _configure_logging(args, interactive)

    repo = Repository()
    if not interactive:
        # Raw message only when piped
        return run_dry(repo, is_pipe=not sys.stdout.isatty())
    return run_interactive(repo, config)


def alias_main() -> int:
    """`autocommit`: same workflow as git-commit-ui."""
    return main(prog='autocommit')


def dry_run_main() -> int:
    """`autocommit-dry`: report the generated message only."""
    return main(prog='autocommit-dry', dry_run_only=True)
