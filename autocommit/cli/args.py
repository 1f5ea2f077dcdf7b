"""CLI Argument Parsing"""

import argparse
import argcomplete

from autocommit import __version__
from autocommit.config import VALID_MODES


def parse_args(argv: list[str] | None = None, prog: str | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=prog,
        description='Stage files, preview diffs and commit from an interactive panel',
        epilog='Example: git-commit-ui --mode select'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Workflow options
    parser.add_argument('--dry-run', action='store_true', help='Only print the generated message, do not stage or commit')
    parser.add_argument('--mode', type=str, choices=sorted(VALID_MODES), help='staged: commit what is staged; select: pick files to stage')

    # Logging options
    parser.add_argument('--verbose', action='store_true', help='Log every git command (debug level)')
    parser.add_argument('--log-file', type=str, metavar='PATH', help='Write debug logs to PATH while the UI is open')

    # Setup/config
    parser.add_argument('--setup', action='store_true', help='Configure defaults')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
