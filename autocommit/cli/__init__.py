"""Command Line Interface Package"""

from autocommit.cli.main import main, alias_main, dry_run_main

__all__ = ["main", "alias_main", "dry_run_main"]
