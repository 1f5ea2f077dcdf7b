"""
Git AutoCommit

Interactive staging, diff preview and commit panels for a local git checkout.
"""

__version__ = "1.0.0"

# Commit types the message heuristic can produce
COMMIT_TYPES = {
    'feat': 'New files added',
    'fix': 'A single source file updated',
    'docs': 'A single documentation file updated',
    'chore': 'Maintenance, several files or mixed changes',
    'remove': 'Files deleted',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())
