"""Panel UI Package"""

from autocommit.ui.base import Panel, PanelHost, PanelSpec, Severity
from autocommit.ui.layout import compute_layout
from autocommit.ui.listing import FileListing, render_file_list

__all__ = [
    "Panel",
    "PanelHost",
    "PanelSpec",
    "Severity",
    "compute_layout",
    "FileListing",
    "render_file_list",
]
