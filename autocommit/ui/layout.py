"""Panel geometry for the three-panel commit layout."""

from autocommit.config import Config
from autocommit.ui.base import PanelSpec

FILES = 'files'
MESSAGE = 'message'
DIFF = 'diff'

TITLES = {
    MESSAGE: " Git Commit ",
    FILES: " Files ",
    DIFF: " Preview ",
}

MIN_PANEL_HEIGHT = 3


def compute_layout(config: Config, columns: int, lines: int) -> dict[str, PanelSpec]:
    """Centered box: message panel on top, files and preview side by side below.

    Panels are separated by a one-cell gap.
    """
    width = max(int(columns * config.width), 20)
    height = max(int(lines * config.height), MIN_PANEL_HEIGHT * 2 + 1)
    row = max((lines - height) // 2, 0)
    col = max((columns - width) // 2, 0)

    file_width = int(width * (1 - config.preview_width))
    preview_width = width - file_width - 1
    message_height = min(config.message_height, height - MIN_PANEL_HEIGHT - 1)
    lower_height = height - message_height - 1
    lower_row = row + message_height + 1

    geometry = {
        MESSAGE: (width, message_height, row, col),
        FILES: (file_width, lower_height, lower_row, col),
        DIFF: (preview_width, lower_height, lower_row, col + file_width + 1),
    }
    return {
        name: PanelSpec(
            name=name,
            title=TITLES[name],
            width=w,
            height=h,
            row=r,
            col=c,
            border=config.border,
        )
        for name, (w, h, r, c) in geometry.items()
    }
