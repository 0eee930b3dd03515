from __future__ import annotations

import pydoc
import shutil

cram = pydoc.cram

DEFAULT_COLUMNS = 80


def terminal_width() -> int:
    """The width of the terminal we are printing to.

    Falls back to 80 columns when the output isn't a terminal.
    """
    columns, _ = shutil.get_terminal_size((DEFAULT_COLUMNS, 24))
    return columns if columns > 0 else DEFAULT_COLUMNS
