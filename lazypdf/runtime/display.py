"""Page display: aspect-aware sizing and screen output.

A portrait page on a landscape terminal is fitted to the available height;
every other combination is fitted to the available width. Two rows and two
columns are kept free for the status row.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..document import RenderedPage
from .terminal import TerminalController

ROW_MARGIN = 2
COLUMN_MARGIN = 2


@dataclass(frozen=True)
class ImageSize:
    """Target size in cells; exactly one field is set."""

    width_cells: int | None = None
    height_cells: int | None = None


def is_landscape(width: int, height: int) -> bool:
    if height <= 0:
        return True
    return width / height >= 1


def choose_image_size(page_width: int, page_height: int, columns: int, rows: int) -> ImageSize:
    if not is_landscape(page_width, page_height) and is_landscape(columns, rows):
        return ImageSize(height_cells=max(1, rows - ROW_MARGIN))
    return ImageSize(width_cells=max(1, columns - COLUMN_MARGIN))


def display_page(terminal: TerminalController, page: RenderedPage, status: str = "") -> ImageSize:
    """Clear the screen, draw ``page`` and the status row; return the size used."""
    term = terminal.size()
    size = choose_image_size(page.width, page.height, term.columns, term.lines)
    terminal.clear_screen()
    terminal.emit_image(page.data, width_cells=size.width_cells, height_cells=size.height_cells)
    if status:
        terminal.draw_status(term.lines, term.columns, status)
    return size
