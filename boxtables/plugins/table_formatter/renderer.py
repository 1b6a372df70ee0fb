# boxtables/plugins/table_formatter/renderer.py
"""Box-drawing renderer for validated pipe tables.

Output shape:

    ┌───────┬─────────┐
    │ Style │ Example │
    ├───────┼─────────┤
    │ bold  │ text    │
    └───────┴─────────┘

Every pair of adjacent data rows is separated by a mid border. Column
widths come from visual_width(), so cells with concealed markdown may look
wider than their column in raw form and line up once concealed.
"""

import re
from typing import List, Optional

from .model import MIN_COLUMN_WIDTH, Alignment, TableBlock
from .validator import parse_alignment
from .width import WidthCache, visual_width

# Box-drawing characters for table rendering
BOX_CHARS = {
    "top_left": "┌",
    "top_right": "┐",
    "bottom_left": "└",
    "bottom_right": "┘",
    "horizontal": "─",
    "vertical": "│",
    "t_down": "┬",
    "t_up": "┴",
    "t_right": "├",
    "t_left": "┤",
    "cross": "┼",
}

# Glyphs that leak into pipe cells from half-formatted model output
_STRAY_BOX_GLYPHS = re.compile(r"[│┌┐└┘├┤┬┴┼─]")


def sanitize_cell(cell: str) -> str:
    """Drop stray box-drawing glyphs from a pipe-table cell."""
    return _STRAY_BOX_GLYPHS.sub("", cell).strip()


def pad_to_width(
    text: str,
    target_width: int,
    align: Alignment = "left",
    cache: Optional[WidthCache] = None,
) -> str:
    """Pad a cell to a target visual width.

    Args:
        text: The cell text, markdown included.
        target_width: The desired visual width.
        align: Alignment - 'left', 'right', or 'center'.
        cache: Width cache to measure with.

    Returns:
        The padded string.
    """
    padding_needed = max(0, target_width - visual_width(text, cache))

    if align == "right":
        return " " * padding_needed + text
    elif align == "center":
        left_pad = padding_needed // 2
        right_pad = padding_needed - left_pad
        return " " * left_pad + text + " " * right_pad
    else:  # left
        return text + " " * padding_needed


def make_border(position: str, col_widths: List[int]) -> str:
    """Create a horizontal border line ('top', 'middle' or 'bottom')."""
    if position == "top":
        left = BOX_CHARS["top_left"]
        mid = BOX_CHARS["t_down"]
        right = BOX_CHARS["top_right"]
    elif position == "middle":
        left = BOX_CHARS["t_right"]
        mid = BOX_CHARS["cross"]
        right = BOX_CHARS["t_left"]
    else:  # bottom
        left = BOX_CHARS["bottom_left"]
        mid = BOX_CHARS["t_up"]
        right = BOX_CHARS["bottom_right"]

    horiz = BOX_CHARS["horizontal"]
    segments = [horiz * (w + 2) for w in col_widths]
    return left + mid.join(segments) + right


def make_row(
    cells: List[str],
    col_widths: List[int],
    alignments: List[Alignment],
    cache: Optional[WidthCache] = None,
) -> str:
    """Create a data row; missing trailing cells render empty."""
    vert = BOX_CHARS["vertical"]
    formatted_cells = []

    for col, (width, align) in enumerate(zip(col_widths, alignments)):
        cell = cells[col] if col < len(cells) else ""
        formatted_cells.append(f" {pad_to_width(cell, width, align, cache)} ")

    return vert + vert.join(formatted_cells) + vert


def column_alignments(block: TableBlock, rows: List[List[str]]) -> List[Alignment]:
    """Alignment per column; a later separator row overrides an earlier one."""
    alignments: List[Alignment] = ["left"] * block.column_count
    for row_idx in sorted(block.separator_indices):
        for col, cell in enumerate(rows[row_idx]):
            alignments[col] = parse_alignment(cell)
    return alignments


def column_widths(
    data_rows: List[List[str]],
    column_count: int,
    cache: Optional[WidthCache] = None,
) -> List[int]:
    """Max visual width per column over the data rows, at least 3."""
    widths = [MIN_COLUMN_WIDTH] * column_count
    for row in data_rows:
        for col, cell in enumerate(row):
            widths[col] = max(widths[col], visual_width(cell, cache))
    return widths


def render_table(block: TableBlock, cache: Optional[WidthCache] = None) -> List[str]:
    """Render a validated table block as box-drawing lines."""
    rows = [[sanitize_cell(cell) for cell in row] for row in block.rows]
    data_rows = [
        row for idx, row in enumerate(rows) if idx not in block.separator_indices
    ]

    alignments = column_alignments(block, rows)
    col_widths = column_widths(data_rows, block.column_count, cache)

    lines = [make_border("top", col_widths)]
    for i, row in enumerate(data_rows):
        lines.append(make_row(row, col_widths, alignments, cache))
        if i < len(data_rows) - 1:
            lines.append(make_border("middle", col_widths))
    lines.append(make_border("bottom", col_widths))

    return lines
