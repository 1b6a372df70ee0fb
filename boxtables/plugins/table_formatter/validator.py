# boxtables/plugins/table_formatter/validator.py
"""Structural checks for candidate pipe-table blocks.

A block is formattable when it has at least two rows, every row has the
same number of cells, and at least one row is a separator row
(|---|:---:|---:|). Rejected blocks are passed through untouched by the
engine; nothing here raises.
"""

import re
from typing import List, Optional

from .model import Alignment, TableBlock
from .scanner import normalize_table_line, split_cells

SEPARATOR_CELL_PATTERN = re.compile(r"^\s*:?-+:?\s*$")

REASON_TOO_FEW_ROWS = "fewer than 2 rows"
REASON_COLUMN_MISMATCH = "column count mismatch"
REASON_NO_SEPARATOR = "missing separator row"


def is_separator_row(line: str) -> bool:
    """Check for an alignment row such as |---|:---:|---:|."""
    normalized = normalize_table_line(line.strip())
    if not normalized.startswith("|") or not normalized.endswith("|"):
        return False
    cells = normalized.split("|")[1:-1]
    return bool(cells) and all(SEPARATOR_CELL_PATTERN.match(cell) for cell in cells)


def parse_alignment(cell: str) -> Alignment:
    """Alignment declared by one separator cell (:--- / :---: / ---:)."""
    cell = cell.strip()
    if cell.startswith(":") and cell.endswith(":"):
        return "center"
    elif cell.endswith(":"):
        return "right"
    return "left"


def find_rejection(lines: List[str]) -> Optional[str]:
    """Return why a block cannot be formatted, or None if it can."""
    if len(lines) < 2:
        return REASON_TOO_FEW_ROWS

    rows = [split_cells(line) for line in lines]
    if not rows[0]:
        return REASON_COLUMN_MISMATCH

    cell_count = len(rows[0])
    if any(len(row) != cell_count for row in rows):
        return REASON_COLUMN_MISMATCH

    if not any(is_separator_row(line) for line in lines):
        return REASON_NO_SEPARATOR

    return None


def is_valid_table(lines: List[str]) -> bool:
    return find_rejection(lines) is None


def parse_table_block(lines: List[str]) -> TableBlock:
    """Split validated lines into cell rows and mark the separator rows."""
    return TableBlock(
        rows=[split_cells(line) for line in lines],
        separator_indices={idx for idx, line in enumerate(lines) if is_separator_row(line)},
    )
