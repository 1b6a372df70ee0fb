# boxtables/plugins/table_formatter/model.py
"""Structured representation of a scanned document.

The scanner partitions a document into Segments; candidate table segments
that pass validation become TableBlocks for the renderer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Set

Alignment = Literal["left", "center", "right"]

# Cell widths never shrink below a three-dash separator segment.
MIN_COLUMN_WIDTH = 3

INVALID_TABLE_COMMENT = "<!-- table not formatted: invalid structure -->"


class SegmentKind(Enum):
    """Classification of a contiguous run of document lines."""

    PLAIN_TEXT = "plain_text"
    CODE_FENCE = "code_fence"
    PRE_RENDERED_TABLE = "pre_rendered_table"
    CANDIDATE_TABLE = "candidate_table"


@dataclass
class Segment:
    """A contiguous run of lines sharing one classification."""
    kind: SegmentKind
    lines: List[str] = field(default_factory=list)


@dataclass
class TableBlock:
    """Validated table: cell rows plus the indices of separator rows.

    Separator rows stay in ``rows`` so indices line up with the source
    lines; they only contribute alignment metadata.
    """
    rows: List[List[str]]
    separator_indices: Set[int] = field(default_factory=set)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)
