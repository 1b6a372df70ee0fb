# boxtables/plugins/table_formatter/scanner.py
"""Line scanner that partitions a document into segments.

Detection patterns:
1. Code fences: ``` or ~~~ (3+), optionally indented. Any fence line
   toggles the fence state; everything inside is left alone.
2. Already-rendered box tables: a border line (┌ ├ └) followed by more
   border lines or │-bounded data lines without ASCII pipes.
3. Candidate pipe tables: runs of lines that look like | cell | cell |,
   after mixed │ glyphs are folded into pipes.
4. Everything else is plain text.
"""

import re
from typing import Iterable, Iterator, List, Optional

from .model import Segment, SegmentKind

FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})")

BORDER_LINE_STARTS = ("┌", "├", "└")
VERTICAL = "│"

# "| |" or "||" left over after folding │ into |
_EMPTY_PIPE_PAIR = re.compile(r"\|\s*\|")


def is_fence_line(line: str) -> bool:
    return bool(FENCE_PATTERN.match(line))


def is_border_line(line: str) -> bool:
    """Border of a rendered box table: ┌───┬───┐, ├───┼───┤, └───┴───┘."""
    return line.strip().startswith(BORDER_LINE_STARTS)


def is_bordered_data_line(line: str) -> bool:
    """Data line of a rendered box table: │ cell │ cell │.

    Lines mixing │ with ASCII pipes are half-formatted markdown, not
    finished box-table rows.
    """
    trimmed = line.strip()
    return (
        trimmed.startswith(VERTICAL)
        and trimmed.endswith(VERTICAL)
        and "|" not in trimmed
    )


def normalize_table_line(line: str) -> str:
    """Fold │ glyphs into pipes and collapse the empty pipe pairs that leaves.

    Example: "| text │ |" -> "| text | |" -> "| text |"
    """
    normalized = line.replace(VERTICAL, "|")
    normalized = _EMPTY_PIPE_PAIR.sub("|", normalized)
    return normalized.strip()


def split_cells(line: str) -> List[str]:
    """Split a table line into trimmed cells, dropping the outer pipes."""
    return [cell.strip() for cell in normalize_table_line(line).split("|")[1:-1]]


def is_table_row(line: str) -> bool:
    normalized = normalize_table_line(line.strip())
    return (
        normalized.startswith("|")
        and normalized.endswith("|")
        and len(normalized.split("|")) > 2
    )


def scan_segments(lines: Iterable[str]) -> Iterator[Segment]:
    """Group document lines into consecutive segments.

    Segments come out in document order and together contain every input
    line exactly once.
    """
    in_fence = False
    current: Optional[Segment] = None

    for line in lines:
        if is_fence_line(line):
            in_fence = not in_fence
            kind = SegmentKind.CODE_FENCE
        elif in_fence:
            kind = SegmentKind.CODE_FENCE
        elif current is not None and current.kind == SegmentKind.PRE_RENDERED_TABLE and (
            is_border_line(line) or is_bordered_data_line(line)
        ):
            kind = SegmentKind.PRE_RENDERED_TABLE
        elif is_border_line(line):
            kind = SegmentKind.PRE_RENDERED_TABLE
        elif is_table_row(line):
            kind = SegmentKind.CANDIDATE_TABLE
        else:
            kind = SegmentKind.PLAIN_TEXT

        if current is None or current.kind != kind:
            if current is not None:
                yield current
            current = Segment(kind)
        current.lines.append(line)

    if current is not None:
        yield current
