# boxtables/plugins/table_formatter/engine.py
"""Whole-document table formatting.

try_format_tables() runs the scanner → validator → renderer chain and
reports the outcome as a FormatResult instead of raising.
format_tables() is the public boundary: it always returns text.

    from boxtables.plugins.table_formatter import format_tables

    display_text = format_tables(generated_text)
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from boxtables.trace import trace as _trace_write

from .model import INVALID_TABLE_COMMENT, SegmentKind
from .renderer import render_table
from .scanner import scan_segments
from .validator import find_rejection, parse_table_block
from .width import WidthCache, get_default_cache

logger = logging.getLogger(__name__)

FAILURE_COMMENT = "<!-- table formatting failed: {message} -->"


def _trace(msg: str, include_traceback: bool = False) -> None:
    """Write trace message to log file for debugging."""
    _trace_write("TableEngine", msg, include_traceback=include_traceback)


class FormatResult(NamedTuple):
    """Outcome of one formatting run.

    On failure ``text`` is the untouched input and ``error`` holds the
    message. ``rejections`` lists why each invalid table block was skipped.
    """
    text: str
    error: Optional[str] = None
    rejections: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None


def _render_document(lines: List[str], cache: WidthCache) -> Tuple[List[str], List[str]]:
    output: List[str] = []
    rejections: List[str] = []

    for segment in scan_segments(lines):
        if segment.kind != SegmentKind.CANDIDATE_TABLE:
            output.extend(segment.lines)
            continue

        reason = find_rejection(segment.lines)
        if reason is None:
            output.extend(render_table(parse_table_block(segment.lines), cache))
        else:
            _trace(f"table not formatted ({reason}): {len(segment.lines)} line(s)")
            rejections.append(reason)
            output.extend(segment.lines)
            output.append(INVALID_TABLE_COMMENT)

    return output, rejections


def try_format_tables(text: str, cache: Optional[WidthCache] = None) -> FormatResult:
    """Format every pipe table in ``text`` as a box-drawing table.

    Args:
        text: Complete document, lines separated by "\\n".
        cache: Width cache to use; defaults to the shared one.

    Returns:
        FormatResult with the formatted text, or the original text and an
        error message if anything unexpected failed.
    """
    if cache is None:
        cache = get_default_cache()

    try:
        output, rejections = _render_document(text.split("\n"), cache)
    except Exception as e:
        message = str(e) or type(e).__name__
        _trace(f"formatting failed: {message}", include_traceback=True)
        logger.debug("table formatting failed: %s", message)
        return FormatResult(text=text, error=message)

    cache.record_operation()
    logger.debug(
        "formatted document: %d line(s) in, %d out, %d table(s) rejected",
        text.count("\n") + 1, len(output), len(rejections),
    )
    return FormatResult(text="\n".join(output), rejections=tuple(rejections))


def format_tables(text: str, cache: Optional[WidthCache] = None) -> str:
    """Format tables in ``text``; never raises.

    On an unexpected failure the original text is returned with a trailing
    ``<!-- table formatting failed: ... -->`` comment.
    """
    if not isinstance(text, str):
        return text

    result = try_format_tables(text, cache)
    if not result.ok:
        return text + "\n\n" + FAILURE_COMMENT.format(message=result.error)
    return result.text
