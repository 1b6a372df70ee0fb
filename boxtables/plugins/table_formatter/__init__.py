# boxtables/plugins/table_formatter/__init__.py
"""Markdown table formatter: pipe tables → aligned box-drawing tables.

Example:
    from boxtables.plugins.table_formatter import format_tables

    print(format_tables("| A | B |\\n|---|---|\\n| 1 | 2 |"))
"""

from .engine import FormatResult, format_tables, try_format_tables
from .errors import TableFormatError, WidthComputationError
from .model import Alignment, Segment, SegmentKind, TableBlock
from .plugin import TableFormatterPlugin, create_plugin
from .width import WidthCache, get_default_cache, visual_width

__all__ = [
    # Engine
    "format_tables",
    "try_format_tables",
    "FormatResult",
    # Plugin
    "TableFormatterPlugin",
    "create_plugin",
    # Width
    "WidthCache",
    "get_default_cache",
    "visual_width",
    # Model
    "Alignment",
    "Segment",
    "SegmentKind",
    "TableBlock",
    # Errors
    "TableFormatError",
    "WidthComputationError",
]
