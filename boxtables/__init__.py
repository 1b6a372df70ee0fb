"""boxtables: render markdown pipe tables in model output as box-drawing tables.

Usage:
    from boxtables import format_tables

    display_text = format_tables(model_text)
"""

from .plugins.table_formatter import format_tables, try_format_tables

__all__ = ["format_tables", "try_format_tables"]
