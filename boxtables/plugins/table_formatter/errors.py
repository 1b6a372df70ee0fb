"""Error types raised inside the table engine.

Both are caught at the engine boundary (``try_format_tables``); callers of
``format_tables`` never see them.
"""


class TableFormatError(Exception):
    """Base class for table engine errors."""
    pass


class WidthComputationError(TableFormatError):
    """Measuring the visual width of a cell failed.

    Keeps the offending cell text so the trace log can name it.
    """

    def __init__(self, cell: str, reason: str):
        self.cell = cell
        self.reason = reason
        super().__init__(f"cannot measure cell {cell!r}: {reason}")
