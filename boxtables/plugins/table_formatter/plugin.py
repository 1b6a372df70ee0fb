# boxtables/plugins/table_formatter/plugin.py
"""Table formatter plugin with box-drawing rendering.

Detects markdown pipe tables in model output and renders them with Unicode
box-drawing characters whose column widths match what a concealing
markdown display shows.

The plugin formats once per turn: chunks are collected by process_chunk()
and the complete text goes through the engine on flush(). Fence state and
table extents depend on the whole text, so nothing is emitted early.

Usage (pipeline):
    from boxtables.pipeline import FormatterPipeline
    from boxtables.plugins.table_formatter import create_plugin

    pipeline = FormatterPipeline([create_plugin()])  # priority 25
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from boxtables.trace import trace as _trace_write

from .engine import FAILURE_COMMENT, try_format_tables
from .width import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_MAX_OPERATIONS, WidthCache

# Structural formatters run before anything that styles text
DEFAULT_PRIORITY = 25


def _trace(msg: str) -> None:
    _trace_write("TableFormatter", msg)


class TableFormatterPlugin:
    """Formats the tables in one turn of streamed output.

    Malformed tables are passed through with an inline marker; the reasons
    are kept for get_turn_feedback() so the model can be told what to fix.
    """

    def __init__(self):
        self._priority = DEFAULT_PRIORITY
        self._cache = WidthCache()

        # Chunks received since the last flush or reset
        self._buffer: List[str] = []
        self._turn_feedback: Optional[str] = None

    @property
    def name(self) -> str:
        return "table_formatter"

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def cache(self) -> WidthCache:
        return self._cache

    def process_chunk(self, chunk: str) -> Iterator[str]:
        """Hold ``chunk`` until flush(); yields nothing."""
        self._buffer.append(chunk)
        return iter(())

    def flush(self) -> Iterator[str]:
        """Format the collected turn text and yield it."""
        self._turn_feedback = None
        if not self._buffer:
            return

        text = "".join(self._buffer)
        self._buffer = []

        result = try_format_tables(text, self._cache)
        if not result.ok:
            _trace(f"flush: passing text through after failure: {result.error}")
            yield text + "\n\n" + FAILURE_COMMENT.format(message=result.error)
            return

        if result.rejections:
            self._turn_feedback = self._describe_rejections(result.rejections)
        yield result.text

    def reset(self) -> None:
        """Drop the pending turn and its feedback. The width cache is kept."""
        self._buffer = []
        self._turn_feedback = None

    def get_turn_feedback(self) -> Optional[str]:
        """Return (once) a note about tables that could not be formatted."""
        feedback = self._turn_feedback
        self._turn_feedback = None
        return feedback

    def _describe_rejections(self, rejections: Tuple[str, ...]) -> str:
        reasons = sorted(set(rejections))
        return (
            f"{len(rejections)} markdown table(s) in your last response could not be "
            f"formatted ({', '.join(reasons)}). Tables need a header row, a "
            "|---|---| separator row, and the same number of cells in every row."
        )

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Apply settings from an in-memory dict.

        Args:
            config: Optional keys:
                - priority: pipeline position (default: 25)
                - cache_max_entries: width cache size bound (default: 1000)
                - cache_max_operations: formatting runs between cache resets
                  (default: 100)
        """
        config = config or {}
        self._priority = config.get("priority", DEFAULT_PRIORITY)
        self._cache = WidthCache(
            max_entries=config.get("cache_max_entries", DEFAULT_CACHE_MAX_ENTRIES),
            max_operations=config.get("cache_max_operations", DEFAULT_CACHE_MAX_OPERATIONS),
        )
        _trace(f"initialize: priority={self._priority}, cache={self._cache.max_entries}/"
               f"{self._cache.max_operations}")

    def shutdown(self) -> None:
        self.reset()
        self._cache.clear()


def create_plugin() -> TableFormatterPlugin:
    """Factory function to create a TableFormatterPlugin instance."""
    return TableFormatterPlugin()
