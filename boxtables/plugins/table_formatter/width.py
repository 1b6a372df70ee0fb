# boxtables/plugins/table_formatter/width.py
"""Visual width of table cells as seen by a concealing markdown display.

visual_width() strips concealed markdown (see concealment.py) and measures
what is left with wcwidth: wide glyphs (CJK, most emoji) take 2 columns,
combining marks 0, everything printable 1.

Results are memoized in a WidthCache. The cache is cleared wholesale once
it holds too many entries or once enough formatting operations have run;
a cleared cache only costs recomputation, never a different answer.
"""

from typing import Dict, Optional

import wcwidth

from .concealment import strip_markdown
from .errors import WidthComputationError

DEFAULT_CACHE_MAX_ENTRIES = 1000
DEFAULT_CACHE_MAX_OPERATIONS = 100


class WidthCache:
    """Bounded text -> width memo with coarse bulk eviction.

    Not an LRU: when either bound is exceeded the whole cache is dropped.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        max_operations: int = DEFAULT_CACHE_MAX_OPERATIONS,
    ):
        self.max_entries = max_entries
        self.max_operations = max_operations
        self._widths: Dict[str, int] = {}
        self._operations = 0

    def __len__(self) -> int:
        return len(self._widths)

    def __contains__(self, text: str) -> bool:
        return text in self._widths

    @property
    def operations(self) -> int:
        """Formatting operations recorded since the last clear."""
        return self._operations

    def get(self, text: str) -> Optional[int]:
        return self._widths.get(text)

    def put(self, text: str, width: int) -> int:
        self._widths[text] = width
        return width

    def record_operation(self) -> None:
        """Count one finished formatting operation, clearing when over bounds."""
        self._operations += 1
        if self._operations > self.max_operations or len(self._widths) > self.max_entries:
            self.clear()

    def clear(self) -> None:
        self._widths.clear()
        self._operations = 0


# Shared by callers that don't bring their own cache.
_default_cache = WidthCache()


def get_default_cache() -> WidthCache:
    """Return the process-wide cache used when no cache is passed."""
    return _default_cache


def display_width(text: str) -> int:
    """Calculate the display width of a string, accounting for wide characters.

    Args:
        text: The string to measure.

    Returns:
        The display width in terminal columns.
    """
    width = 0
    for char in text:
        char_width = wcwidth.wcwidth(char)
        # wcwidth returns -1 for non-printable characters, treat as 0
        if char_width > 0:
            width += char_width
    return width


def visual_width(text: str, cache: Optional[WidthCache] = None) -> int:
    """Return the width of ``text`` after markdown concealment.

    Args:
        text: Raw cell text, emphasis markers included.
        cache: Memo to consult and fill. Defaults to the shared cache.

    Raises:
        WidthComputationError: if stripping or measuring fails.
    """
    if cache is None:
        cache = _default_cache

    cached = cache.get(text)
    if cached is not None:
        return cached

    try:
        width = display_width(strip_markdown(text))
    except RecursionError as exc:
        raise WidthComputationError(text, "markdown nesting too deep") from exc
    except (TypeError, ValueError) as exc:
        raise WidthComputationError(text, str(exc)) from exc

    return cache.put(text, width)
