# boxtables/plugins/table_formatter/concealment.py
"""Reduce a cell to the text a concealing markdown display actually shows.

Displays that conceal markdown hide emphasis markers but still render the
wrapped content. This module removes:

- ***bold italic*** / ___bold italic___
- **bold** / __bold__
- *italic* / _italic_
- ~~strikethrough~~
- ![alt](url) → alt
- [text](url) → text (url)

Inline code spans are swapped for placeholders before anything else runs,
so markers inside `code` stay literal. The backticks themselves are
concealed and do not count.

Emphasis is removed by a left-to-right recursive-descent scan: an opening
delimiter run looks for its matching closer, trying the longest delimiter
first (*** then ** then *). A delimiter without a closer is kept as
literal text, so "2 * 3" and a lone "*" keep their width. A run touching
whitespace on its inner side never opens or closes ("** bold **" is shown
as typed), and an all-delimiter run such as "________" is plain text.

Underscore delimiters never open after a letter or digit and never close
before one, which keeps snake_case_names intact.
"""

import re
from typing import Dict, List, Optional, Tuple

# `code` spans: one backtick pair around at least one non-backtick char
CODE_SPAN_PATTERN = re.compile(r"`([^`]+)`")

# ![alt](url) and [text](url)
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

_PLACEHOLDER = "\x00{}\x00"
_PLACEHOLDER_PATTERN = re.compile(r"\x00(\d+)\x00")

EMPHASIS_CHARS = frozenset("*_~")

# Deeper nesting than this is left as literal text
MAX_NESTING_DEPTH = 16

_ParseResult = Tuple[str, int, bool]


def protect_code_spans(text: str) -> Tuple[str, List[str]]:
    """Replace inline code spans with numbered placeholders.

    Returns:
        (text_with_placeholders, span_contents)
    """
    spans: List[str] = []

    def _replace(match: "re.Match[str]") -> str:
        spans.append(match.group(1))
        return _PLACEHOLDER.format(len(spans) - 1)

    return CODE_SPAN_PATTERN.sub(_replace, text), spans


def restore_code_spans(text: str, spans: List[str]) -> str:
    """Put the literal code span contents back in place of placeholders."""

    def _restore(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        if index < len(spans):
            return spans[index]
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(_restore, text)


class _EmphasisStripper:
    """One left-to-right scan that unwraps emphasis, links and images.

    ``_parse(start, closer)`` consumes text until ``closer`` is found (or the
    end of text when no closer is expected). Results are memoized per
    (start, closer), which keeps unbalanced input from re-scanning the same
    tail over and over.
    """

    def __init__(self, text: str, depth: int = 0):
        self._text = text
        self._depth = depth
        self._memo: Dict[Tuple[int, str], _ParseResult] = {}

    def strip(self) -> str:
        content, _, _ = self._parse(0, "", self._depth)
        return content

    def _parse(self, start: int, closer: str, depth: int) -> _ParseResult:
        key = (start, closer)
        cached = self._memo.get(key)
        if cached is not None:
            return cached

        text = self._text
        out: List[str] = []
        i = start
        result: Optional[_ParseResult] = None

        while i < len(text):
            if closer and i > start and self._closes(i, closer):
                result = ("".join(out), i + len(closer), True)
                break

            ch = text[i]
            if depth < MAX_NESTING_DEPTH:
                if ch == "!":
                    match = IMAGE_PATTERN.match(text, i)
                    if match:
                        out.append(self._strip_nested(match.group(1), depth))
                        i = match.end()
                        continue
                elif ch == "[":
                    match = LINK_PATTERN.match(text, i)
                    if match:
                        label = self._strip_nested(match.group(1), depth)
                        out.append(f"{label} ({match.group(2)})")
                        i = match.end()
                        continue
                elif ch in EMPHASIS_CHARS:
                    opened = self._open(i, depth)
                    if opened is not None:
                        content, i = opened
                        out.append(content)
                        continue

            out.append(ch)
            i += 1

        if result is None:
            result = ("".join(out), i, False)
        self._memo[key] = result
        return result

    def _open(self, i: int, depth: int) -> Optional[Tuple[str, int]]:
        """Try to open an emphasis span at ``i``.

        The whole delimiter run counts as one delimiter: it opens only from
        its first character and only when followed by non-whitespace, so a
        run of nothing but delimiters (``________``, ``****``) stays literal.

        Returns:
            (unwrapped_content, index_after_closer) or None when no
            delimiter length at ``i`` has a matching closer.
        """
        text = self._text
        ch = text[i]

        if i > 0 and text[i - 1] == ch:
            return None

        run = 1
        while i + run < len(text) and text[i + run] == ch:
            run += 1

        if i + run >= len(text) or text[i + run].isspace():
            return None

        if ch == "~":
            # Only ~~strikethrough~~; a single tilde stays literal
            lengths = [2] if run >= 2 else []
        else:
            if ch == "_" and i > 0 and text[i - 1].isalnum():
                return None
            lengths = list(range(min(run, 3), 0, -1))

        for length in lengths:
            after = i + length
            content, end, closed = self._parse(after, ch * length, depth + 1)
            # A span needs at least one character between its delimiters
            if closed and end - length > after:
                return content, end

        return None

    def _closes(self, i: int, closer: str) -> bool:
        text = self._text
        if not text.startswith(closer, i):
            return False

        # Closing run must not be preceded by whitespace
        run_start = i
        while run_start > 0 and text[run_start - 1] == closer[0]:
            run_start -= 1
        if run_start == 0 or text[run_start - 1].isspace():
            return False

        if closer[0] == "_":
            after = i + len(closer)
            if after < len(text) and text[after].isalnum():
                return False
        return True

    def _strip_nested(self, fragment: str, depth: int) -> str:
        return _EmphasisStripper(fragment, depth + 1).strip()


def strip_emphasis(text: str) -> str:
    """Unwrap emphasis, links and images until the text stops changing.

    The scan already unwraps nested spans in one pass; repeating it covers
    constructs that only become well-formed once an outer span is gone
    (e.g. a link label completed by stripping). Every change shortens the
    text, so the loop terminates.
    """
    previous = None
    while text != previous:
        previous = text
        text = _EmphasisStripper(text).strip()
    return text


def strip_markdown(text: str) -> str:
    """Return ``text`` as displayed with markdown concealment.

    Example:
        strip_markdown("**_triple_**")  -> "triple"
        strip_markdown("`**bold**`")    -> "**bold**"
        strip_markdown("[docs](x.md)")  -> "docs (x.md)"
    """
    if not text:
        return text
    protected, spans = protect_code_spans(text)
    return restore_code_spans(strip_emphasis(protected), spans)
