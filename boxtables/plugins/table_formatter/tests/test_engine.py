# boxtables/plugins/table_formatter/tests/test_engine.py
"""End-to-end tests for whole-document table formatting."""

import pytest

import boxtables.plugins.table_formatter.engine as engine
from boxtables import format_tables
from boxtables.plugins.table_formatter import FormatResult, WidthCache, try_format_tables
from boxtables.plugins.table_formatter.model import INVALID_TABLE_COMMENT


@pytest.fixture
def cache():
    return WidthCache()


STYLE_TABLE = """| Style | Example |
|-------|---------|
| _Italic_ | text |"""


class TestEndToEnd:
    """Tests for complete documents."""

    def test_concealed_emphasis_drives_width(self, cache):
        assert format_tables(STYLE_TABLE, cache) == "\n".join([
            "┌────────┬─────────┐",
            "│ Style  │ Example │",
            "├────────┼─────────┤",
            "│ _Italic_ │ text    │",
            "└────────┴─────────┘",
        ])

    def test_surrounding_text_preserved(self, cache):
        text = "Here is a table:\n| A | B |\n|---|---|\n| 1 | 2 |\nAnd some text after.\n"

        result = format_tables(text, cache)

        lines = result.split("\n")
        assert lines[0] == "Here is a table:"
        assert lines[1] == "┌─────┬─────┐"
        assert lines[-2] == "And some text after."
        assert lines[-1] == ""

    def test_code_span_cell(self, cache):
        result = format_tables("| `**bold**` |\n|---|", cache)
        assert result == "┌──────────┐\n│ `**bold**` │\n└──────────┘"

    def test_blank_fill_in_cell(self, cache):
        text = "| Field | Value |\n|---|---|\n| Sign | ________ |"
        assert format_tables(text, cache) == "\n".join([
            "┌───────┬──────────┐",
            "│ Field │ Value    │",
            "├───────┼──────────┤",
            "│ Sign  │ ________ │",
            "└───────┴──────────┘",
        ])

    def test_wide_characters(self, cache):
        result = format_tables("| 名前 | x |\n|---|---|\n| 日本語 | y |", cache)
        lines = result.split("\n")
        assert lines[1] == "│ 名前   │ x   │"
        assert lines[3] == "│ 日本語 │ y   │"

    def test_multiple_tables(self, cache):
        text = "| a |\n|---|\n\ntext\n\n| b |\n|---|"
        result = format_tables(text, cache)
        assert result.count("┌") == 2
        assert "text" in result

    def test_indented_table_is_formatted(self, cache):
        result = format_tables("  | a | b |\n  |---|---|", cache)
        assert result.startswith("┌")


class TestPassThrough:
    """Tests for content the engine must not touch."""

    def test_fenced_table_unchanged(self, cache):
        text = "```\n| a | b |\n|---|---|\n| 1 | 2 |\n```"
        assert format_tables(text, cache) == text

    def test_tilde_fence_unchanged(self, cache):
        text = "~~~markdown\n| a | b |\n|---|---|\n~~~\n| c | d |\n|---|---|"
        result = format_tables(text, cache)
        assert result.startswith(text.split("\n| c")[0])
        assert result.endswith("└─────┴─────┘")

    def test_plain_text_unchanged(self, cache):
        text = "no tables here\n\n* a list\n* with | pipes"
        assert format_tables(text, cache) == text

    def test_empty_string(self, cache):
        assert format_tables("", cache) == ""

    def test_non_string_is_returned_as_is(self):
        assert format_tables(None) is None


class TestIdempotence:
    """Formatting already-formatted output is a no-op."""

    @pytest.mark.parametrize("text", [
        STYLE_TABLE,
        "intro\n| L | C | R |\n|:--|:-:|--:|\n| x | y | z |\noutro",
        "| 🎉 | **bold** |\n|---|---|\n| `ab` | [x](y) |",
    ])
    def test_format_twice(self, cache, text):
        once = format_tables(text, cache)
        assert format_tables(once, cache) == once


class TestInvalidTables:
    """Malformed blocks are annotated, never dropped."""

    def test_column_mismatch(self, cache):
        text = "| A | B |\n| 1 |"
        assert format_tables(text, cache) == f"| A | B |\n| 1 |\n{INVALID_TABLE_COMMENT}"

    def test_missing_separator(self, cache):
        text = "| A | B |\n| 1 | 2 |"
        assert format_tables(text, cache).endswith(INVALID_TABLE_COMMENT)

    def test_single_row(self, cache):
        result = format_tables("before\n| just | one | row |\nafter", cache)
        assert result == f"before\n| just | one | row |\n{INVALID_TABLE_COMMENT}\nafter"

    def test_invalid_block_does_not_affect_sibling(self, cache):
        text = "| A | B |\n| 1 |\n\n| C | D |\n|---|---|"
        result = format_tables(text, cache)
        assert INVALID_TABLE_COMMENT in result
        assert "│ C   │ D   │" in result

    def test_rejections_reported(self, cache):
        result = try_format_tables("| A | B |\n| 1 |", cache)
        assert result.ok
        assert result.rejections == ("column count mismatch",)


class TestInternalFailure:
    """Unexpected errors never escape the boundary."""

    @pytest.fixture
    def broken_renderer(self, monkeypatch):
        def _explode(block, cache=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(engine, "render_table", _explode)

    def test_try_format_returns_error(self, cache, broken_renderer):
        result = try_format_tables(STYLE_TABLE, cache)

        assert isinstance(result, FormatResult)
        assert not result.ok
        assert result.error == "boom"
        assert result.text == STYLE_TABLE

    def test_format_tables_appends_comment(self, cache, broken_renderer):
        result = format_tables(STYLE_TABLE, cache)
        assert result == STYLE_TABLE + "\n\n<!-- table formatting failed: boom -->"

    def test_error_without_message_uses_type_name(self, cache, monkeypatch):
        def _explode(block, cache=None):
            raise KeyError()

        monkeypatch.setattr(engine, "render_table", _explode)

        assert try_format_tables(STYLE_TABLE, cache).error == "KeyError"


class TestCacheLifecycle:
    """Each formatting run counts as one cache operation."""

    def test_operation_recorded(self, cache):
        format_tables(STYLE_TABLE, cache)
        assert cache.operations == 1
        assert "_Italic_" in cache

    def test_cache_cleared_after_bound(self):
        cache = WidthCache(max_operations=1)
        format_tables(STYLE_TABLE, cache)
        format_tables(STYLE_TABLE, cache)
        assert len(cache) == 0
