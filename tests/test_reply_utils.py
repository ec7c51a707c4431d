"""Tests for the message-fitting helpers in utils.reply."""

import pytest

from discord_jukebox.utils.reply import summarize_error, truncate


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("hello", 10) == "hello"

    def test_exact_length_unchanged(self):
        assert truncate("hello", 5) == "hello"

    def test_long_text_gets_ellipsis(self):
        """Should keep the result within the limit, ellipsis included."""
        result = truncate("abcdefghij", 5)

        assert result == "abcd…"
        assert len(result) == 5


class TestSummarizeError:
    def test_single_line(self):
        assert summarize_error(RuntimeError("socket closed")) == "socket closed"

    def test_first_line_of_multiline_text(self):
        assert summarize_error("first line\nsecond line") == "first line"

    def test_prefers_extractor_error_line(self):
        text = "WARNING: [youtube] retrying\nERROR: [youtube] abc: Video unavailable\nhint"

        assert summarize_error(text) == "ERROR: [youtube] abc: Video unavailable"

    def test_empty_message_uses_exception_name(self):
        assert summarize_error(ValueError()) == "ValueError"

    @pytest.mark.parametrize("limit", [10, 100])
    def test_truncated_to_limit(self, limit):
        """Should keep the result within the limit, ellipsis included."""
        result = summarize_error("x" * 500, limit)

        assert result == "x" * (limit - 1) + "…"
        assert len(result) == limit
