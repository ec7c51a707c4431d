"""Helpers for fitting text into Discord messages."""

from __future__ import annotations

from functools import cache

from ..domain.shared.constants import LimitConstants


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def summarize_error(error: BaseException | str, limit: int = LimitConstants.MESSAGE_SAFE_LENGTH) -> str:
    """Reduce a possibly multi-line error to one line that fits in a chat message.

    Extractor failures dump a whole log; the line starting with ``ERROR:`` is
    the useful one. Otherwise the first line is used.
    """
    text = str(error).strip() or type(error).__name__
    lines = text.splitlines()

    line = next((ln for ln in lines if ln.strip().startswith("ERROR:")), lines[0] if lines else text)
    line = line.strip() or text
    if len(line) > limit:
        return line[: limit - 1] + "…"
    return line
