import re
from typing import Optional

from goal_tracker.core.constants import (
    MAX_GOAL_TEXT_LENGTH,
    REASON_EMPTY_TEXT,
    REASON_MAX_LENGTH_EXCEEDED,
    REASON_ONLY_NUMBERS,
)
from goal_tracker.core.errors import GoalValidationError


_DIGITS_ONLY = re.compile(r"[0-9]+")

# Browser-style trim set: tab, VT, FF, space, NBSP, BOM, Unicode space separators
# and line terminators. C0 separators such as \x1c are not trimmed.
_WS = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_EDGE_WHITESPACE = re.compile(f"^[{_WS}]+|[{_WS}]+$")


def trim_text(text: str) -> str:
    return _EDGE_WHITESPACE.sub("", text)


def text_length(text: str) -> int:
    """Length in UTF-16 code units, so characters outside the BMP count twice."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def validate_goal_text(text: Optional[str]) -> str:
    """Check goal text against the create rules and return it unchanged.

    Rules run in order and the first failure is raised:
      1. missing or blank            -> 422 empty_text
      2. only ASCII digits           -> 422 only_numbers
      3. longer than the max length  -> 413 max_length_exceeded

    Checks use the trimmed text and count UTF-16 code units; callers
    store the original value.
    """
    trimmed = trim_text(text) if text is not None else ""
    if not trimmed:
        raise GoalValidationError(REASON_EMPTY_TEXT, 422, "Invalid goal text.")

    # Runs before the length rule, so long all-digit input is still a 422
    if _DIGITS_ONLY.fullmatch(trimmed):
        raise GoalValidationError(
            REASON_ONLY_NUMBERS, 422, "Goal text cannot be only numbers."
        )

    if text_length(trimmed) > MAX_GOAL_TEXT_LENGTH:
        raise GoalValidationError(
            REASON_MAX_LENGTH_EXCEEDED,
            413,
            f"Goal text cannot be longer than {MAX_GOAL_TEXT_LENGTH} characters.",
        )
    return text
