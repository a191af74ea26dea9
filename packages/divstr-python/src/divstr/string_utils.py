"""String utilities for divstr encoding/decoding."""

import re
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Divider

# Reserved tokens. Both always occupy exactly one slot.
EMPTY_SENTINEL = "<e>"
"""A present value that was an empty string, or an empty collection."""

NIL_SENTINEL = "<n>"
"""An absent optional value."""

RESERVED_LITERALS = frozenset({EMPTY_SENTINEL, NIL_SENTINEL})

# Only these escapes are produced by newline escaping
ESCAPE_MAP = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
}

UNESCAPE_MAP = {
    "\\": "\\",
    "n": "\n",
    "r": "\r",
}

# A sentinel preceded by any number of backslashes
SENTINEL_LIKE_PATTERN = re.compile(r"^\\*<[en]>$")
ESCAPED_SENTINEL_PATTERN = re.compile(r"^\\+<[en]>$")


def resolve_divider(divider: "Divider") -> str:
    """
    Resolve a divider to its text.

    Args:
        divider: A string, or an enum member whose value is a string.

    Returns:
        The divider text.

    Raises:
        TypeError: If the divider is neither text nor a string-valued enum.
        ValueError: If the divider is empty.
    """
    if isinstance(divider, Enum):
        divider = divider.value
    if not isinstance(divider, str):
        raise TypeError(f"Divider must be a string, got {type(divider).__name__}")
    if not divider:
        raise ValueError("Divider must not be empty")
    return divider


def split_tokens(text: str, divider: str) -> list[str]:
    """
    Split encoded text into its tokens.

    An empty string and the empty sentinel both mean "no tokens". Otherwise
    adjacent dividers yield zero-length tokens, so positions never shift.

    Args:
        text: The encoded text.
        divider: The divider for this nesting level.

    Returns:
        The ordered token list.
    """
    if not text or text == EMPTY_SENTINEL:
        return []
    return text.split(divider)


def escape_newlines(value: str) -> str:
    """
    Escape backslashes, newlines and carriage returns.

    Args:
        value: The raw string.

    Returns:
        The string with no raw line breaks left in it.
    """
    return "".join(ESCAPE_MAP.get(char, char) for char in value)


def unescape_newlines(value: str) -> str:
    """
    Reverse `escape_newlines`.

    Unknown escape sequences and a trailing backslash are kept verbatim so a
    damaged field still decodes to something.

    Args:
        value: The escaped string.

    Returns:
        The original string.
    """
    result = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == "\\" and i + 1 < len(value) and value[i + 1] in UNESCAPE_MAP:
            result.append(UNESCAPE_MAP[value[i + 1]])
            i += 2
        else:
            result.append(char)
            i += 1
    return "".join(result)


def escape_sentinel(value: str) -> str:
    """Prefix a backslash to text that would otherwise read back as a sentinel."""
    if SENTINEL_LIKE_PATTERN.match(value):
        return "\\" + value
    return value


def unescape_sentinel(value: str) -> str:
    """Reverse `escape_sentinel`."""
    if ESCAPED_SENTINEL_PATTERN.match(value):
        return value[1:]
    return value
