"""Scalar rendering and tolerant scalar parsing for divstr."""

import math
import re
import struct
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from .types import Scalar

E = TypeVar("E", bound=Enum)

# Canonical number text. Digit separators, padding and non-ASCII digits read as malformed.
INT_PATTERN = re.compile(r"[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|nan)"
)


def encode_scalar(value: "Scalar") -> str:
    """
    Render a scalar to its canonical token text.

    Args:
        value: The scalar (str, bool, int, or float).

    Returns:
        The rendered text. Empty strings stay empty here; the writer swaps
        them for the empty sentinel.

    Raises:
        TypeError: For anything that is not a supported scalar.
    """
    if isinstance(value, str):
        return value

    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, int):
        return str(value)

    if isinstance(value, float):
        return _encode_float(value)

    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def _encode_float(value: float) -> str:
    """Encode a float so that `float()` reads back the same value."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(value)


def parse_int(token: str) -> int:
    """Parse an integer token, or return 0."""
    if not INT_PATTERN.fullmatch(token):
        return 0
    return int(token)


def parse_bool(token: str) -> bool:
    """Parse a boolean token. Only the exact text "true" is true."""
    return token == "true"


def parse_double(token: str) -> float:
    """Parse a float token at full precision, or return 0.0."""
    if not FLOAT_PATTERN.fullmatch(token):
        return 0.0
    return float(token)


def parse_single(token: str) -> float:
    """
    Parse a float token rounded to 32-bit precision, or return 0.0.

    Values beyond the single-precision range read back as infinity.
    """
    value = parse_double(token)
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def lookup_enum(enum_cls: type[E], raw: object, default: E | None = None) -> E:
    """
    Find the enum member with the given raw value.

    Args:
        enum_cls: The enumeration class.
        raw: The raw value to look up.
        default: Member returned on a miss. Defaults to the first declared member.

    Returns:
        The matching member, or the fallback member.
    """
    for member in enum_cls:
        if member.value == raw:
            return member
    if default is not None:
        return default
    return next(iter(enum_cls))
