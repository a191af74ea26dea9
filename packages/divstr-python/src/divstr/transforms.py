"""
Reversible field transforms.

Encode order is obfuscate, base64, escape newlines. Decode runs the exact
mirror: unescape, base64 decode, deobfuscate. Nothing in the encoded text
records which transforms were used.

NOTE: Obfuscation only deters casual reading. It is not encryption.
"""

import base64
import binascii
import hashlib
import string

from .string_utils import escape_newlines, unescape_newlines
from .types import DEFAULT_OBFUSCATION_KEY, Transforms

# Obfuscation rotates within this set and leaves every other character alone
ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def _shift_stream(key: str, length: int) -> list[int]:
    """Derive one non-zero shift per character from the key."""
    seed = hashlib.sha256(key.encode("utf-8")).digest()
    stream = []
    block = seed
    while len(stream) < length:
        stream.extend(1 + b % (len(ALPHABET) - 1) for b in block)
        block = hashlib.sha256(block).digest()
    return stream[:length]


def _rotate(value: str, key: str, direction: int) -> str:
    shifts = _shift_stream(key, len(value))
    result = []
    for char, shift in zip(value, shifts):
        idx = ALPHABET.find(char)
        if idx < 0:
            result.append(char)
        else:
            result.append(ALPHABET[(idx + direction * shift) % len(ALPHABET)])
    return "".join(result)


def obfuscate(value: str, key: str = DEFAULT_OBFUSCATION_KEY) -> str:
    """
    Obfuscate a string with a keyed alphanumeric rotation.

    Length and every non-alphanumeric character are preserved, so the result
    never contains a divider the input did not already contain (as long as the
    divider is not alphanumeric).

    Args:
        value: The plain text.
        key: The obfuscation key.

    Returns:
        The obfuscated text.
    """
    return _rotate(value, key, 1)


def deobfuscate(value: str, key: str = DEFAULT_OBFUSCATION_KEY) -> str:
    """Reverse `obfuscate` for the same key."""
    return _rotate(value, key, -1)


def base64_encode(value: str) -> str:
    """Encode a string's UTF-8 bytes as standard base64."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def base64_decode(value: str) -> str:
    """
    Decode base64 text back to a string.

    Returns:
        The decoded string, or "" if the text is not valid base64 or UTF-8.
    """
    try:
        return base64.b64decode(value.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        return ""


def apply_transforms(value: str, transforms: Transforms | None) -> str:
    """
    Run the encode side of the transform chain.

    Args:
        value: The field's plain text.
        transforms: Which transforms to apply. None means none.

    Returns:
        The transformed text.
    """
    if not transforms:
        return value
    if transforms.obfuscate:
        value = obfuscate(value, transforms.key)
    if transforms.base64:
        value = base64_encode(value)
    if transforms.escape_newlines:
        value = escape_newlines(value)
    return value


def reverse_transforms(value: str, transforms: Transforms | None) -> str:
    """
    Run the decode side of the transform chain, in mirror order.

    Args:
        value: The token text.
        transforms: The same transforms given at encode time.

    Returns:
        The field's plain text.
    """
    if not transforms:
        return value
    if transforms.escape_newlines:
        value = unescape_newlines(value)
    if transforms.base64:
        value = base64_decode(value)
    if transforms.obfuscate:
        value = deobfuscate(value, transforms.key)
    return value
