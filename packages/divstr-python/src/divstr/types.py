"""Type definitions for divstr writers and readers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

# Scalar kinds a token can render directly
Scalar = str | int | float | bool

# A divider is either plain text or a string-valued enum member
Divider = str | Enum

DEFAULT_OBFUSCATION_KEY = "divstr"
"""Key used by the obfuscation transform when none is given."""

DEFAULT_KEY_DIVIDER = "~"
"""Separator between a dictionary key and its value."""

DEFAULT_ITEM_DIVIDER = "|"
"""Separator between dictionary entries."""


@dataclass(frozen=True)
class Transforms:
    """Reversible text transforms applied to a single string field."""

    obfuscate: bool = False
    """Rotate alphanumeric characters with a keyed shift stream."""

    base64: bool = False
    """Encode the field's UTF-8 bytes as base64."""

    escape_newlines: bool = False
    """Replace raw newlines and carriage returns with backslash escapes."""

    key: str = DEFAULT_OBFUSCATION_KEY
    """Obfuscation key. Both sides must agree on it."""

    def __bool__(self) -> bool:
        return self.obfuscate or self.base64 or self.escape_newlines


NO_TRANSFORMS = Transforms()
BASE64 = Transforms(base64=True)
OBFUSCATED = Transforms(obfuscate=True)
ESCAPED = Transforms(escape_newlines=True)


@runtime_checkable
class Serializable(Protocol):
    """
    A composite value that renders to, and rebuilds from, exactly one token.

    Implementations pick their own inner divider, which must differ from the
    divider of any writer they are appended to.
    """

    @property
    def serialized(self) -> str:
        """The value rendered as one divider-separated string."""
        ...

    @classmethod
    def from_serialized(cls, value: str) -> "Serializable":
        """Rebuild an instance from its serialized form."""
        ...


def is_serializable_type(kind: Any) -> bool:
    """Check whether a class can rebuild instances from one token."""
    return isinstance(kind, type) and callable(getattr(kind, "from_serialized", None))
