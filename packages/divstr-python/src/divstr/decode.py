"""divstr reader implementation."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, TypeVar

from .primitives import (
    INT_PATTERN,
    lookup_enum,
    parse_bool,
    parse_double,
    parse_int,
    parse_single,
)
from .string_utils import (
    EMPTY_SENTINEL,
    NIL_SENTINEL,
    RESERVED_LITERALS,
    resolve_divider,
    split_tokens,
    unescape_sentinel,
)
from .transforms import reverse_transforms
from .types import (
    BASE64,
    DEFAULT_ITEM_DIVIDER,
    DEFAULT_KEY_DIVIDER,
    Divider,
    Transforms,
    is_serializable_type,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)
T = TypeVar("T")


class Reader:
    """
    Read values back out of a divider-separated string.

    Typed reads consume the token at the cursor and advance it by one, even
    when the token is missing or malformed. Passing ``index`` reads that token
    instead and leaves the cursor alone. Nothing here raises on bad input:
    reads past the end, or of unparseable tokens, return the type's default.
    """

    def __init__(self, text: str, divider: Divider):
        self.text = text
        self.divider = resolve_divider(divider)
        self._tokens = split_tokens(text, self.divider)
        self._pos = 0

    @classmethod
    def _nested(cls, token: str, divider: Divider) -> Reader:
        """Build a reader over a nested stream that occupied one token."""
        reader = cls("", divider)
        # Only the raw empty sentinel means "no tokens"; an escaped one is a real token
        if token and token != EMPTY_SENTINEL:
            reader.text = unescape_sentinel(token)
            reader._tokens = reader.text.split(reader.divider)
        return reader

    def __repr__(self) -> str:
        return f"Reader(divider={self.divider!r}, items={len(self._tokens)}, position={self._pos})"

    @property
    def item_count(self) -> int:
        """Number of tokens in the text."""
        return len(self._tokens)

    @property
    def position(self) -> int:
        """Index of the token the next sequential read will consume."""
        return self._pos

    @property
    def is_exhausted(self) -> bool:
        """Whether sequential reads have moved past the last token."""
        return self._pos >= len(self._tokens)

    def reset(self) -> None:
        """Move the cursor back to the first token."""
        self._pos = 0

    def _raw(self, index: int | None) -> str | None:
        """Fetch the raw token at ``index`` or at the cursor."""
        if index is None:
            index = self._pos
            self._pos += 1
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    def string(self, index: int | None = None, transforms: Transforms | None = None) -> str:
        """
        Read a string token.

        Args:
            index: Token to read instead of the one at the cursor.
            transforms: The transforms the field was written with.

        Returns:
            The decoded string, or "" when missing, empty or nil.
        """
        raw = self._raw(index)
        if raw is None or raw in RESERVED_LITERALS:
            return ""
        return reverse_transforms(unescape_sentinel(raw), transforms)

    def int_(self, index: int | None = None) -> int:
        """Read an integer token, or 0."""
        return parse_int(self.string(index))

    def bool_(self, index: int | None = None) -> bool:
        """Read a boolean token, or False."""
        return parse_bool(self.string(index))

    def double(self, index: int | None = None) -> float:
        """Read a float token at full precision, or 0.0."""
        return parse_double(self.string(index))

    def float_(self, index: int | None = None) -> float:
        """Read a float token rounded to single precision, or 0.0."""
        return parse_single(self.string(index))

    def enum_from_string(
        self, enum_cls: type[E], index: int | None = None, default: E | None = None
    ) -> E:
        """
        Read an enum member stored by its string raw value.

        Unknown values fall back to ``default``, or the first declared member.
        """
        return lookup_enum(enum_cls, self.string(index), default)

    def enum_from_int(
        self, enum_cls: type[E], index: int | None = None, default: E | None = None
    ) -> E:
        """
        Read an enum member stored by its integer raw value.

        Unknown or unparseable values fall back to ``default``, or the first
        declared member.
        """
        text = self.string(index)
        raw: object = None
        if INT_PATTERN.fullmatch(text):
            raw = int(text)
        else:
            logger.debug("Token %r is not an integer enum value", text)
        return lookup_enum(enum_cls, raw, default)

    def composite(self, cls: type[T], index: int | None = None) -> T | None:
        """
        Read a composite value through its ``from_serialized`` constructor.

        Returns:
            The rebuilt value, or None when the slot holds the nil sentinel.
            A missing token rebuilds from "".
        """
        raw = self._raw(index)
        if raw == NIL_SENTINEL:
            return None
        if raw is None or raw == EMPTY_SENTINEL:
            return cls.from_serialized("")
        return cls.from_serialized(unescape_sentinel(raw))

    def value(self, kind: type[T], index: int | None = None) -> T | None:
        """
        Read one token as ``kind``.

        Args:
            kind: str, int, bool, float, an Enum subclass, or a class with a
                ``from_serialized`` constructor.
            index: Token to read instead of the one at the cursor.

        Returns:
            The decoded value. Unsupported kinds are logged and give None.
        """
        raw = self._raw(index)
        return self._decode(kind, raw)

    def array(self, divider: Divider, kind: type[T], index: int | None = None) -> list[T]:
        """
        Read a sequence written with ``Writer.append_array``.

        Nil elements decode to the kind's default, since a plain array has
        no holes. Use `nil_array` to keep them.
        """
        inner = self._inner(divider, index)
        if inner is None:
            return []
        result = []
        for token in inner._tokens:
            decoded = self._decode(kind, None if token == NIL_SENTINEL else token)
            if decoded is not None:
                result.append(decoded)
        return result

    def nil_array(
        self, divider: Divider, kind: type[T], index: int | None = None
    ) -> list[T | None]:
        """Read a sequence whose nil elements decode to None, keeping positions."""
        inner = self._inner(divider, index)
        if inner is None:
            return []
        return [
            None if token == NIL_SENTINEL else self._decode(kind, token)
            for token in inner._tokens
        ]

    def dictionary(
        self,
        key_divider: Divider = DEFAULT_KEY_DIVIDER,
        item_divider: Divider = DEFAULT_ITEM_DIVIDER,
        index: int | None = None,
    ) -> dict[str, str]:
        """Read a mapping written with ``Writer.append_dictionary``."""
        entries = self._inner(item_divider, index)
        if entries is None:
            return {}
        result = {}
        for token in entries._tokens:
            entry = Reader._nested(token, key_divider)
            if not entry.item_count:
                continue
            key = entry.string()
            result[key] = entry.string(transforms=BASE64)
        return result

    def _inner(self, divider: Divider, index: int | None) -> Reader | None:
        raw = self._raw(index)
        if raw is None or raw == NIL_SENTINEL:
            return None
        return Reader._nested(raw, divider)

    def _decode(self, kind: Any, raw: str | None) -> Any:
        """Decode a raw token by kind, mirroring the writer's dispatch."""
        if raw is None or raw in RESERVED_LITERALS:
            text = ""
        else:
            text = unescape_sentinel(raw)

        if kind is str:
            return text
        if kind is bool:
            return parse_bool(text)
        if kind is int:
            return parse_int(text)
        if kind is float:
            return parse_double(text)
        if isinstance(kind, type) and issubclass(kind, Enum):
            return _decode_enum(kind, text)
        if is_serializable_type(kind):
            if raw == NIL_SENTINEL:
                return None
            return kind.from_serialized(text)

        logger.warning("Cannot decode value of kind %r; returning None", kind)
        return None


def _decode_enum(enum_cls: type[E], text: str) -> E:
    """Match an enum token against string raw values, then integer ones."""
    for member in enum_cls:
        if isinstance(member.value, str) and member.value == text:
            return member
    if INT_PATTERN.fullmatch(text):
        return lookup_enum(enum_cls, int(text))
    return lookup_enum(enum_cls, text)
