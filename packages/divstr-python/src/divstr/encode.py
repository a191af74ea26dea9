"""divstr writer implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from .primitives import encode_scalar
from .string_utils import EMPTY_SENTINEL, NIL_SENTINEL, escape_sentinel, resolve_divider
from .transforms import apply_transforms
from .types import (
    BASE64,
    DEFAULT_ITEM_DIVIDER,
    DEFAULT_KEY_DIVIDER,
    Divider,
    Serializable,
    Transforms,
)

logger = logging.getLogger(__name__)


class Writer:
    """
    Linearize an ordered sequence of values into one divider-separated string.

    Every append returns the writer, so calls chain:

        Writer(",").append("one").append(2).append(True).value  # "one,2,true"

    The divider must not occur inside any token appended at this level.
    """

    def __init__(self, divider: Divider):
        self.divider = resolve_divider(divider)
        self._value = ""
        self._count = 0

    @property
    def value(self) -> str:
        """The accumulated encoded text."""
        return self._value

    @property
    def item_count(self) -> int:
        """Number of tokens appended so far."""
        return self._count

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Writer(divider={self.divider!r}, value={self._value!r})"

    def append(self, item: Any, transforms: Transforms | None = None) -> Writer:
        """
        Append one value as one token.

        Args:
            item: A str, bool, int, float, Enum member (its raw value),
                Serializable composite, or None for an absent optional.
            transforms: Transforms for string fields. Ignored for other kinds.

        Returns:
            This writer.
        """
        if item is None:
            return self._push(NIL_SENTINEL)

        if isinstance(item, Enum):
            item = item.value

        if isinstance(item, str):
            return self._push_text(apply_transforms(item, transforms))

        if isinstance(item, (bool, int, float)):
            return self._push_text(encode_scalar(item))

        if isinstance(item, Serializable):
            return self._push_text(item.serialized)

        logger.warning("Cannot append value of type %s; skipped", type(item).__name__)
        return self

    def append_array(
        self,
        items: Iterable[Any],
        divider: Divider,
        transforms: Transforms | None = None,
    ) -> Writer:
        """
        Append a sequence as a single token.

        Elements are written by a nested writer using ``divider``. None
        elements become the nil sentinel, so positions and count survive.

        Args:
            items: The elements.
            divider: Divider between elements. Must differ from this writer's.
            transforms: Transforms for string elements.

        Returns:
            This writer.
        """
        inner = Writer(divider)
        for element in items:
            inner.append(element, transforms)
        return self._push_text(inner.value)

    def append_dictionary(
        self,
        mapping: Mapping[str, str],
        key_divider: Divider = DEFAULT_KEY_DIVIDER,
        item_divider: Divider = DEFAULT_ITEM_DIVIDER,
    ) -> Writer:
        """
        Append a string-to-string mapping as a single token.

        Each entry is written as ``key<key_divider>base64(value)`` and entries
        are joined with ``item_divider``. Entry order follows the mapping's
        iteration order and carries no meaning.

        Args:
            mapping: The entries. Keys must not contain either divider.
            key_divider: Divider between a key and its value.
            item_divider: Divider between entries.

        Returns:
            This writer.
        """
        entries = Writer(item_divider)
        for key, val in mapping.items():
            entry = Writer(key_divider).append(key).append(val, BASE64)
            entries._push_text(entry.value)
        return self._push_text(entries.value)

    def _push_text(self, text: str) -> Writer:
        """Push literal text, guarding the reserved tokens."""
        if text == "":
            return self._push(EMPTY_SENTINEL)
        return self._push(escape_sentinel(text))

    def _push(self, token: str) -> Writer:
        if self._count == 0:
            self._value = token
        else:
            self._value += f"{self.divider}{token}"
        self._count += 1
        return self
