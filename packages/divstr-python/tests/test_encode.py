"""Tests for the divstr writer."""

import logging
import sys
from enum import Enum
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from divstr import BASE64, ESCAPED, Transforms, Writer


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Level(Enum):
    LOW = 1
    HIGH = 2


class Separator(Enum):
    COMMA = ","
    COLON = ":"


class Point:
    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y

    @property
    def serialized(self):
        return Writer(":").append(self.x).append(self.y).value

    @classmethod
    def from_serialized(cls, value):
        raise NotImplementedError


class TestScalars:
    """Test writing of scalar values."""

    def test_strings(self):
        assert Writer(",").append("one").append("two").value == "one,two"

    def test_integers(self):
        assert Writer(",").append(42).append(-17).append(0).value == "42,-17,0"

    def test_booleans(self):
        assert Writer(",").append(True).append(False).value == "true,false"

    def test_floats(self):
        assert Writer(",").append(3.14).append(-2.5).append(0.0).value == "3.14,-2.5,0.0"

    def test_float_special_values(self):
        writer = Writer(",").append(float("nan")).append(float("inf")).append(float("-inf"))
        assert writer.value == "nan,inf,-inf"

    def test_empty_string_becomes_sentinel(self):
        assert Writer(",").append("").value == "<e>"
        assert Writer(",").append("a").append("").append("b").value == "a,<e>,b"

    def test_none_becomes_nil(self):
        assert Writer(",").append("a").append(None).value == "a,<n>"

    def test_sentinel_looking_text_is_escaped(self):
        assert Writer(",").append("<e>").value == "\\<e>"
        assert Writer(",").append("<n>").value == "\\<n>"
        assert Writer(",").append("\\<e>").value == "\\\\<e>"

    def test_sentinel_inside_text_untouched(self):
        assert Writer(",").append("x<e>").value == "x<e>"

    def test_enum_raw_values(self):
        assert Writer(",").append(Color.GREEN).append(Level.HIGH).value == "green,2"


class TestWriterState:
    """Test accumulation and chaining."""

    def test_new_writer_is_empty(self):
        writer = Writer(",")
        assert writer.value == ""
        assert writer.item_count == 0

    def test_append_returns_self(self):
        writer = Writer(",")
        assert writer.append("x") is writer

    def test_no_leading_divider(self):
        assert Writer("::").append("a").value == "a"

    def test_multichar_divider(self):
        assert Writer("::").append("a").append("b").value == "a::b"

    def test_item_count(self):
        assert Writer(",").append("a").append("").append(None).item_count == 3

    def test_str(self):
        assert str(Writer(",").append(1).append(2)) == "1,2"

    def test_enum_divider(self):
        assert Writer(Separator.COLON).append(1).append(2).value == "1:2"

    def test_empty_divider_rejected(self):
        with pytest.raises(ValueError):
            Writer("")

    def test_non_string_divider_rejected(self):
        with pytest.raises(TypeError):
            Writer(5)

    def test_unsupported_type_is_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="divstr.encode"):
            writer = Writer(",").append("a").append(object()).append("b")
        assert writer.value == "a,b"
        assert writer.item_count == 2
        assert "object" in caplog.text


class TestTransforms:
    """Test per-field transforms on the write side."""

    def test_base64(self):
        assert Writer(",").append("hello", BASE64).value == "aGVsbG8="

    def test_escape_newlines(self):
        assert Writer(",").append("a\nb\r\nc", ESCAPED).value == "a\\nb\\r\\nc"

    def test_escape_backslash(self):
        assert Writer(",").append("a\\nb", ESCAPED).value == "a\\\\nb"

    def test_obfuscate_changes_text(self):
        value = Writer(",").append("secret", Transforms(obfuscate=True)).value
        assert value != "secret"
        assert len(value) == len("secret")

    def test_empty_after_transforms_is_sentinel(self):
        assert Writer(",").append("", BASE64).value == "<e>"

    def test_transforms_ignored_for_numbers(self):
        assert Writer(",").append(12, BASE64).value == "12"


class TestComposites:
    """Test writing of composite values."""

    def test_composite_inlined(self):
        assert Writer(",").append(Point(1, 2)).append(Point(3, 4)).value == "1:2,3:4"

    def test_absent_composite(self):
        assert Writer(",").append(None).append(Point(1, 2)).value == "<n>,1:2"


class TestArrays:
    """Test writing of arrays."""

    def test_string_and_int_arrays(self):
        writer = (
            Writer(",")
            .append_array(["one", "two", "three"], ":")
            .append_array([1, 2, 3], ";")
        )
        assert writer.value == "one:two:three,1;2;3"

    def test_empty_array(self):
        assert Writer(",").append_array([], ":").append("x").value == "<e>,x"

    def test_nil_elements(self):
        assert Writer(",").append_array(["one", None, "two"], ":").value == "one:<n>:two"

    def test_single_nil_element_escaped(self):
        assert Writer(",").append_array([None], ":").value == "\\<n>"

    def test_single_empty_element_escaped(self):
        assert Writer(",").append_array([""], ":").value == "\\<e>"

    def test_composite_array(self):
        assert Writer(",").append_array([Point(1, 2), Point(3, 4)], ";").value == "1:2;3:4"

    def test_array_from_generator(self):
        assert Writer(",").append_array((i * i for i in range(4)), ":").value == "0:1:4:9"

    def test_array_transforms(self):
        assert Writer(",").append_array(["hello", "hi"], ":", BASE64).value == "aGVsbG8=:aGk="


class TestDictionaries:
    """Test writing of string dictionaries."""

    def test_values_base64(self):
        assert Writer(",").append_dictionary({"1": "One"}).value == "1~T25l"

    def test_multiple_entries(self):
        value = Writer(",").append_dictionary({"1": "One", "2": "Two"}).value
        assert value == "1~T25l|2~VHdv"

    def test_custom_dividers(self):
        value = Writer(",").append_dictionary({"a": "One"}, "=", ";").value
        assert value == "a=T25l"

    def test_empty_value(self):
        assert Writer(",").append_dictionary({"a": ""}).value == "a~<e>"

    def test_empty_dictionary(self):
        assert Writer(",").append_dictionary({}).value == "<e>"
