"""
divstr - Divider-Separated STRing serialization

Packs structured values (scalars, optionals, nested composites, arrays and
string maps) into one flat string, small enough for a single preference or
config slot, and reads them back. The format is positional: both sides must
agree on field order and dividers.

Usage:
    import divstr

    # Write values in order
    text = divstr.Writer(",").append("Alice").append(30).append(True).value

    # Read them back in the same order
    reader = divstr.Reader(text, ",")
    name, age, active = reader.string(), reader.int_(), reader.bool_()

    # Per-field transforms
    from divstr import Transforms

    text = divstr.Writer(",").append("a\\nb", Transforms(base64=True)).value
    divstr.Reader(text, ",").string(transforms=Transforms(base64=True))
"""

__version__ = "1.0.0"

from .decode import Reader
from .encode import Writer
from .string_utils import EMPTY_SENTINEL, NIL_SENTINEL
from .transforms import base64_decode, base64_encode, deobfuscate, obfuscate
from .types import (
    BASE64,
    ESCAPED,
    NO_TRANSFORMS,
    OBFUSCATED,
    Divider,
    Scalar,
    Serializable,
    Transforms,
)

__all__ = [
    # Version
    "__version__",
    # Main API
    "Writer",
    "Reader",
    # Options
    "Transforms",
    "NO_TRANSFORMS",
    "BASE64",
    "OBFUSCATED",
    "ESCAPED",
    # Types
    "Serializable",
    "Scalar",
    "Divider",
    # Sentinels
    "EMPTY_SENTINEL",
    "NIL_SENTINEL",
    # Transform helpers
    "obfuscate",
    "deobfuscate",
    "base64_encode",
    "base64_decode",
]
