"""Placeholder codecs: string <-> typed value conversion.

Each supported placeholder type has a codec that knows how to decode a
captured segment, how to encode a value back into a segment, and which
regular expression fragment a segment of that type must match:

- str, bool and any other type -> ``[\\w]+``
- int   -> ``[-\\d]+``
- UInt  -> ``[\\d]+``
- float -> optional sign, digits, optional fraction, optional exponent
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, get_origin

from typed_router.exceptions import UnsupportedPlaceholderTypeError

WORD_PATTERN = r"[\w]+"
INT_PATTERN = r"[-\d]+"
UINT_PATTERN = r"[\d]+"
FLOAT_PATTERN = r"[-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?"


class UInt(int):
    """Unsigned integer placeholder type.

    Behaves exactly like ``int`` but refuses negative values.
    """

    def __new__(cls, value: Any = 0, *args: Any) -> "UInt":
        instance = super().__new__(cls, value, *args)
        if instance < 0:
            raise ValueError(f"UInt cannot be negative: {value!r}")
        return instance

    def __repr__(self) -> str:
        return f"UInt({int(self)})"

    # int has no __str__ of its own, so str() would fall back to __repr__
    def __str__(self) -> str:
        return int.__repr__(self)


@dataclass(frozen=True)
class PlaceholderCodec:
    """Conversion between a path segment and a typed value.

    Attributes:
        value_type: The Python type produced by ``decode``.
        pattern: Regular expression fragment matching any encoded value.
        decoder: Callable turning a segment into a value. Raises ValueError
            when the segment is not a valid value.
        encoder: Callable turning a value into a segment.
    """

    value_type: type
    pattern: str
    decoder: Callable[[str], Any]
    encoder: Callable[[Any], str] = str

    @property
    def type_name(self) -> str:
        return getattr(self.value_type, "__name__", repr(self.value_type))

    def decode(self, text: str) -> Any:
        """Decode *text*, raising ValueError if it is not a valid value."""
        try:
            return self.decoder(text)
        except (TypeError, ArithmeticError) as exc:
            raise ValueError(f"Cannot decode {text!r} as {self.type_name}") from exc

    def encode(self, value: Any) -> str:
        return self.encoder(value)


def _decode_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"Cannot decode {text!r} as bool")


def _encode_bool(value: bool) -> str:
    return "true" if value else "false"


def _encode_enum(value: Enum) -> str:
    return str(value.value)


def _decode_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Cannot decode {text!r} as a finite float")
    return value


_CODECS: dict[type, PlaceholderCodec] = {
    str: PlaceholderCodec(str, WORD_PATTERN, str),
    int: PlaceholderCodec(int, INT_PATTERN, int),
    UInt: PlaceholderCodec(UInt, UINT_PATTERN, UInt),
    float: PlaceholderCodec(float, FLOAT_PATTERN, _decode_float),
    bool: PlaceholderCodec(bool, WORD_PATTERN, _decode_bool, _encode_bool),
}


def register_codec(codec: PlaceholderCodec) -> None:
    """Install *codec* for its value type, replacing any earlier codec.

    Templates compiled afterwards use the new codec; already compiled
    templates keep the codec they were built with.

    Example:
        register_codec(PlaceholderCodec(UUID, r"[0-9a-fA-F-]{36}", UUID))
    """
    _CODECS[codec.value_type] = codec


def codec_for(value_type: type) -> PlaceholderCodec:
    """Return the codec for *value_type*.

    Types without a registered codec get a generic one that decodes with
    ``value_type(text)`` and encodes with ``str(value)``. Enums decode and
    encode by member value.

    Raises:
        UnsupportedPlaceholderTypeError: If *value_type* is not a class.
    """
    if not isinstance(value_type, type) or get_origin(value_type) is not None:
        raise UnsupportedPlaceholderTypeError(
            f"Placeholder type must be a class, got {value_type!r}"
        )

    codec = _CODECS.get(value_type)
    if codec is not None:
        return codec

    if issubclass(value_type, Enum):
        return PlaceholderCodec(value_type, WORD_PATTERN, value_type, _encode_enum)

    return PlaceholderCodec(value_type, WORD_PATTERN, value_type)
