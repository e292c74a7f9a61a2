"""Scalar converters between Python values and store attribute values.

Each registered type maps to an ``(encode, decode)`` pair. The table is
populated explicitly at startup; types without an entry go through the
JSON fallback in :class:`AttributeCodec`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable
from uuid import UUID

AttributeValue = dict[str, Any]
AttributeMap = dict[str, AttributeValue]

NULL_ATTRIBUTE: AttributeValue = {"NULL": True}


@dataclass(frozen=True)
class ScalarConverter:
    """Encode/decode pair for one Python type."""

    encode: Callable[[Any], AttributeValue]
    decode: Callable[[AttributeValue], Any]


def is_null(value: AttributeValue) -> bool:
    return bool(value.get("NULL"))


def _encode_datetime(value: datetime) -> AttributeValue:
    # Fixed-width UTC keeps stored timestamps lexicographically ordered
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return {"S": value.astimezone(timezone.utc).isoformat(timespec="microseconds")}


def _decode_datetime(value: AttributeValue) -> datetime:
    parsed = datetime.fromisoformat(value["S"])
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _decode_bool(value: AttributeValue) -> bool:
    raw = value["BOOL"]
    if not isinstance(raw, bool):
        msg = f"expected boolean, got {type(raw).__name__}"
        raise TypeError(msg)
    return raw


STRING = ScalarConverter(
    encode=lambda value: {"S": value},
    decode=lambda value: value["S"],
)
INTEGER = ScalarConverter(
    encode=lambda value: {"N": str(value)},
    decode=lambda value: int(value["N"]),
)
FLOAT = ScalarConverter(
    encode=lambda value: {"N": repr(float(value))},
    decode=lambda value: float(value["N"]),
)
BOOLEAN = ScalarConverter(
    encode=lambda value: {"BOOL": bool(value)},
    decode=_decode_bool,
)
DATETIME = ScalarConverter(encode=_encode_datetime, decode=_decode_datetime)
UUID_STRING = ScalarConverter(
    encode=lambda value: {"S": str(value)},
    decode=lambda value: UUID(value["S"]),
)


def enum_converter(enum_type: type[Enum]) -> ScalarConverter:
    """Build a converter storing an enum member by its value as a string."""
    return ScalarConverter(
        encode=lambda value: {"S": str(enum_type(value).value)},
        decode=lambda value: enum_type(value["S"]),
    )


class ConverterRegistry:
    """Explicit table of scalar converters keyed by Python type.

    Examples
    --------
    >>> registry = default_registry()
    >>> registry.register(TokenType, enum_converter(TokenType))
    >>> registry.get(UUID).encode(uuid4())
    {'S': '...'}
    """

    def __init__(self, converters: dict[type, ScalarConverter] | None = None):
        self._converters: dict[type, ScalarConverter] = dict(converters or {})

    def register(self, python_type: type, converter: ScalarConverter) -> None:
        self._converters[python_type] = converter

    def get(self, python_type: Any) -> ScalarConverter | None:
        return self._converters.get(python_type)

    def __contains__(self, python_type: object) -> bool:
        return python_type in self._converters

    def copy(self) -> ConverterRegistry:
        return ConverterRegistry(self._converters)


def default_registry() -> ConverterRegistry:
    """Return a registry with the built-in scalar converters."""
    return ConverterRegistry(
        {
            str: STRING,
            int: INTEGER,
            float: FLOAT,
            bool: BOOLEAN,
            datetime: DATETIME,
            UUID: UUID_STRING,
        },
    )
