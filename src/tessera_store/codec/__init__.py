"""Attribute codec: typed records to store attribute maps and back."""

from tessera_store.codec.attribute_codec import (
    ID_ATTRIBUTE,
    AttributeCodec,
    AttributeSpec,
    zero_value,
)
from tessera_store.codec.converters import (
    NULL_ATTRIBUTE,
    AttributeMap,
    AttributeValue,
    ConverterRegistry,
    ScalarConverter,
    default_registry,
    enum_converter,
    is_null,
)

__all__ = [
    "ID_ATTRIBUTE",
    "NULL_ATTRIBUTE",
    "AttributeCodec",
    "AttributeMap",
    "AttributeSpec",
    "AttributeValue",
    "ConverterRegistry",
    "ScalarConverter",
    "default_registry",
    "enum_converter",
    "is_null",
    "zero_value",
]
