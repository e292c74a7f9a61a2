"""Bidirectional mapping between typed records and store attribute maps.

A codec is declared once per record type with an explicit list of
attributes. Fields whose type has a registered scalar converter are stored
natively; everything else is stored as JSON text and decoded back with a
pydantic ``TypeAdapter``.

Decoding favours availability: a JSON-fallback field that no longer parses
is replaced by its type's zero value and logged, so the record as a whole
still decodes. A registered scalar that cannot be converted is treated as
corruption and raises :class:`AttributeDecodeError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar, get_origin

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tessera_store.codec.converters import (
    NULL_ATTRIBUTE,
    AttributeMap,
    AttributeValue,
    ConverterRegistry,
    is_null,
)
from tessera_store.exceptions import AttributeDecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ID_ATTRIBUTE = "Id"

_ZERO_FACTORIES: tuple[type, ...] = (
    dict,
    list,
    set,
    frozenset,
    tuple,
    str,
    int,
    float,
    bool,
)


def zero_value(python_type: Any) -> Any:
    """Return the zero value for a type (empty container, 0, "" or None)."""
    origin = get_origin(python_type) or python_type
    if origin in _ZERO_FACTORIES:
        return origin()
    return None


def _pascal_case(field: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in field.split("_"))


@lru_cache(maxsize=None)
def _type_adapter(python_type: Any) -> TypeAdapter:
    return TypeAdapter(python_type)


@dataclass(frozen=True)
class AttributeSpec:
    """One record field and how it is named in the store.

    Attributes
    ----------
    field
        Python attribute name on the record
    type
        Declared (non-optional) type of the field
    nullable
        Whether ``None`` is a legitimate value
    name
        Store attribute name; defaults to the PascalCase form of ``field``
    """

    field: str
    type: Any
    nullable: bool = False
    name: str | None = None

    @property
    def attribute_name(self) -> str:
        return self.name or _pascal_case(self.field)


class AttributeCodec(Generic[T]):
    """Encode records of one type to attribute maps and back.

    Examples
    --------
    >>> codec = AttributeCodec(
    ...     RefreshToken,
    ...     [AttributeSpec("id", UUID), AttributeSpec("token", str)],
    ...     default_registry(),
    ... )
    >>> item = codec.encode(token)
    >>> codec.decode(item) == token
    True
    """

    def __init__(
        self,
        factory: Callable[..., T],
        attributes: Sequence[AttributeSpec],
        registry: ConverterRegistry,
        id_field: str = "id",
    ):
        self._factory = factory
        self._attributes = tuple(attributes)
        self._registry = registry
        self._by_field = {spec.field: spec for spec in self._attributes}

        if id_field not in self._by_field:
            msg = f"Identity field '{id_field}' is not declared"
            raise ValueError(msg)
        id_spec = self._by_field[id_field]
        if id_spec.attribute_name != ID_ATTRIBUTE:
            msg = f"Identity field must be stored as '{ID_ATTRIBUTE}'"
            raise ValueError(msg)
        self._id_spec = id_spec

    @property
    def entity_name(self) -> str:
        return getattr(self._factory, "__name__", "Entity")

    @property
    def attributes(self) -> tuple[AttributeSpec, ...]:
        return self._attributes

    def identity(self, record: T) -> Any:
        value = getattr(record, self._id_spec.field)
        if value is None:
            msg = f"{self.entity_name} identity cannot be None"
            raise ValueError(msg)
        return value

    def encode_key(self, entity_id: Any) -> AttributeMap:
        return {ID_ATTRIBUTE: self._encode_value(self._id_spec, entity_id)}

    def encode_field(self, field: str, value: Any) -> AttributeValue:
        """Encode a single value as it would be stored for ``field``."""
        return self._encode_value(self._by_field[field], value)

    def attribute_name(self, field: str) -> str:
        return self._by_field[field].attribute_name

    def encode(self, record: T) -> AttributeMap:
        item: AttributeMap = {}
        for spec in self._attributes:
            item[spec.attribute_name] = self._encode_value(
                spec,
                getattr(record, spec.field),
            )
        return item

    def decode(self, item: AttributeMap) -> T:
        values: dict[str, Any] = {}
        for spec in self._attributes:
            raw = item.get(spec.attribute_name)
            if raw is None:
                # Absent attribute keeps the record default
                continue
            values[spec.field] = self._decode_value(spec, raw)
        return self._factory(**values)

    def _encode_value(self, spec: AttributeSpec, value: Any) -> AttributeValue:
        if value is None:
            return dict(NULL_ATTRIBUTE)

        converter = self._registry.get(spec.type)
        if converter is not None:
            return converter.encode(value)

        json_text = _type_adapter(spec.type).dump_json(value).decode("utf-8")
        return {"S": json_text}

    def _decode_value(self, spec: AttributeSpec, raw: AttributeValue) -> Any:
        if is_null(raw):
            if spec.nullable:
                return None
            logger.warning(
                "Attribute %s of %s is NULL but not nullable, using zero value",
                spec.attribute_name,
                self.entity_name,
            )
            return zero_value(spec.type)

        converter = self._registry.get(spec.type)
        if converter is not None:
            try:
                return converter.decode(raw)
            except (KeyError, TypeError, ValueError) as e:
                raise AttributeDecodeError(spec.attribute_name, raw, str(e)) from e

        json_text = raw.get("S")
        if not isinstance(json_text, str):
            logger.warning(
                "Attribute %s of %s is not JSON text, using zero value",
                spec.attribute_name,
                self.entity_name,
            )
            return zero_value(spec.type)

        try:
            return _type_adapter(spec.type).validate_json(json_text)
        except PydanticValidationError as e:
            logger.warning(
                "Failed to deserialize attribute %s of %s, using zero value: %s",
                spec.attribute_name,
                self.entity_name,
                e.errors(include_url=False)[0]["msg"],
            )
            return zero_value(spec.type)
