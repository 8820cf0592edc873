"""JSON payload serializer backed by pydantic TypeAdapter.

Handles dataclasses and pydantic models (including nested datetimes,
enums and UUIDs) symmetrically: bytes from serialize() decode back to an
equal entry via deserialize().
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from cachelayer.domain.exceptions import DeserializationError, SerializationError


@lru_cache(maxsize=256)
def _adapter_for(tp: type) -> TypeAdapter[Any]:
    """Return a (cached) TypeAdapter for tp; building one compiles a schema."""
    return TypeAdapter(tp)


def _field_names(value: Any) -> list[str]:
    if dataclasses.is_dataclass(value):
        return [f.name for f in dataclasses.fields(value)]
    if isinstance(value, BaseModel):
        return list(type(value).model_fields)
    return list(vars(value))


class JsonSerializer:
    """Default ISerializer: compact JSON via pydantic."""

    def serialize(self, value: Any) -> bytes:
        """Encode value as JSON bytes.

        Raises:
            SerializationError: If the type has no pydantic schema or a field cannot be encoded.
        """
        value_type = type(value)
        try:
            return _adapter_for(value_type).dump_json(value)
        except (PydanticUserError, PydanticSerializationError) as e:
            raise SerializationError(value_type.__name__, str(e)) from e

    def deserialize(self, data: bytes, target: Any) -> None:
        """Decode data as target's type and copy every field onto target.

        Raises:
            DeserializationError: If data is not valid JSON for target's type.
        """
        target_type = type(target)
        try:
            loaded = _adapter_for(target_type).validate_json(data)
        except ValidationError as e:
            raise DeserializationError(target_type.__name__, str(e)) from e
        except PydanticUserError as e:
            raise DeserializationError(target_type.__name__, str(e)) from e
        for name in _field_names(loaded):
            setattr(target, name, getattr(loaded, name))
