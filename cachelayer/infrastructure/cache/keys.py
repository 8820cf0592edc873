"""Cache key derivation. Single place for key format (DRY).

A key is ``<service>_<TypeName>#[<name>:<value>]-[<name>:<value>]...``
built from the entry's identity fields, in declaration order:

- fields whose metadata carries the tag name (``field(metadata={"cache": "relateId"})``
  on dataclasses, ``Field(json_schema_extra={"cache": "relateId"})`` on pydantic
  models); the tag value names the component;
- otherwise a field named ``id``, then ``key`` (case-insensitive).

Entries may bypass field inspection by defining ``cache_identity()``,
returning ordered ``(name, value)`` pairs.

The KeyScheme (service name, tag name, null placeholder) is an immutable
value passed to every derivation call; nothing here reads global state.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple

from pydantic import BaseModel

from cachelayer.core.config import Settings
from cachelayer.core.constants import (
    CACHE_KEY_COMPONENT_SEP,
    CACHE_KEY_COMPONENT_TEMPLATE,
    CACHE_KEY_ENTRY_SEP,
    CACHE_KEY_SERVICE_SEP,
    DEFAULT_CACHE_TAG_NAME,
    DEFAULT_NULL_PLACEHOLDER,
    FALLBACK_IDENTITY_FIELDS,
)
from cachelayer.domain.entities import KeyComponent
from cachelayer.domain.exceptions import NoIdentityFieldError


class IdentityField(NamedTuple):
    """Resolved identity field: entry attribute, component name, raw value."""

    attribute: str
    name: str
    value: Any


def _declared_fields(entry: Any) -> Iterator[tuple[str, Mapping[str, Any]]]:
    """Yield (attribute, metadata) for each field of entry in declaration order."""
    if dataclasses.is_dataclass(entry):
        for f in dataclasses.fields(entry):
            yield f.name, f.metadata
    elif isinstance(entry, BaseModel):
        for name, info in type(entry).model_fields.items():
            extra = info.json_schema_extra
            yield name, extra if isinstance(extra, dict) else {}
    else:
        for name in _instance_attributes(entry):
            yield name, {}


def _instance_attributes(entry: Any) -> list[str]:
    """Slot names (base classes first) followed by instance __dict__ keys."""
    names: list[str] = []
    for cls in reversed(type(entry).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in names:
                continue
            if hasattr(entry, name):
                names.append(name)
    for name in getattr(entry, "__dict__", {}):
        if name not in names:
            names.append(name)
    return names


def build_cache_key(
    service_name: str, entry_name: str, components: Sequence[KeyComponent]
) -> str:
    """Compose the wire-format key from already formatted components."""
    body = CACHE_KEY_COMPONENT_SEP.join(
        CACHE_KEY_COMPONENT_TEMPLATE.format(name=c.name, value=c.value)
        for c in components
    )
    return f"{service_name}{CACHE_KEY_SERVICE_SEP}{entry_name}{CACHE_KEY_ENTRY_SEP}{body}"


@dataclass(frozen=True)
class KeyScheme:
    """Immutable key derivation settings shared by a handler and its helpers."""

    service_name: str = ""
    tag_name: str = DEFAULT_CACHE_TAG_NAME
    null_placeholder: str = DEFAULT_NULL_PLACEHOLDER

    @classmethod
    def from_settings(cls, settings: Settings) -> KeyScheme:
        return cls(
            service_name=settings.service_name,
            tag_name=settings.cache_tag_name,
            null_placeholder=settings.null_placeholder,
        )

    def identity_fields(self, entry: Any) -> list[IdentityField]:
        """Resolve entry's identity fields in key order.

        Tagged fields take precedence; the id/key fallback is only consulted
        when no field carries the tag.

        Raises:
            NoIdentityFieldError: If no identity field can be resolved.
        """
        explicit = getattr(entry, "cache_identity", None)
        if callable(explicit):
            fields = [IdentityField(name, name, value) for name, value in explicit()]
            if not fields:
                raise NoIdentityFieldError(type(entry).__name__, self.tag_name)
            return fields

        declared = list(_declared_fields(entry))
        tagged = [
            IdentityField(attr, str(metadata[self.tag_name]), getattr(entry, attr))
            for attr, metadata in declared
            if self.tag_name in metadata
        ]
        if tagged:
            return tagged

        for fallback in FALLBACK_IDENTITY_FIELDS:
            for attr, _ in declared:
                if attr.lower() == fallback:
                    return [IdentityField(attr, fallback, getattr(entry, attr))]
        raise NoIdentityFieldError(type(entry).__name__, self.tag_name)

    def format_value(self, value: Any) -> str:
        """Textual form of one identity value.

        None becomes the null placeholder; booleans render as ``true``/``false``.
        """
        if value is None:
            return self.null_placeholder
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def components(self, entry: Any) -> list[KeyComponent]:
        return [
            KeyComponent(f.name, self.format_value(f.value))
            for f in self.identity_fields(entry)
        ]

    def key_for(self, entry: Any) -> str:
        """Return the cache key for entry.

        Raises:
            NoIdentityFieldError: If entry exposes no identity field.
        """
        return build_cache_key(
            self.service_name, type(entry).__name__, self.components(entry)
        )

    def keys_for(self, entries: Iterable[Any]) -> list[str]:
        """Return keys for entries in order; the first failure aborts the whole call."""
        return [self.key_for(entry) for entry in entries]


DEFAULT_KEY_SCHEME = KeyScheme()


def get_entry_cache_key(entry: Any, scheme: KeyScheme = DEFAULT_KEY_SCHEME) -> str:
    """Cache key for one entry under scheme."""
    return scheme.key_for(entry)


def get_entry_cache_keys(
    entries: Iterable[Any], scheme: KeyScheme = DEFAULT_KEY_SCHEME
) -> list[str]:
    """Cache keys for entries, in order. Raises on the first entry without identity."""
    return scheme.keys_for(entries)
