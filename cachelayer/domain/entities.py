"""Value types shared by key derivation, the handler, and cache adapters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComponent:
    """One identity field of a cache key: component name and formatted value."""

    name: str
    value: str


@dataclass(frozen=True)
class KeyValue:
    """At-rest cache pair: derived key and serialized payload."""

    key: str
    value: bytes
