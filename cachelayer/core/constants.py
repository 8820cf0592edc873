"""Core constants: cache key template pieces and shared literal values.

Single source of truth for the cache key wire format
``<service>_<TypeName>#[<name>:<value>]-[<name>:<value>]``. The format is
read by every service sharing a cache, so it must stay byte-stable.
"""

# Field metadata key marking an identity field (e.g. field(metadata={"cache": "relateId"}))
DEFAULT_CACHE_TAG_NAME = "cache"

# Identity fields tried, in order, when no field carries the tag
FALLBACK_IDENTITY_FIELDS = ("id", "key")

# Textual form of a None identity value
DEFAULT_NULL_PLACEHOLDER = "null"

CACHE_KEY_SERVICE_SEP = "_"
CACHE_KEY_ENTRY_SEP = "#"
CACHE_KEY_COMPONENT_SEP = "-"
CACHE_KEY_COMPONENT_TEMPLATE = "[{name}:{value}]"

# SQL builder: substituted for None / empty sequences so the filter matches nothing
SQL_PLACEHOLDER = "?"
SQL_FALSE_PREDICATE = " ( 1 != 1 ) "
