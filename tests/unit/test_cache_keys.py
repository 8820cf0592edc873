"""Tests for cache key derivation (tag resolution, id/key fallback, wire format)."""

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, Field

from cachelayer.domain.entities import KeyComponent
from cachelayer.domain.exceptions import NoIdentityFieldError
from cachelayer.infrastructure.cache.keys import (
    IdentityField,
    KeyScheme,
    build_cache_key,
    get_entry_cache_key,
    get_entry_cache_keys,
)


@dataclass
class MockEntry:
    relate_id: int = field(default=0, metadata={"cache": "relateId"})
    source_id: int = field(default=0, metadata={"cache": "sourceId"})
    property_id: int = field(default=0, metadata={"cache": "propertyId"})
    name: str = ""


@dataclass
class IdEntry:
    ID: int = 0
    key: str = ""
    name: str = ""


@dataclass
class KeyEntry:
    Key: str = ""
    name: str = ""


@dataclass
class TaggedWithId:
    id: int = 0
    code: str = field(default="", metadata={"cache": "code"})


@dataclass
class NoIdentity:
    name: str = ""


@dataclass
class OtherTag:
    tenant: str = field(default="", metadata={"cachekey": "tenant"})
    id: int = 0


class PydanticEntry(BaseModel):
    tenant_id: str = Field(default="", json_schema_extra={"cache": "tenantId"})
    user_id: int = Field(default=0, json_schema_extra={"cache": "userId"})
    email: str = ""


class PlainEntry:
    def __init__(self, id: int) -> None:
        self.id = id


class SlotEntry:
    __slots__ = ("id", "label")

    def __init__(self, id: int, label: str = "") -> None:
        self.id = id
        self.label = label


class SlotKeyEntry(SlotEntry):
    __slots__ = "key"

    def __init__(self, key: str) -> None:
        super().__init__(id=None)  # type: ignore[arg-type]
        self.key = key


class SlotNoIdentity:
    __slots__ = ("label",)

    def __init__(self, label: str) -> None:
        self.label = label


@dataclass
class FlagEntry:
    region: str = field(default="", metadata={"cache": "region"})
    active: bool = field(default=False, metadata={"cache": "active"})


class ExplicitEntry:
    def __init__(self, region: str, number: int) -> None:
        self.region = region
        self.number = number

    def cache_identity(self) -> list[tuple[str, object]]:
        return [("region", self.region), ("no", self.number)]


class TestKeyFormat:
    """Wire format is <service>_<Type>#[name:value]-[name:value]."""

    def test_tagged_fields_in_declaration_order(self) -> None:
        scheme = KeyScheme(service_name="test")
        entry = MockEntry(relate_id=1, source_id=2, property_id=3)
        assert scheme.key_for(entry) == "test_MockEntry#[relateId:1]-[sourceId:2]-[propertyId:3]"

    def test_empty_service_name_keeps_separator(self) -> None:
        assert get_entry_cache_key(MockEntry(1, 2, 3)) == "_MockEntry#[relateId:1]-[sourceId:2]-[propertyId:3]"

    def test_deterministic(self) -> None:
        scheme = KeyScheme(service_name="svc")
        entry = MockEntry(relate_id=9, source_id=8, property_id=7, name="x")
        assert scheme.key_for(entry) == scheme.key_for(entry)
        assert scheme.key_for(entry) == scheme.key_for(MockEntry(9, 8, 7, "other"))

    def test_non_identity_fields_do_not_affect_key(self) -> None:
        scheme = KeyScheme()
        assert scheme.key_for(MockEntry(1, 2, 3, "a")) == scheme.key_for(MockEntry(1, 2, 3, "b"))

    def test_build_cache_key(self) -> None:
        key = build_cache_key("svc", "Thing", [KeyComponent("a", "1"), KeyComponent("b", "x")])
        assert key == "svc_Thing#[a:1]-[b:x]"

    def test_string_values_as_is(self) -> None:
        entry = PydanticEntry(tenant_id="acme", user_id=42)
        assert KeyScheme(service_name="auth").key_for(entry) == "auth_PydanticEntry#[tenantId:acme]-[userId:42]"


class TestIdentityResolution:
    """Tags take precedence; id then key are the fallback."""

    def test_tag_precedence_over_id(self) -> None:
        entry = TaggedWithId(id=5, code="abc")
        assert KeyScheme().components(entry) == [KeyComponent("code", "abc")]

    def test_fallback_id_case_insensitive(self) -> None:
        entry = IdEntry(ID=12, key="ignored")
        assert KeyScheme(service_name="s").key_for(entry) == "s_IdEntry#[id:12]"

    def test_fallback_id_before_key(self) -> None:
        fields = KeyScheme().identity_fields(IdEntry(ID=1, key="k"))
        assert fields == [IdentityField("ID", "id", 1)]

    def test_fallback_key(self) -> None:
        assert KeyScheme().key_for(KeyEntry(Key="user-7")) == "_KeyEntry#[key:user-7]"

    def test_no_identity_raises(self) -> None:
        with pytest.raises(NoIdentityFieldError) as exc_info:
            KeyScheme().key_for(NoIdentity(name="x"))
        assert exc_info.value.error_code == "NO_IDENTITY_FIELD"
        assert exc_info.value.details == {"entry_type": "NoIdentity", "tag_name": "cache"}

    def test_custom_tag_name(self) -> None:
        entry = OtherTag(tenant="acme", id=3)
        assert KeyScheme(tag_name="cachekey").components(entry) == [KeyComponent("tenant", "acme")]
        # With the default tag the "cachekey" metadata is invisible, so id is used.
        assert KeyScheme().components(entry) == [KeyComponent("id", "3")]

    def test_plain_object_fallback(self) -> None:
        assert KeyScheme().key_for(PlainEntry(id=4)) == "_PlainEntry#[id:4]"

    def test_slotted_object_fallback(self) -> None:
        assert KeyScheme().key_for(SlotEntry(1, "x")) == "_SlotEntry#[id:1]"

    def test_slotted_object_inherits_base_slots(self) -> None:
        fields = KeyScheme().identity_fields(SlotKeyEntry("k1"))
        assert fields == [IdentityField("id", "id", None)]

    def test_slotted_object_without_identity_raises(self) -> None:
        with pytest.raises(NoIdentityFieldError):
            KeyScheme().key_for(SlotNoIdentity("x"))

    def test_explicit_identity_method(self) -> None:
        entry = ExplicitEntry(region="eu", number=17)
        assert KeyScheme(service_name="s").key_for(entry) == "s_ExplicitEntry#[region:eu]-[no:17]"

    def test_explicit_identity_empty_raises(self) -> None:
        entry = ExplicitEntry(region="eu", number=1)
        entry.cache_identity = lambda: []  # type: ignore[method-assign]
        with pytest.raises(NoIdentityFieldError):
            KeyScheme().key_for(entry)

    def test_identity_fields_expose_attribute_names(self) -> None:
        fields = KeyScheme().identity_fields(MockEntry(1, 2, 3))
        assert [f.attribute for f in fields] == ["relate_id", "source_id", "property_id"]
        assert [f.name for f in fields] == ["relateId", "sourceId", "propertyId"]


class TestNullValues:
    def test_none_uses_default_placeholder(self) -> None:
        assert KeyScheme().key_for(PlainEntry(id=None)) == "_PlainEntry#[id:null]"  # type: ignore[arg-type]

    def test_none_uses_configured_placeholder(self) -> None:
        scheme = KeyScheme(null_placeholder="<nil>")
        assert scheme.key_for(PlainEntry(id=None)) == "_PlainEntry#[id:<nil>]"  # type: ignore[arg-type]


class TestValueFormatting:
    def test_booleans_render_lowercase(self) -> None:
        assert KeyScheme().key_for(FlagEntry("eu", True)) == "_FlagEntry#[region:eu]-[active:true]"
        assert KeyScheme().key_for(FlagEntry("eu", False)) == "_FlagEntry#[region:eu]-[active:false]"

    def test_integers_unaffected_by_bool_rule(self) -> None:
        assert KeyScheme().format_value(1) == "1"
        assert KeyScheme().format_value(0) == "0"


class TestBatchKeys:
    def test_order_preserved(self) -> None:
        scheme = KeyScheme(service_name="t")
        e1, e2 = MockEntry(1, 2, 3), MockEntry(1, 2, 4)
        assert scheme.keys_for([e1, e2]) == [scheme.key_for(e1), scheme.key_for(e2)]

    def test_failure_returns_no_partial_list(self) -> None:
        with pytest.raises(NoIdentityFieldError):
            get_entry_cache_keys([MockEntry(1, 2, 3), NoIdentity()])

    def test_empty(self) -> None:
        assert get_entry_cache_keys([]) == []

    def test_scheme_argument(self) -> None:
        keys = get_entry_cache_keys([IdEntry(ID=1)], KeyScheme(service_name="x"))
        assert keys == ["x_IdEntry#[id:1]"]
