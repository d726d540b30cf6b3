# =============================================================================
# tests/test_registry.py - Partials Configuration & Schema Tests
# =============================================================================

import pytest

from partials import (
    Data,
    DirectiveKind,
    PartialsConfig,
    SchemaError,
    data_property,
    dataclass,
    schema_for,
)
from partials.registry import default_config, get_config
from tests.fakes import LazyData, LazyStringData, SimpleData


@dataclass
class ChildLazyData(LazyData):
    pass


# =============================================================================
# Conditional defaults
# =============================================================================

class TestDefinitions:
    """Tests for per-class conditional defaults."""

    def test_unregistered_class_has_no_definitions(self, config):
        assert config.definitions(SimpleData) == {}

    def test_set_definitions_registers_per_kind(self, config):
        config.set_definitions(
            LazyData,
            include_definitions={"name": True},
            except_definitions={"name": lambda data: False},
        )

        definitions = config.definitions(LazyData)
        assert set(definitions) == {DirectiveKind.INCLUDE, DirectiveKind.EXCEPT}
        assert definitions[DirectiveKind.INCLUDE] == {"name": True}

    def test_set_definitions_replaces(self, config):
        config.set_definitions(LazyData, include_definitions={"name": True})
        config.set_definitions(LazyData, exclude_definitions={"name": True})

        assert set(config.definitions(LazyData)) == {DirectiveKind.EXCLUDE}

    def test_subclass_inherits_registration(self, config):
        config.set_definitions(LazyData, include_definitions={"name": True})
        assert config.definitions(ChildLazyData) == config.definitions(LazyData)

    def test_forget_and_clear(self, config):
        config.set_definitions(LazyData, include_definitions={"name": True})
        config.set_definitions(SimpleData, include_definitions={"string": True})

        config.forget(LazyData)
        assert config.definitions(LazyData) == {}
        assert config.definitions(SimpleData) != {}

        config.clear()
        assert config.definitions(SimpleData) == {}

    def test_data_classmethod_uses_default_config(self):
        LazyData.set_definitions(include_definitions={"name": True})
        assert DirectiveKind.INCLUDE in default_config.definitions(LazyData)

    def test_get_config(self, config):
        assert get_config() is default_config
        assert get_config(config) is config


# =============================================================================
# Request allowlists
# =============================================================================

class TestAllowlists:
    """Tests for request allowlists."""

    def test_unrestricted_by_default(self, config):
        assert config.allowed(LazyData, "include") is None

    def test_names_are_stored_per_kind(self, config):
        config.set_allowed(LazyData, "include", ["name"])

        assert config.allowed(LazyData, DirectiveKind.INCLUDE) == frozenset({"name"})
        assert config.allowed(LazyData, DirectiveKind.EXCLUDE) is None

    def test_blank_names_deny_all(self, config):
        config.set_allowed(LazyData, "include", [""])
        assert config.allowed(LazyData, "include") == frozenset()

    def test_none_restores_unrestricted(self, config):
        config.set_allowed(LazyData, "only", [])
        config.set_allowed(LazyData, "only", None)
        assert config.allowed(LazyData, "only") is None

    def test_unknown_kind_rejected(self, config):
        with pytest.raises(ValueError):
            config.set_allowed(LazyData, "hide", ["name"])


# =============================================================================
# Schema
# =============================================================================

@dataclass
class AlbumData(Data):
    title: str
    cover: LazyStringData = data_property(data_class=LazyStringData, default=None)
    songs: list = data_property(collection_of=SimpleData, default_factory=list)
    _cache: dict = data_property(default_factory=dict)


class TestSchema:
    """Tests for the Data property schema."""

    def test_properties_in_declaration_order(self):
        assert schema_for(AlbumData).names == ["title", "cover", "songs"]

    def test_nested_class_metadata(self):
        schema = AlbumData.schema()
        assert schema.get("cover").nested_class is LazyStringData
        assert schema.get("songs").nested_class is SimpleData
        assert schema.get("songs").collection_of is SimpleData
        assert schema.get("title").nested_class is None
        assert schema.get("missing") is None

    def test_schema_is_cached(self):
        assert schema_for(AlbumData) is schema_for(AlbumData)

    def test_non_dataclass_rejected(self):
        class NotADataclass(Data):
            pass

        with pytest.raises(SchemaError) as exc_info:
            schema_for(NotADataclass)

        assert exc_info.value.code == "SCHEMA_ERROR"

    def test_isolated_configs_do_not_share_state(self):
        first = PartialsConfig()
        second = PartialsConfig()
        first.set_allowed(LazyData, "include", [])

        assert second.allowed(LazyData, "include") is None
