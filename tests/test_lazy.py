# =============================================================================
# tests/test_lazy.py - Lazy Value Tests
# =============================================================================
# Tests for Lazy factories, memoization and inclusion policies.
# =============================================================================

import pytest

from partials import (
    ABSENT,
    Absent,
    ClosureLazy,
    ConditionalLazy,
    DeferredLazy,
    DeferredProp,
    InclusionPolicy,
    Lazy,
    RelationalLazy,
)
from tests.fakes import FakeModel, LazyData, NestedLazyData, SimpleData


# =============================================================================
# Factories
# =============================================================================

class TestLazyFactories:
    """Tests for the Lazy factory methods."""

    def test_create_is_omitted_by_default(self):
        lazy = Lazy.create(lambda: "Ruben")
        assert lazy.policy == InclusionPolicy.OMITTED_BY_DEFAULT
        assert not lazy.is_default_included

    def test_default_included_switches_policy(self):
        lazy = Lazy.create(lambda: "Ruben").default_included()
        assert lazy.policy == InclusionPolicy.DEFAULT_INCLUDED
        assert lazy.is_default_included

    def test_default_included_false_switches_back(self):
        lazy = Lazy.create(lambda: "Ruben").default_included().default_included(False)
        assert lazy.policy == InclusionPolicy.OMITTED_BY_DEFAULT

    def test_when_creates_conditional(self):
        lazy = Lazy.when(lambda: True, lambda: "Ruben")
        assert isinstance(lazy, ConditionalLazy)
        assert lazy.policy == InclusionPolicy.CONDITIONAL
        assert lazy.should_be_included()

    def test_conditional_ignores_default_included(self):
        lazy = Lazy.when(lambda: False, lambda: "Ruben").default_included()
        assert lazy.policy == InclusionPolicy.CONDITIONAL
        assert not lazy.should_be_included()

    def test_when_loaded_follows_model(self):
        model = FakeModel("Hello")
        lazy = Lazy.when_loaded("related", model, lambda: "World")

        assert isinstance(lazy, RelationalLazy)
        assert lazy.policy == InclusionPolicy.RELATIONAL
        assert not lazy.should_be_included()

        model.load("related")
        assert lazy.should_be_included()

    def test_deferred_and_closure(self):
        assert isinstance(Lazy.deferred(lambda: 1), DeferredLazy)
        assert isinstance(Lazy.closure(lambda: 1), ClosureLazy)
        assert Lazy.deferred(lambda: 1).policy == InclusionPolicy.DEFERRED
        assert Lazy.closure(lambda: 1).policy == InclusionPolicy.CLOSURE


# =============================================================================
# Resolution
# =============================================================================

class TestLazyResolution:
    """Tests for forcing Lazy values."""

    def test_resolve_is_memoized(self):
        calls = []

        def producer():
            calls.append(1)
            return "Ruben"

        lazy = Lazy.create(producer)
        assert not lazy.resolved

        assert lazy.resolve() == "Ruben"
        assert lazy.resolve() == "Ruben"
        assert lazy.resolved
        assert len(calls) == 1

    def test_resolve_ignores_policy(self):
        assert Lazy.when(lambda: False, lambda: "hidden").resolve() == "hidden"

    def test_producer_error_propagates(self):
        def producer():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            Lazy.create(producer).resolve()

    def test_deferred_prop_calls_through(self):
        lazy = Lazy.deferred(lambda: 42)
        prop = DeferredProp(lazy)

        assert prop.producer() == 42
        assert not lazy.resolved
        assert prop() == 42
        assert lazy.resolved


# =============================================================================
# Attribute access on Data objects
# =============================================================================

class TestLazyAttributeAccess:
    """Lazy properties can be read like regular properties."""

    def test_lazy_property_reads_as_value(self):
        data = LazyData.from_value("Ruben")
        assert data.name == "Ruben"

    def test_nested_lazy_property_reads_as_data(self):
        data = NestedLazyData.from_value("Hello")
        assert isinstance(data.simple, SimpleData)
        assert data.simple.string == "Hello"

    def test_raw_slot_keeps_the_lazy(self):
        data = LazyData.from_value("Ruben")
        assert isinstance(data.lazy("name"), Lazy)
        assert data.lazy("missing") is ABSENT

    def test_repr_does_not_resolve(self):
        calls = []

        def producer():
            calls.append(1)
            return "Ruben"

        text = repr(LazyData(Lazy.create(producer)))

        assert text.startswith("LazyData(name=")
        assert calls == []

    def test_repr_survives_failing_producer(self):
        def producer():
            raise RuntimeError("boom")

        assert "LazyData(" in repr(LazyData(Lazy.create(producer)))

    def test_equality_does_not_resolve(self):
        calls = []

        def producer():
            calls.append(1)
            return "Ruben"

        lazy = Lazy.create(producer)

        assert LazyData(lazy) == LazyData(lazy)
        assert LazyData(lazy) != LazyData(Lazy.create(producer))
        assert SimpleData("A") == SimpleData("A")
        assert SimpleData("A") != LazyData("A")
        assert calls == []


class TestAbsent:
    """Tests for the Absent marker."""

    def test_absent_is_singleton(self):
        assert Absent.create() is ABSENT
        assert Absent() is ABSENT

    def test_absent_is_falsy_and_not_none(self):
        assert not ABSENT
        assert ABSENT is not None
        assert repr(ABSENT) == "ABSENT"
