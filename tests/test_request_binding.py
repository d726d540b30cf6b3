# =============================================================================
# tests/test_request_binding.py - Request Partials Tests
# =============================================================================
# Tests for allowlist filtering of request-supplied directives.
# =============================================================================

import pytest

from app.request_binding import RequestPartials, filter_selector
from partials import Data, DirectiveKind, Lazy, ParseError, data_property, dataclass, parse
from tests.fakes import LazyData, MultiLazyData


@dataclass
class ShelfData(Data):
    title: str
    book: LazyData | Lazy = data_property(data_class=LazyData)
    extra: dict | None = None


def filtered(data_class, expression, config, kind=DirectiveKind.INCLUDE):
    return [str(s) for s in filter_selector(data_class, parse(expression), kind, config)]


# =============================================================================
# filter_selector
# =============================================================================

class TestFilterSelector:
    """Tests for filter_selector()."""

    def test_unrestricted_passes(self, config):
        assert filtered(ShelfData, "book.name", config) == ["book.name"]

    def test_disallowed_name_dropped(self, config):
        config.set_allowed(ShelfData, "include", ["title"])
        assert filtered(ShelfData, "book", config) == []

    def test_group_is_narrowed(self, config):
        config.set_allowed(MultiLazyData, "include", ["name", "artist"])
        assert filtered(MultiLazyData, "{name,year,artist}", config) == ["{name,artist}"]

    def test_nested_level_uses_nested_class(self, config):
        config.set_allowed(ShelfData, "include", ["book"])
        config.set_allowed(LazyData, "include", [])

        assert filtered(ShelfData, "book", config) == ["book"]
        assert filtered(ShelfData, "book.name", config) == []

        config.set_allowed(LazyData, "include", ["name"])
        assert filtered(ShelfData, "book.name", config) == ["book.name"]

    def test_wildcard_needs_unrestricted(self, config):
        assert filtered(ShelfData, "*", config) == ["*"]

        config.set_allowed(ShelfData, "include", ["book"])
        assert filtered(ShelfData, "*", config) == []

    def test_undeclared_nested_level_is_unrestricted(self, config):
        config.set_allowed(ShelfData, "only", ["extra"])
        assert filtered(ShelfData, "extra.anything", config, DirectiveKind.ONLY) == ["extra.anything"]

    def test_kinds_are_independent(self, config):
        config.set_allowed(ShelfData, "include", [])
        assert filtered(ShelfData, "title", config, DirectiveKind.EXCEPT) == ["title"]


# =============================================================================
# RequestPartials
# =============================================================================

class TestRequestPartials:
    """Tests for RequestPartials outside of a request."""

    def test_from_query_params(self):
        partials = RequestPartials.from_query_params({
            "include": "book,book.{name}",
            "except": "title",
        })

        assert partials.requested[DirectiveKind.INCLUDE] == ["book", "book.{name}"]
        assert partials.requested[DirectiveKind.EXCEPT] == ["title"]
        assert partials.requested[DirectiveKind.ONLY] == []
        assert not partials.is_empty

    def test_empty(self):
        assert RequestPartials.from_query_params({}).is_empty

    def test_directives_for_filters(self, config):
        config.set_allowed(ShelfData, "include", ["book"])
        partials = RequestPartials.from_query_params({"include": "book,title"})

        directives = partials.directives_for(ShelfData, config)
        assert list(directives.include.paths()) == ["book"]

    def test_directives_for_raises_on_bad_expression(self, config):
        partials = RequestPartials.from_query_params({"include": "{book"})

        with pytest.raises(ParseError):
            partials.directives_for(ShelfData, config)

    def test_apply_returns_copy(self, config):
        data = LazyData.from_value("Ruben")
        partials = RequestPartials.from_query_params({"include": "name"})

        applied = partials.apply(data, config)

        assert applied.to_dict(config=config) == {"name": "Ruben"}
        assert data.to_dict(config=config) == {}

    def test_apply_to_plain_list_binds_each_item(self, config):
        items = [LazyData.from_value("Ruben"), "plain"]
        partials = RequestPartials.from_query_params({"include": "name"})

        applied = partials.apply(items, config)

        assert applied[0].to_dict(config=config) == {"name": "Ruben"}
        assert applied[1] == "plain"
        assert items[0].to_dict(config=config) == {}

    def test_apply_to_collection_uses_item_class(self, config):
        config.set_allowed(LazyData, "include", ["name"])
        collection = LazyData.collect(["Ruben", "Freek"])
        partials = RequestPartials.from_query_params({"include": "name"})

        assert partials.apply(collection, config).to_list(config=config) == [
            {"name": "Ruben"},
            {"name": "Freek"},
        ]
