# =============================================================================
# partials/transformer.py - Transformation Engine
# =============================================================================
# Walks a Data object's declared properties and produces the partial,
# client-facing mapping.
#
# Per property, in declaration order:
#   1. Absent values are skipped
#   2. DirectiveSet.is_property_visible() decides inclusion
#   3. Lazy values are forced (or handed to the deferred adapter)
#   4. Nested Data / collections / mappings recurse with scope_into(name)
#
# Plain dict keys follow the same rules. Lazy items of plain lists have no
# name to select, so they are forced whenever the list is emitted.
#
# Class-level conditional defaults are folded in for every Data object
# encountered, evaluated against that object.
#
# Usage:
#   transformer = Transformer()
#   payload = transformer.transform(album, DirectiveSet().add_include("songs.name"))
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from partials.collection import DataCollection, PaginatedDataCollection
from partials.data import Data
from partials.directives import DirectiveSet
from partials.exceptions import MaxDepthExceededError
from partials.lazy import ConditionalLazy, DeferredProp, Lazy
from partials.registry import PartialsConfig, get_config
from partials.schema import get_raw, schema_for
from partials.types import InclusionPolicy, is_absent

logger = logging.getLogger(__name__)


class Transformer:
    """
    Deterministic engine turning Data objects into partial mappings.

    Transforms are synchronous and single-threaded. Exceptions raised by
    Lazy producers or conditions propagate out of transform() unchanged.
    """

    def __init__(
        self,
        config: PartialsConfig | None = None,
        deferred: bool = True,
        transform_values: bool = True,
        max_depth: int | None = None,
        raise_on_max_depth: bool = False,
    ):
        """
        Initialize the transformer.

        Args:
            config: Per-class partials configuration (default_config if None)
            deferred: If True, Lazy.deferred() values become DeferredProp
                      wrappers and Lazy.closure() values become callables.
                      If False, both are forced like regular values.
            transform_values: If False, visible values are resolved but
                      nested Data objects are returned as-is.
            max_depth: Maximum Data nesting depth (None = unlimited)
            raise_on_max_depth: Raise MaxDepthExceededError instead of
                      emitting an empty mapping past max_depth.
        """
        self.config = get_config(config)
        self.deferred = deferred
        self.transform_values = transform_values
        self.max_depth = max_depth
        self.raise_on_max_depth = raise_on_max_depth

    def transform(self, target: Any, directives: DirectiveSet | None = None) -> Any:
        """
        Transform a Data object, collection or plain value.

        Args:
            target: Data, DataCollection, PaginatedDataCollection or list
            directives: Extra directives on top of the target's own partials

        Returns:
            dict for Data / paginated collections, list for collections
        """
        directives = directives.copy() if directives is not None else DirectiveSet()
        logger.debug(f"Transforming {type(target).__name__} with {directives!r}")
        return self._transform_value(target, directives, depth=0)

    def transform_each(
        self,
        items: Iterable[Any],
        directives: DirectiveSet,
        depth: int = 0,
    ) -> list[Any]:
        """
        Transform every item, in order, with one shared directive set.

        Items have no name to select, so a Lazy item is forced whenever its
        sequence is emitted. Absent items and conditional lazies whose
        predicate fails are dropped.
        """
        result = []
        for item in items:
            if isinstance(item, ConditionalLazy) and not item.should_be_included():
                continue
            if isinstance(item, Lazy):
                item = self._force(item, "sequence item")
            if is_absent(item):
                continue
            result.append(self._transform_value(item, directives, depth))
        return result

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _transform_value(self, value: Any, directives: DirectiveSet, depth: int) -> Any:
        if isinstance(value, Data):
            return self._transform_data(value, directives, depth)

        if isinstance(value, PaginatedDataCollection):
            scoped = directives.copy().merge(value.resolve_partials())
            return {
                "data": self.transform_each(value.items, scoped, depth),
                "meta": value.meta(),
            }

        if isinstance(value, DataCollection):
            scoped = directives.copy().merge(value.resolve_partials())
            return self.transform_each(value.items, scoped, depth)

        if isinstance(value, Mapping):
            return self._transform_mapping(value, directives, depth)

        if isinstance(value, (list, tuple)):
            return self.transform_each(value, directives, depth)

        # Nothing to scope into: directives for this value are ignored
        return value

    # -------------------------------------------------------------------------
    # Data objects
    # -------------------------------------------------------------------------

    def _transform_data(self, instance: Data, directives: DirectiveSet, depth: int) -> dict[str, Any]:
        if self.max_depth is not None and depth > self.max_depth:
            if self.raise_on_max_depth:
                raise MaxDepthExceededError(self.max_depth)
            logger.debug(f"Max depth {self.max_depth} reached at {type(instance).__name__}")
            return {}

        directives = directives.copy()
        directives.merge_definitions(self.config.definitions(type(instance)), instance)
        directives.merge(instance.resolve_partials())

        result: dict[str, Any] = {}

        for prop in schema_for(type(instance)).properties:
            name = prop.name
            value = get_raw(instance, name)

            if is_absent(value):
                continue

            if not directives.is_property_visible(name, value):
                continue

            if isinstance(value, Lazy):
                value = self._force(value, f"property {type(instance).__name__}.{name}")

            # A lazy may resolve to Absent ("value not provided")
            if is_absent(value):
                continue

            if self.transform_values:
                value = self._transform_value(value, directives.scope_into(name), depth + 1)

            result[name] = value

        return result

    def _force(self, value: Lazy, label: str) -> Any:
        """The deferred-adapter wrapper for value, else its forced result."""
        adapted = self._adapt_deferred(value)
        if adapted is not None:
            return adapted
        if not value.resolved:
            logger.debug(f"Resolving lazy {label}")
        return value.resolve()

    def _adapt_deferred(self, value: Lazy) -> Any:
        """Deferred-value adapter: wrapper object or callable, else None."""
        if not self.deferred:
            return None
        if value.policy == InclusionPolicy.DEFERRED:
            return DeferredProp(value)
        if value.policy == InclusionPolicy.CLOSURE:
            return value.producer
        return None

    # -------------------------------------------------------------------------
    # Plain mappings
    # -------------------------------------------------------------------------

    def _transform_mapping(
        self,
        value: Mapping[Any, Any],
        directives: DirectiveSet,
        depth: int,
    ) -> dict[Any, Any]:
        """
        Keys follow the same visibility rules as Data properties.

        Only / Except apply to every key. Include / Exclude only matter for
        keys holding Lazy values.
        """
        result = {}
        for key, item in value.items():
            name = str(key)
            if is_absent(item) or not directives.is_property_visible(name, item):
                continue
            if isinstance(item, Lazy):
                item = self._force(item, f"mapping key {name!r}")
                if is_absent(item):
                    continue
            result[key] = self._transform_value(item, directives.scope_into(name), depth)
        return result
