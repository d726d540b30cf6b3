# =============================================================================
# partials/lazy.py - Lazy Values
# =============================================================================
# A Lazy value wraps a zero-argument producer whose result is computed at
# most once. The inclusion policy decides whether the transformer emits the
# property:
#
#   Lazy.create(fn)                      -> emitted only when included
#   Lazy.create(fn).default_included()   -> emitted unless excluded
#   Lazy.when(predicate, fn)             -> emitted iff predicate() is true
#   Lazy.when_loaded(rel, model, fn)     -> emitted iff model has rel loaded
#   Lazy.deferred(fn)                    -> emitted as a DeferredProp
#   Lazy.closure(fn)                     -> emitted as the producer itself
#
# resolve() always forces the producer, whatever the policy.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from partials.types import InclusionPolicy

logger = logging.getLogger(__name__)

Producer = Callable[[], Any]


class RelationLoader(Protocol):
    """Anything that can report whether a named relation has been loaded."""

    def relation_loaded(self, name: str) -> bool:
        ...


class Lazy:
    """
    A deferred, memoized computation with an inclusion policy.

    Forcing is idempotent: the producer runs on the first resolve() and the
    result is cached for every later call. Memoization is not guarded by a
    lock, do not force the same instance from several threads.
    """

    def __init__(
        self,
        producer: Producer,
        policy: InclusionPolicy = InclusionPolicy.OMITTED_BY_DEFAULT,
    ):
        self._producer = producer
        self.policy = policy
        self.resolved = False
        self._result: Any = None

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, producer: Producer) -> Lazy:
        return cls(producer)

    @staticmethod
    def when(condition: Callable[[], bool], producer: Producer) -> ConditionalLazy:
        return ConditionalLazy(condition, producer)

    @staticmethod
    def when_loaded(relation: str, model: RelationLoader, producer: Producer) -> RelationalLazy:
        return RelationalLazy(relation, model, producer)

    @staticmethod
    def deferred(producer: Producer) -> DeferredLazy:
        return DeferredLazy(producer)

    @staticmethod
    def closure(producer: Producer) -> ClosureLazy:
        return ClosureLazy(producer)

    # -------------------------------------------------------------------------
    # Policy
    # -------------------------------------------------------------------------

    def default_included(self, default_included: bool = True) -> Lazy:
        """Switch between omitted-by-default and default-included."""
        self.policy = (
            InclusionPolicy.DEFAULT_INCLUDED
            if default_included
            else InclusionPolicy.OMITTED_BY_DEFAULT
        )
        return self

    @property
    def is_default_included(self) -> bool:
        return self.policy == InclusionPolicy.DEFAULT_INCLUDED

    @property
    def producer(self) -> Producer:
        return self._producer

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self) -> Any:
        """Force the producer on first call, return the memoized result."""
        if not self.resolved:
            self._result = self._producer()
            self.resolved = True
        return self._result

    def __repr__(self) -> str:
        state = "resolved" if self.resolved else "pending"
        return f"<{type(self).__name__} {self.policy.value} {state}>"


class ConditionalLazy(Lazy):
    """
    Lazy value whose predicate alone decides inclusion.

    No include directive can force it and no exclude directive can hide it.
    """

    def __init__(self, condition: Callable[[], bool], producer: Producer):
        super().__init__(producer, InclusionPolicy.CONDITIONAL)
        self._condition = condition

    def should_be_included(self) -> bool:
        return bool(self._condition())

    def default_included(self, default_included: bool = True) -> Lazy:
        return self


class RelationalLazy(ConditionalLazy):
    """Conditional lazy gated on a relation being loaded on a model."""

    def __init__(self, relation: str, model: RelationLoader, producer: Producer):
        super().__init__(lambda: model.relation_loaded(relation), producer)
        self.policy = InclusionPolicy.RELATIONAL
        self.relation = relation
        self.model = model


class DeferredLazy(Lazy):
    """Lazy value handed to a deferred-prop adapter instead of being forced."""

    def __init__(self, producer: Producer):
        super().__init__(producer, InclusionPolicy.DEFERRED)

    def default_included(self, default_included: bool = True) -> Lazy:
        return self


class ClosureLazy(Lazy):
    """Lazy value handed back as a plain callable instead of being forced."""

    def __init__(self, producer: Producer):
        super().__init__(producer, InclusionPolicy.CLOSURE)

    def default_included(self, default_included: bool = True) -> Lazy:
        return self


class DeferredProp:
    """
    Adapter wrapper emitted for DeferredLazy values.

    Carries the same producer so a client-side framework can evaluate
    it on demand. Calling the wrapper forces the underlying Lazy.
    """

    def __init__(self, lazy: Lazy):
        self._lazy = lazy

    @property
    def producer(self) -> Producer:
        return self._lazy.producer

    def __call__(self) -> Any:
        logger.debug("Resolving deferred prop")
        return self._lazy.resolve()

    def __repr__(self) -> str:
        return f"<DeferredProp {self._lazy!r}>"
