# =============================================================================
# partials/mixins.py - Fluent Partials API
# =============================================================================
# Shared by Data objects and Data collections:
#
#   data.include("songs.name").except_("year").to_dict()
#   data.include_when("email", lambda user: user.is_admin)
#   data.include_permanently("id")
#
# Directives persist on the object between transforms. reset_partials()
# clears everything except the *_permanently directives.
# =============================================================================

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from partials.directives import Condition, DirectiveSet
from partials.parser import parse
from partials.registry import PartialsConfig
from partials.types import DirectiveKind

_STATE_ATTR = "_partials_state"


@dataclass
class PartialsState:
    """Directives attached to one Data object or collection."""
    directives: DirectiveSet = field(default_factory=DirectiveSet)
    permanent: DirectiveSet = field(default_factory=DirectiveSet)
    conditions: list[tuple[DirectiveKind, str, Condition]] = field(default_factory=list)

    def copy(self) -> PartialsState:
        return PartialsState(
            directives=self.directives.copy(),
            permanent=self.permanent.copy(),
            conditions=list(self.conditions),
        )


class PartialsMixin:
    """Fluent include / exclude / only / except API."""

    @property
    def partials_state(self) -> PartialsState:
        try:
            return object.__getattribute__(self, _STATE_ATTR)
        except AttributeError:
            state = PartialsState()
            object.__setattr__(self, _STATE_ATTR, state)
            return state

    # -------------------------------------------------------------------------
    # Ad-hoc directives
    # -------------------------------------------------------------------------

    def include(self, *paths: str):
        self.partials_state.directives.add_include(*paths)
        return self

    def exclude(self, *paths: str):
        self.partials_state.directives.add_exclude(*paths)
        return self

    def only(self, *paths: str):
        self.partials_state.directives.add_only(*paths)
        return self

    def except_(self, *paths: str):
        self.partials_state.directives.add_except(*paths)
        return self

    # -------------------------------------------------------------------------
    # Conditional directives
    # -------------------------------------------------------------------------

    def _when(self, kind: DirectiveKind, path: str, condition: Condition):
        # Fail on a malformed path now rather than at transform time
        parse(path)
        self.partials_state.conditions.append((kind, path, condition))
        return self

    def include_when(self, path: str, condition: Condition):
        """Include path when condition (a bool, or predicate over self) holds."""
        return self._when(DirectiveKind.INCLUDE, path, condition)

    def exclude_when(self, path: str, condition: Condition):
        return self._when(DirectiveKind.EXCLUDE, path, condition)

    def only_when(self, path: str, condition: Condition):
        return self._when(DirectiveKind.ONLY, path, condition)

    def except_when(self, path: str, condition: Condition):
        return self._when(DirectiveKind.EXCEPT, path, condition)

    # -------------------------------------------------------------------------
    # Permanent directives (survive reset_partials)
    # -------------------------------------------------------------------------

    def include_permanently(self, *paths: str):
        self.partials_state.permanent.add_include(*paths)
        return self

    def exclude_permanently(self, *paths: str):
        self.partials_state.permanent.add_exclude(*paths)
        return self

    def only_permanently(self, *paths: str):
        self.partials_state.permanent.add_only(*paths)
        return self

    def except_permanently(self, *paths: str):
        self.partials_state.permanent.add_except(*paths)
        return self

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def with_partials(self, directives: DirectiveSet):
        """Merge a whole directive set into this object's ad-hoc directives."""
        self.partials_state.directives.merge(directives)
        return self

    def reset_partials(self):
        """Drop ad-hoc and conditional directives, keep permanent ones."""
        state = self.partials_state
        state.directives.reset()
        state.conditions.clear()
        return self

    def resolve_partials(self) -> DirectiveSet:
        """Everything attached to this object, conditions evaluated against it."""
        state = self.partials_state
        resolved = state.directives.copy().merge(state.permanent)
        for kind, path, condition in state.conditions:
            resolved.merge_conditional(kind, path, condition, self)
        return resolved

    def __copy__(self):
        cls = type(self)
        clone = cls.__new__(cls)
        for name, value in object.__getattribute__(self, "__dict__").items():
            if name != _STATE_ATTR:
                object.__setattr__(clone, name, value)
        object.__setattr__(clone, _STATE_ATTR, self.partials_state.copy())
        return clone

    def clone(self):
        return copy.copy(self)

    # -------------------------------------------------------------------------
    # Transformation
    # -------------------------------------------------------------------------

    def transform(
        self,
        directives: DirectiveSet | None = None,
        *,
        config: PartialsConfig | None = None,
        deferred: bool = True,
        transform_values: bool = True,
        max_depth: int | None = None,
        raise_on_max_depth: bool = False,
    ) -> Any:
        from partials.transformer import Transformer

        transformer = Transformer(
            config=config,
            deferred=deferred,
            transform_values=transform_values,
            max_depth=max_depth,
            raise_on_max_depth=raise_on_max_depth,
        )
        return transformer.transform(self, directives)
