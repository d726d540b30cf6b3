# =============================================================================
# partials/registry.py - Per-Class Partials Configuration
# =============================================================================
# Holds, per Data class:
#   - conditional default definitions: path -> predicate(instance), one map
#     per directive kind, folded into every transform of that class
#   - request allowlists: which names request-supplied directives of each
#     kind may target (None = unrestricted, empty = none)
#
# Configuration lives on a PartialsConfig object. The transformer resolves
# `default_config` unless one is passed in, so tests can build a fresh
# PartialsConfig instead of mutating shared state.
#
# Usage:
#   config = PartialsConfig()
#   config.set_definitions(
#       ArticleData,
#       include_definitions={"body": lambda article: article.published},
#   )
#   config.set_allowed(ArticleData, "include", ["body", "author"])
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from partials.directives import Condition
from partials.types import DirectiveKind

logger = logging.getLogger(__name__)


@dataclass
class ClassPartials:
    """Partials configuration registered for one Data class."""
    definitions: dict[DirectiveKind, dict[str, Condition]] = field(default_factory=dict)
    # Missing kind = unrestricted
    allowed: dict[DirectiveKind, frozenset[str] | None] = field(default_factory=dict)


class PartialsConfig:
    """
    Registry of per-class conditional defaults and request allowlists.

    Lookups walk the class MRO, so a subclass without its own registration
    uses its parent's.
    """

    def __init__(self):
        self._classes: dict[type, ClassPartials] = {}

    def _lookup(self, data_class: type) -> ClassPartials | None:
        for klass in data_class.__mro__:
            registered = self._classes.get(klass)
            if registered is not None:
                return registered
        return None

    def for_class(self, data_class: type) -> ClassPartials:
        """Get (or create) the registration owned by exactly this class."""
        return self._classes.setdefault(data_class, ClassPartials())

    # -------------------------------------------------------------------------
    # Conditional defaults
    # -------------------------------------------------------------------------

    def set_definitions(
        self,
        data_class: type,
        include_definitions: Mapping[str, Condition] | None = None,
        exclude_definitions: Mapping[str, Condition] | None = None,
        only_definitions: Mapping[str, Condition] | None = None,
        except_definitions: Mapping[str, Condition] | None = None,
    ) -> None:
        """Replace every conditional default registered for data_class."""
        definitions = {
            DirectiveKind.INCLUDE: include_definitions,
            DirectiveKind.EXCLUDE: exclude_definitions,
            DirectiveKind.ONLY: only_definitions,
            DirectiveKind.EXCEPT: except_definitions,
        }
        self.for_class(data_class).definitions = {
            kind: dict(paths) for kind, paths in definitions.items() if paths
        }
        kinds = [kind.value for kind, paths in definitions.items() if paths]
        logger.debug(f"Registered partial definitions for {data_class.__name__}: {kinds}")

    def definitions(self, data_class: type) -> Mapping[DirectiveKind, Mapping[str, Condition]]:
        registered = self._lookup(data_class)
        return registered.definitions if registered else {}

    # -------------------------------------------------------------------------
    # Request allowlists
    # -------------------------------------------------------------------------

    def set_allowed(
        self,
        data_class: type,
        kind: DirectiveKind | str,
        names: Iterable[str] | None,
    ) -> None:
        """
        Restrict which names request directives of `kind` may target.

        Args:
            names: None for unrestricted, an empty iterable to deny all.
                Blank names are ignored, so [""] denies all as well.
        """
        allowed = None if names is None else frozenset(n.strip() for n in names if n and n.strip())
        self.for_class(data_class).allowed[DirectiveKind(kind)] = allowed

    def allowed(self, data_class: type, kind: DirectiveKind | str) -> frozenset[str] | None:
        registered = self._lookup(data_class)
        if registered is None:
            return None
        return registered.allowed.get(DirectiveKind(kind))

    # -------------------------------------------------------------------------
    # Housekeeping
    # -------------------------------------------------------------------------

    def forget(self, data_class: type) -> None:
        self._classes.pop(data_class, None)

    def clear(self) -> None:
        self._classes.clear()


# Process default, used when no config is passed explicitly
default_config = PartialsConfig()


def get_config(config: PartialsConfig | None = None) -> PartialsConfig:
    return config if config is not None else default_config
