# =============================================================================
# partials/directives.py - Partial Directive Set
# =============================================================================
# Accumulates include / exclude / only / except selectors for one transform
# and answers "is this property visible at this scope?".
#
# Each kind is stored as a SelectionTree:
#
#   include("songs.name", "songs.{artist,year}", "author")
#
#   root
#   ├── songs
#   │   ├── name    (terminal)
#   │   ├── artist  (terminal)
#   │   └── year    (terminal)
#   └── author      (terminal)
#
# Precedence at one scope:
#   1. Only (non-empty)   -> property must be selected by Only, Except ignored
#   2. Except             -> property hidden when it is a terminal member
#   3. Conditional lazies -> their predicate decides
#   4. Exclude            -> hides lazies selected as a terminal member
#   5. Include            -> reveals omitted-by-default lazies
#   6. everything else is visible
# =============================================================================

from __future__ import annotations

from typing import Any, Callable, Iterator, Mapping

from partials.lazy import ConditionalLazy, Lazy
from partials.parser import Selector, parse_many
from partials.types import DirectiveKind, InclusionPolicy

# A condition is either a plain bool or a predicate over the Data instance
Condition = bool | Callable[[Any], bool]


class SelectionTree:
    """Tree of selected property names for one directive kind."""

    def __init__(self):
        self.children: dict[str, SelectionTree] = {}
        self.wildcard: SelectionTree | None = None
        # True when a selector ended at this node
        self.terminal = False

    @property
    def is_empty(self) -> bool:
        return not self.children and self.wildcard is None

    def add(self, selector: Selector) -> None:
        head = selector.head
        if head.is_wildcard:
            if self.wildcard is None:
                self.wildcard = SelectionTree()
            targets = [self.wildcard]
        else:
            targets = [self.children.setdefault(name, SelectionTree()) for name in head.names]

        tail = selector.tail
        for target in targets:
            if tail is None:
                target.terminal = True
            else:
                target.add(tail)

    def merge(self, other: SelectionTree) -> None:
        self.terminal = self.terminal or other.terminal
        for name, child in other.children.items():
            self.children.setdefault(name, SelectionTree()).merge(child)
        if other.wildcard is not None:
            if self.wildcard is None:
                self.wildcard = SelectionTree()
            self.wildcard.merge(other.wildcard)

    def copy(self) -> SelectionTree:
        tree = SelectionTree()
        tree.merge(self)
        return tree

    def contains(self, name: str) -> bool:
        """Is name selected at this level (explicitly or by wildcard)?"""
        return name in self.children or self.wildcard is not None

    def is_terminal_for(self, name: str) -> bool:
        """Is name selected here with nothing scoped below it?"""
        child = self.children.get(name)
        if child is not None and child.terminal:
            return True
        return self.wildcard is not None and self.wildcard.terminal

    def scope(self, name: str) -> SelectionTree:
        """The selections that apply inside property `name`."""
        tree = SelectionTree()
        if name in self.children:
            tree.merge(self.children[name])
        if self.wildcard is not None:
            tree.merge(self.wildcard)
        tree.terminal = False
        return tree

    def paths(self) -> Iterator[str]:
        items = list(self.children.items())
        if self.wildcard is not None:
            items.append(("*", self.wildcard))
        for name, child in items:
            if child.terminal or child.is_empty:
                yield name
            for sub in child.paths():
                yield f"{name}.{sub}"

    def __repr__(self) -> str:
        return f"SelectionTree({list(self.paths())})"


class DirectiveSet:
    """
    The four selector trees used for a single transform.

    Usage:
        directives = DirectiveSet().add_include("songs.{name,artist}")
        directives.add_except("year")

        inner = directives.scope_into("songs")
        inner.is_property_visible("name", lazy_name)  # True
    """

    def __init__(self):
        self.trees: dict[DirectiveKind, SelectionTree] = {
            kind: SelectionTree() for kind in DirectiveKind
        }

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def include(self) -> SelectionTree:
        return self.trees[DirectiveKind.INCLUDE]

    @property
    def exclude(self) -> SelectionTree:
        return self.trees[DirectiveKind.EXCLUDE]

    @property
    def only(self) -> SelectionTree:
        return self.trees[DirectiveKind.ONLY]

    @property
    def except_(self) -> SelectionTree:
        return self.trees[DirectiveKind.EXCEPT]

    @property
    def is_empty(self) -> bool:
        return all(tree.is_empty for tree in self.trees.values())

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def add(self, kind: DirectiveKind | str, *paths: str) -> DirectiveSet:
        """Parse and add paths. A ParseError leaves the set untouched."""
        selectors = parse_many(*paths)
        return self.add_selectors(kind, selectors)

    def add_selectors(self, kind: DirectiveKind | str, selectors: list[Selector]) -> DirectiveSet:
        tree = self.trees[DirectiveKind(kind)]
        for selector in selectors:
            tree.add(selector)
        return self

    def add_include(self, *paths: str) -> DirectiveSet:
        return self.add(DirectiveKind.INCLUDE, *paths)

    def add_exclude(self, *paths: str) -> DirectiveSet:
        return self.add(DirectiveKind.EXCLUDE, *paths)

    def add_only(self, *paths: str) -> DirectiveSet:
        return self.add(DirectiveKind.ONLY, *paths)

    def add_except(self, *paths: str) -> DirectiveSet:
        return self.add(DirectiveKind.EXCEPT, *paths)

    def merge_conditional(
        self,
        kind: DirectiveKind | str,
        path: str,
        condition: Condition,
        instance: Any,
    ) -> bool:
        """
        Add path under kind when condition holds for instance.

        Returns:
            Whether the path was added
        """
        result = condition(instance) if callable(condition) else condition
        if result:
            self.add(kind, path)
        return bool(result)

    def merge_definitions(
        self,
        definitions: Mapping[DirectiveKind, Mapping[str, Condition]],
        instance: Any,
    ) -> DirectiveSet:
        """Fold a class's conditional default definitions for instance."""
        for kind, paths in definitions.items():
            for path, condition in paths.items():
                self.merge_conditional(kind, path, condition, instance)
        return self

    def merge(self, other: DirectiveSet) -> DirectiveSet:
        for kind, tree in other.trees.items():
            self.trees[kind].merge(tree)
        return self

    def reset(self) -> None:
        for kind in DirectiveKind:
            self.trees[kind] = SelectionTree()

    def copy(self) -> DirectiveSet:
        return DirectiveSet().merge(self)

    # -------------------------------------------------------------------------
    # Scoping & visibility
    # -------------------------------------------------------------------------

    def scope_into(self, name: str) -> DirectiveSet:
        """Directive set for the value held by property `name`."""
        scoped = DirectiveSet()
        for kind, tree in self.trees.items():
            scoped.trees[kind] = tree.scope(name)
        return scoped

    def is_hidden(self, name: str) -> bool:
        """Apply Only / Except, which work on any kind of property."""
        if not self.only.is_empty:
            return not self.only.contains(name)
        return self.except_.is_terminal_for(name)

    def is_property_visible(self, name: str, value: Any) -> bool:
        if self.is_hidden(name):
            return False

        if not isinstance(value, Lazy):
            return True

        if isinstance(value, ConditionalLazy):
            return value.should_be_included()

        if value.policy in (InclusionPolicy.DEFERRED, InclusionPolicy.CLOSURE):
            return True

        if self.exclude.is_terminal_for(name):
            return False

        if value.policy == InclusionPolicy.DEFAULT_INCLUDED:
            return True

        return self.include.contains(name)

    def to_dict(self) -> dict[str, list[str]]:
        return {kind.value: list(tree.paths()) for kind, tree in self.trees.items()}

    def __repr__(self) -> str:
        parts = [f"{kind}={paths}" for kind, paths in self.to_dict().items() if paths]
        return f"DirectiveSet({', '.join(parts)})"
