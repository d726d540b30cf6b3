# =============================================================================
# partials/collection.py - Data Collections
# =============================================================================
# Homogeneous sequences of Data objects. Directives set on a collection (or
# scoped into a collection property) apply uniformly to every item:
#
#   SongData.collect(rows).include("artist").to_list()
#   # [{"title": ..., "artist": ...}, {"title": ..., "artist": ...}]
#
# PaginatedDataCollection wraps one page of items plus page metadata. The
# metadata is never subject to partial directives.
# =============================================================================

from __future__ import annotations

import copy
import math
from typing import Any, Iterable, Iterator

from partials.mixins import PartialsMixin
from partials.registry import PartialsConfig


class DataCollection(PartialsMixin):
    """
    Ordered collection of one Data class.

    Items that are not yet instances of data_class are hydrated through
    data_class.from_value().
    """

    def __init__(self, data_class: type, items: Iterable[Any] = ()):
        self.data_class = data_class
        self.items = [data_class.from_value(item) for item in items]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __getitem__(self, index):
        """
        Item access that carries the collection's directives along.

        collection.only("name")[0].to_dict() only holds "name".
        """
        if isinstance(index, slice):
            sliced = copy.copy(self)
            sliced.items = self.items[index]
            return sliced
        item = copy.copy(self.items[index])
        return item.with_partials(self.resolve_partials())

    def to_list(self, *, config: PartialsConfig | None = None, deferred: bool = True) -> list[Any]:
        return self.transform(config=config, deferred=deferred)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} of {self.data_class.__name__} ({len(self.items)} items)>"


class PaginatedDataCollection(DataCollection):
    """One page of a larger result set."""

    def __init__(
        self,
        data_class: type,
        items: Iterable[Any],
        total: int,
        per_page: int = 15,
        current_page: int = 1,
    ):
        super().__init__(data_class, items)
        if per_page < 1:
            raise ValueError("per_page must be at least 1")
        self.total = total
        self.per_page = per_page
        self.current_page = current_page

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    def meta(self) -> dict[str, Any]:
        offset = (self.current_page - 1) * self.per_page
        return {
            "current_page": self.current_page,
            "per_page": self.per_page,
            "total": self.total,
            "last_page": self.last_page,
            "from": offset + 1 if self.items else None,
            "to": offset + len(self.items) if self.items else None,
        }

    def to_dict(self, *, config: PartialsConfig | None = None, deferred: bool = True) -> dict[str, Any]:
        return self.transform(config=config, deferred=deferred)
