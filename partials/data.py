# =============================================================================
# partials/data.py - Data Objects
# =============================================================================
# Base class for schema-described aggregates subject to partial
# transformation. Subclasses are declared with partials.dataclass:
#
#   from partials import ABSENT, Absent, Data, Lazy, dataclass
#
#   @dataclass
#   class SongData(Data):
#       title: str
#       artist: str | Lazy = None
#       lyrics: str | Lazy | Absent = ABSENT
#
#   song = SongData("Never gonna give you up", Lazy.create(load_artist))
#   song.to_dict()                    # {"title": ...}
#   song.include("artist").to_dict()  # {"title": ..., "artist": ...}
#
# Reading a property as an attribute (song.artist) always forces the Lazy
# and returns its value, whatever the inclusion policy. repr() and ==
# read the raw slots and never force anything.
#
# partials.dataclass is dataclasses.dataclass with repr=False and eq=False,
# so Data.__repr__ / Data.__eq__ are kept. A plain @dataclasses.dataclass
# subclass works too, but its generated repr and == force every Lazy.
# =============================================================================

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Iterable

from partials.directives import Condition
from partials.lazy import Lazy
from partials.mixins import PartialsMixin
from partials.registry import PartialsConfig, get_config
from partials.schema import DataSchema, get_raw, schema_for
from partials.types import DirectiveKind


def dataclass(cls: type | None = None, /, **kwargs: Any):
    """
    dataclasses.dataclass for Data subclasses.

    Usage:
        @dataclass
        class UserData(Data):
            name: str

        @dataclass(frozen=True)
        class TagData(Data):
            label: str
    """
    kwargs.setdefault("repr", False)
    kwargs.setdefault("eq", False)

    def wrap(klass: type) -> type:
        return dataclasses.dataclass(klass, **kwargs)

    return wrap if cls is None else wrap(cls)


class Data(PartialsMixin):
    """Base class for Data objects. Declare subclasses with partials.dataclass."""

    def __getattribute__(self, name: str) -> Any:
        value = object.__getattribute__(self, name)
        if not name.startswith("_") and isinstance(value, Lazy):
            return value.resolve()
        return value

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={get_raw(self, name)!r}" for name in schema_for(type(self)).names
        )
        return f"{type(self).__name__}({fields})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            get_raw(self, name) == get_raw(other, name)
            for name in schema_for(type(self)).names
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_value(cls, value: Any) -> Data:
        """
        Minimal hydration hook, no casting.

        - an instance of cls is returned as-is
        - a mapping is passed as keyword arguments
        - anything else is passed as the single positional argument
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(**value)
        return cls(value)

    @classmethod
    def collect(cls, items: Iterable[Any]):
        from partials.collection import DataCollection

        return DataCollection(cls, items)

    @classmethod
    def schema(cls) -> DataSchema:
        return schema_for(cls)

    def lazy(self, name: str) -> Any:
        """The raw slot for a property, without forcing Lazy values."""
        return get_raw(self, name)

    # -------------------------------------------------------------------------
    # Class configuration
    # -------------------------------------------------------------------------

    @classmethod
    def set_definitions(
        cls,
        include_definitions: Mapping[str, Condition] | None = None,
        exclude_definitions: Mapping[str, Condition] | None = None,
        only_definitions: Mapping[str, Condition] | None = None,
        except_definitions: Mapping[str, Condition] | None = None,
        config: PartialsConfig | None = None,
    ) -> None:
        get_config(config).set_definitions(
            cls,
            include_definitions=include_definitions,
            exclude_definitions=exclude_definitions,
            only_definitions=only_definitions,
            except_definitions=except_definitions,
        )

    @classmethod
    def set_allowed(
        cls,
        kind: DirectiveKind | str,
        names: Iterable[str] | None,
        config: PartialsConfig | None = None,
    ) -> None:
        get_config(config).set_allowed(cls, kind, names)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_dict(self, *, config: PartialsConfig | None = None, deferred: bool = True) -> dict[str, Any]:
        return self.transform(config=config, deferred=deferred)

    def all(self, *, config: PartialsConfig | None = None) -> dict[str, Any]:
        """Visible properties, resolved but with nested values untransformed."""
        return self.transform(config=config, transform_values=False)
