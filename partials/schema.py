# =============================================================================
# partials/schema.py - Data Property Schema
# =============================================================================
# Every Data class gets an ordered, explicit property schema, built once from
# its dataclass fields and cached. The schema is the single source of truth
# for property names, their order and links to nested Data types.
#
# Nested types are declared, not inferred:
#
#   @dataclass
#   class AlbumData(Data):
#       title: str
#       artist: ArtistData = data_property(data_class=ArtistData)
#       songs: list[SongData] = data_property(collection_of=SongData)
# =============================================================================

from __future__ import annotations

import dataclasses
from dataclasses import MISSING, dataclass
from functools import lru_cache
from typing import Any

from partials.exceptions import SchemaError
from partials.types import ABSENT

DATA_CLASS_KEY = "partials_data_class"
COLLECTION_OF_KEY = "partials_collection_of"


@dataclass(frozen=True)
class PropertyDef:
    """One declared property of a Data class."""
    name: str
    data_class: type | None = None
    collection_of: type | None = None

    @property
    def nested_class(self) -> type | None:
        """The Data type directives scoped into this property apply to."""
        return self.collection_of or self.data_class


@dataclass(frozen=True)
class DataSchema:
    data_class: type
    properties: tuple[PropertyDef, ...]

    @property
    def names(self) -> list[str]:
        return [prop.name for prop in self.properties]

    def get(self, name: str) -> PropertyDef | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@lru_cache(maxsize=None)
def schema_for(data_class: type) -> DataSchema:
    """Build (once) the property schema of a Data class."""
    if not dataclasses.is_dataclass(data_class):
        raise SchemaError(data_class, "not a dataclass")

    properties = tuple(
        PropertyDef(
            name=f.name,
            data_class=f.metadata.get(DATA_CLASS_KEY),
            collection_of=f.metadata.get(COLLECTION_OF_KEY),
        )
        for f in dataclasses.fields(data_class)
        if not f.name.startswith("_")
    )
    return DataSchema(data_class=data_class, properties=properties)


def data_property(
    *,
    data_class: type | None = None,
    collection_of: type | None = None,
    default: Any = MISSING,
    default_factory: Any = MISSING,
    **kwargs: Any,
) -> Any:
    """
    dataclasses.field() that records nested Data type metadata.

    Args:
        data_class: Data type held by the property
        collection_of: Data type of the items of a collection property
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if data_class is not None:
        metadata[DATA_CLASS_KEY] = data_class
    if collection_of is not None:
        metadata[COLLECTION_OF_KEY] = collection_of
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata=metadata,
        **kwargs,
    )


def get_raw(instance: Any, name: str) -> Any:
    """Read a property slot without forcing Lazy values."""
    try:
        return object.__getattribute__(instance, name)
    except AttributeError:
        return ABSENT
