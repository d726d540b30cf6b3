# =============================================================================
# app/request_binding.py - Request Partials
# =============================================================================
# Reads include / exclude / only / except query parameters and applies them
# to a Data object or collection, after filtering every directive against
# the target class's request allowlist.
#
#   GET /songs?include=artist,album.{title,year}&except=lyrics
#
# Values are comma-delimited (commas inside brace groups do not split) and
# dot-nested. Directives naming a disallowed property are dropped silently.
# Directives set in code (data.include(...)) are never filtered.
#
# Usage:
#   @router.get("/songs/{song_id}")
#   async def get_song(song_id: int, partials: RequestPartials = Depends()):
#       return DataResponse(load_song(song_id), partials)
# =============================================================================

import logging
from typing import Any, Mapping

from fastapi import Query

from partials.collection import DataCollection
from partials.directives import DirectiveSet
from partials.mixins import PartialsMixin
from partials.parser import Segment, SegmentKind, Selector, parse_many, split_directives
from partials.registry import PartialsConfig, get_config
from partials.schema import schema_for
from partials.types import DirectiveKind

logger = logging.getLogger(__name__)


def filter_selector(
    data_class: type | None,
    selector: Selector,
    kind: DirectiveKind,
    config: PartialsConfig,
) -> list[Selector]:
    """
    Restrict a selector to what data_class allows for kind.

    Each level is checked against the allowlist of the Data class declared
    for it (see partials.schema.data_property). Levels without a declared
    class are not restricted. A wildcard passes only where the allowlist is
    unrestricted, and the levels below it are not checked.

    Returns:
        The allowed selectors (empty if nothing is left)
    """
    allowed = config.allowed(data_class, kind) if data_class is not None else None
    head = selector.head

    if head.is_wildcard:
        return [selector] if allowed is None else []

    names = tuple(name for name in head.names if allowed is None or name in allowed)
    if not names:
        return []

    tail = selector.tail
    if tail is None:
        return [Selector((head if names == head.names else _segment(names),))]

    # Scope per name so each nested class filters its own level
    selectors = []
    for name in names:
        for nested in filter_selector(_nested_class(data_class, name), tail, kind, config):
            selectors.append(Selector((_segment((name,)),) + nested.segments))
    return selectors


def _segment(names: tuple[str, ...]) -> Segment:
    if len(names) == 1:
        return Segment(SegmentKind.NAME, names)
    return Segment(SegmentKind.GROUP, names)


def _nested_class(data_class: type | None, name: str) -> type | None:
    if data_class is None:
        return None
    prop = schema_for(data_class).get(name)
    return prop.nested_class if prop else None


class RequestPartials:
    """
    FastAPI dependency holding the partials requested by a client.

    Usage:
        async def endpoint(partials: RequestPartials = Depends()):
            ...
    """

    def __init__(
        self,
        include: str | None = Query(
            default=None,
            description="Lazy properties to include (e.g. artist,album.{title,year})",
        ),
        exclude: str | None = Query(
            default=None,
            description="Default-included lazy properties to exclude",
        ),
        only: str | None = Query(
            default=None,
            description="Emit only these properties",
        ),
        except_: str | None = Query(
            default=None,
            alias="except",
            description="Emit everything except these properties",
        ),
    ):
        self.requested: dict[DirectiveKind, list[str]] = {
            DirectiveKind.INCLUDE: split_directives(include),
            DirectiveKind.EXCLUDE: split_directives(exclude),
            DirectiveKind.ONLY: split_directives(only),
            DirectiveKind.EXCEPT: split_directives(except_),
        }

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "RequestPartials":
        """Build from a plain mapping, e.g. starlette's request.query_params."""
        return cls(
            include=params.get("include"),
            exclude=params.get("exclude"),
            only=params.get("only"),
            except_=params.get("except"),
        )

    @property
    def is_empty(self) -> bool:
        return not any(self.requested.values())

    def directives_for(self, data_class: type, config: PartialsConfig | None = None) -> DirectiveSet:
        """
        Parse and filter the requested directives for data_class.

        Raises:
            ParseError: if a requested expression is malformed
        """
        config = get_config(config)
        directives = DirectiveSet()

        for kind, expressions in self.requested.items():
            for selector in parse_many(*expressions):
                allowed = filter_selector(data_class, selector, kind, config)
                if not allowed:
                    logger.debug(f"Dropped request {kind.value} '{selector}' for {data_class.__name__}")
                    continue
                directives.add_selectors(kind, allowed)

        return directives

    def apply(self, target: Any, config: PartialsConfig | None = None) -> Any:
        """Return a copy of target carrying the allowed request directives."""
        if self.is_empty:
            return target

        if isinstance(target, (list, tuple)):
            return [self.apply(item, config) for item in target]
        if not isinstance(target, PartialsMixin):
            return target

        data_class = target.data_class if isinstance(target, DataCollection) else type(target)
        return target.clone().with_partials(self.directives_for(data_class, config))
