# =============================================================================
# app/responses.py - Data Responses
# =============================================================================
# Serializes Data objects and collections to JSON response bodies.
#
# The body is exactly the transformed mapping (the same as to_dict() /
# to_list()), except that deferred and closure lazies are forced, since a
# JSON body cannot carry a callable.
#
# Plain lists, tuples and dicts are transformed too, so Data objects inside
# them never reach the JSON encoder with their lazies unresolved. Only
# scalars pass through untouched.
#
# Usage:
#   @router.get("/songs")
#   async def list_songs(partials: RequestPartials = Depends()):
#       return DataResponse(SongData.collect(load_songs()), partials)
#
#   # or, from a plain starlette Request
#   return to_response(song, request)
# =============================================================================

from typing import Any, Mapping

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.config import settings
from app.request_binding import RequestPartials
from partials.mixins import PartialsMixin
from partials.registry import PartialsConfig
from partials.transformer import Transformer


def transform_for_response(
    content: Any,
    request_partials: RequestPartials | None = None,
    config: PartialsConfig | None = None,
) -> Any:
    """Apply request partials (if enabled) and transform for a JSON body."""
    if not isinstance(content, (PartialsMixin, Mapping, list, tuple)):
        return content

    if request_partials is not None and settings.REQUEST_PARTIALS_ENABLED:
        content = request_partials.apply(content, config)

    transformer = Transformer(
        config=config,
        deferred=False,
        max_depth=settings.MAX_TRANSFORMATION_DEPTH,
        raise_on_max_depth=settings.THROW_WHEN_MAX_DEPTH_REACHED,
    )
    return transformer.transform(content)


class DataResponse(JSONResponse):
    """JSONResponse that transforms Data content with request partials."""

    def __init__(
        self,
        content: Any,
        request_partials: RequestPartials | None = None,
        config: PartialsConfig | None = None,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ):
        # render() runs inside JSONResponse.__init__, set these first
        self.request_partials = request_partials
        self.partials_config = config
        super().__init__(content, status_code=status_code, headers=headers, **kwargs)

    def render(self, content: Any) -> bytes:
        payload = transform_for_response(content, self.request_partials, self.partials_config)
        return super().render(jsonable_encoder(payload))


def to_response(
    content: Any,
    request: Request,
    config: PartialsConfig | None = None,
    status_code: int = 200,
) -> DataResponse:
    """Build a DataResponse using the partials in request's query string."""
    request_partials = RequestPartials.from_query_params(request.query_params)
    return DataResponse(content, request_partials, config=config, status_code=status_code)

