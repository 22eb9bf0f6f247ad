"""
Album API - Album Route Handlers
=================================

What:  The routing table for the album resource and its four operations.
How:   Each (method, path) pair maps to one handler. Handlers delegate to the
       AlbumStore and shape the result with the response helpers; errors are
       raised as AlbumAPIError subclasses and rendered by the global handlers.

Routing Table:
    GET     /albums          → list_albums       200 [Album]
    POST    /albums          → create_album      201 Album
    *       /albums          → 405
    GET     /albums/{id}     → get_album         200 Album | 404
    DELETE  /albums/{id}     → delete_album      204       | 404
    *       /albums/{id}     → 405

    {id} is everything after "/albums/" (slashes included). An empty id is
    rejected with 400 before the method is considered, for every method in
    HTTP_METHODS. Non-standard verbs get the framework's plain 405.

    The POST body is decoded as JSON whatever the Content-Type header says.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import ValidationError

from album_api.dependencies import get_album_store
from album_api.exceptions import ClientInputError, MethodNotAllowedError, NotFoundError
from album_api.responses import empty_response, json_response
from album_api.schemas.album import AlbumSchema, ErrorResponse
from album_api.services.album_store import AlbumStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Albums"])

HTTP_METHODS = [
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT",
]
COLLECTION_METHODS = ["GET", "POST"]
ITEM_METHODS = ["GET", "DELETE"]


def _require_album_id(album_id: str) -> str:
    if not album_id:
        raise ClientInputError(message="Invalid album ID")
    return album_id


# ── /albums ───────────────────────────────────────────────────────────────

@router.get(
    "/albums",
    response_model=List[AlbumSchema],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all albums",
)
async def list_albums(store: AlbumStore = Depends(get_album_store)) -> Response:
    """Returns every stored album as a JSON array (empty when there are none)."""
    albums = await store.list_all()
    return json_response(200, albums)


@router.post(
    "/albums",
    status_code=201,
    response_model=AlbumSchema,
    responses={
        400: {"description": "Invalid request body", "model": ErrorResponse},
        500: {"description": "Database error (including duplicate id)", "model": ErrorResponse},
    },
    summary="Create an album",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": AlbumSchema.model_json_schema()}},
        }
    },
)
async def create_album(
    request: Request,
    store: AlbumStore = Depends(get_album_store),
) -> Response:
    """
    Insert a new album with a caller-chosen id.

    The raw body is decoded as JSON; NaN and Infinity prices are rejected
    along with malformed input. The body is echoed back on success.
    A duplicate id is not checked here; the primary key rejects it and the
    store reports a 500.
    """
    body = await request.body()
    try:
        album = AlbumSchema.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Invalid request body on %s: %s", request.url.path, e.errors(include_url=False))
        raise ClientInputError(message="Invalid request body") from e

    created = await store.insert(album)
    return json_response(201, created)


@router.api_route(
    "/albums",
    methods=[m for m in HTTP_METHODS if m not in COLLECTION_METHODS],
    include_in_schema=False,
)
async def albums_method_not_allowed() -> Response:
    raise MethodNotAllowedError(allowed=COLLECTION_METHODS)


# ── /albums/{id} ──────────────────────────────────────────────────────────

@router.get(
    "/albums/{album_id:path}",
    response_model=AlbumSchema,
    responses={
        400: {"description": "Empty album id", "model": ErrorResponse},
        404: {"description": "Album not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Get a single album by id",
)
async def get_album(
    album_id: str,
    store: AlbumStore = Depends(get_album_store),
) -> Response:
    album = await store.find_by_id(_require_album_id(album_id))
    return json_response(200, album)


@router.delete(
    "/albums/{album_id:path}",
    status_code=204,
    responses={
        400: {"description": "Empty album id", "model": ErrorResponse},
        404: {"description": "Album not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Delete an album by id",
)
async def delete_album(
    album_id: str,
    store: AlbumStore = Depends(get_album_store),
) -> Response:
    """Deletes the album; zero affected rows means it never existed (404)."""
    rows = await store.delete_by_id(_require_album_id(album_id))
    if rows == 0:
        raise NotFoundError(resource="album", resource_id=album_id)
    return empty_response(204)


@router.api_route(
    "/albums/{album_id:path}",
    methods=[m for m in HTTP_METHODS if m not in ITEM_METHODS],
    include_in_schema=False,
)
async def album_method_not_allowed(album_id: str) -> Response:
    _require_album_id(album_id)
    raise MethodNotAllowedError(allowed=ITEM_METHODS)
