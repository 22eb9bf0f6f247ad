"""
Album API - FastAPI Dependencies
=================================

What:  Resolves the AlbumStore for a request.
How:   The store lives on `app.state.album_store`; it is placed there either by
       create_app (injected store) or by the lifespan (store built from
       settings). Handlers declare `store: AlbumStore = Depends(get_album_store)`.
"""

from fastapi import Request

from album_api.exceptions import StoreError
from album_api.services.album_store import AlbumStore


def get_album_store(request: Request) -> AlbumStore:
    """
    FastAPI dependency returning the application's AlbumStore.

    Raises:
        StoreError: No store is attached (the lifespan has not run).
    """
    store = getattr(request.app.state, "album_store", None)
    if store is None:
        raise StoreError(message="database is not initialized")
    return store
