"""
Album API - Application Package Initializer
============================================

What: Marks the `album_api` directory as a Python package.
Who:  Used by uvicorn (`album_api.main:app`), pytest, and the `album-api` console script.

Architecture Note:
    The service follows the same thin layered layout throughout:

    ┌─────────────────────────────────────┐
    │      Routes (routing + responses)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      AlbumStore (data access)       │  ← One SQL statement per call
    ├─────────────────────────────────────┤
    │    Models & Schemas (Album data)    │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (engine + sessions)    │  ← Async SQLAlchemy
    └─────────────────────────────────────┘

    Routes never touch SQLAlchemy directly; they receive an AlbumStore through
    FastAPI's dependency injection and translate its results into HTTP.
"""

__version__ = "1.0.0"
