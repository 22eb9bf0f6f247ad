"""
Album API - Album Store (Data Access Collaborator)
===================================================

What:  The only component that talks to the database: list all albums, fetch
       one by id, insert one, delete by id.
How:   Each call opens its own AsyncSession from the injected session factory,
       runs a single statement and commits. SQLAlchemy errors are translated
       into StoreError carrying the driver's message; "no row" on fetch becomes
       NotFoundError.
Who:   Route handlers receive it through the `get_album_store` dependency.
When:  Constructed once per application (lifespan) or per test.

Retries:
    None. Every call reaches the database exactly once; a failure is reported
    to the client as a 500 with the driver's message.
"""

import logging
from typing import List

from sqlalchemy import delete, inspect, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from album_api.database import create_session_factory
from album_api.exceptions import NotFoundError, StoreError
from album_api.models.album import Album
from album_api.schemas.album import AlbumSchema

logger = logging.getLogger(__name__)


def _store_error(exc: Exception, operation: str) -> StoreError:
    """
    Wrap a database exception, keeping the DBAPI message when there is one.

    DBAPIError.orig is the driver exception (asyncpg / sqlite3); its text is
    what the client sees, e.g. 'UNIQUE constraint failed: albums.id'.
    """
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    logger.error("Database error during %s: %s", operation, message)
    return StoreError(
        message=message,
        context={"operation": operation, "error_type": type(exc).__name__},
    )


class AlbumStore:
    """
    Data access for the `albums` table.

    Responsibilities:
        - list_all():      SELECT every row
        - find_by_id():    SELECT one row by primary key
        - insert():        INSERT one row (duplicates fail on the primary key)
        - delete_by_id():  DELETE by primary key, returning rows affected
        - table_exists() / ping(): startup and health probes
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine,
    ):
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "AlbumStore":
        """Builds a store with a fresh session factory bound to `engine`."""
        return cls(create_session_factory(engine), engine)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def list_all(self) -> List[AlbumSchema]:
        """
        Return every album.

        Rows come back in the database's natural order; no ORDER BY is applied.

        Raises:
            StoreError: Query execution failed
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Album))
                albums = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            raise _store_error(e, "list_all") from e

        return [AlbumSchema.model_validate(album) for album in albums]

    async def find_by_id(self, album_id: str) -> AlbumSchema:
        """
        Return the album whose primary key is `album_id`.

        Raises:
            NotFoundError: No such album (→ 404)
            StoreError: Query execution failed (→ 500)
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Album).where(Album.id == album_id)
                )
                album = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise _store_error(e, "find_by_id") from e

        if album is None:
            raise NotFoundError(resource="album", resource_id=album_id)
        return AlbumSchema.model_validate(album)

    async def insert(self, album: AlbumSchema) -> AlbumSchema:
        """
        Insert `album` as a new row and return it.

        The id is taken from the caller; an existing id violates the primary
        key and surfaces as StoreError (no separate conflict status).

        Raises:
            StoreError: Insert or commit failed
        """
        record = Album(
            id=album.id,
            title=album.title,
            artist=album.artist,
            price=album.price,
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(record)
        except (SQLAlchemyError, OSError) as e:
            raise _store_error(e, "insert") from e

        logger.info("Album %s inserted", album.id)
        return AlbumSchema.model_validate(record)

    async def delete_by_id(self, album_id: str) -> int:
        """
        Delete the album with primary key `album_id`.

        Returns:
            Number of rows affected (0 or 1). Mapping 0 to a 404 is the
            caller's decision.

        Raises:
            StoreError: Delete or commit failed
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        delete(Album).where(Album.id == album_id)
                    )
        except (SQLAlchemyError, OSError) as e:
            raise _store_error(e, "delete_by_id") from e

        rows = result.rowcount
        if rows:
            logger.info("Album %s deleted", album_id)
        return rows

    async def table_exists(self) -> bool:
        """
        Check that the `albums` table is present and reachable.

        Connection failures count as "not accessible" and return False.
        """
        try:
            async with self._engine.connect() as conn:
                return await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).has_table(Album.__tablename__)
                )
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Could not inspect albums table: %s", str(e))
            return False

    async def ping(self) -> bool:
        """Lightweight connectivity test (SELECT 1)."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True
