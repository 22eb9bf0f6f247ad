"""
Album API - Album SQLAlchemy Model
===================================

What:  ORM model representing the `albums` table.
Who:   Used by AlbumStore for its four statements and by tests to create the
       table with `Base.metadata.create_all`.

Table Design:
    - id:     caller-supplied string primary key; uniqueness is enforced by the
              primary-key constraint only (duplicate inserts fail in the database)
    - title, artist: required strings
    - price:  double precision; the API exposes it as a JSON number

The table itself is provisioned outside this service; the application only
checks at startup that it exists.
"""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from album_api.database import Base


class Album(Base):
    """
    A single album row.

    Lifecycle:
        1. Inserted by POST /albums with a client-chosen id
        2. Read by GET /albums and GET /albums/{id}
        3. Removed by DELETE /albums/{id}; there is no update path
    """

    __tablename__ = "albums"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    artist: Mapped[str] = mapped_column(String, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Album(id='{self.id}', title='{self.title}', artist='{self.artist}')>"
