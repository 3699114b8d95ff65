"""SQLAlchemy ORM models.

Movies link to actors and genres through the ``movie_actors`` and
``movie_genres`` join tables and to an optional director through
``movies.director_id``. Deleting an actor or genre drops its join rows;
deleting a director leaves its movies in place with ``director_id`` cleared.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditMixin:
    """Creation/modification timestamps and the soft-delete flag.

    ``created_at`` is filled by the column default when the row is inserted;
    services never assign it. ``is_deleted`` is not consulted by any query.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    modified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        onupdate=utcnow,
        nullable=True,
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


movie_actors = Table(
    "movie_actors",
    Base.metadata,
    Column("movie_id", ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("actor_id", ForeignKey("actors.id", ondelete="CASCADE"), primary_key=True),
)

movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Movie(AuditMixin, Base):
    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), index=True)
    release_year: Mapped[int] = mapped_column(Integer)
    plot: Mapped[str] = mapped_column(Text, default="")
    runtime_minutes: Mapped[int] = mapped_column(Integer)
    poster_url: Mapped[str] = mapped_column(String(500), default="")
    director_id: Mapped[int | None] = mapped_column(
        ForeignKey("directors.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    director: Mapped[Director | None] = relationship(back_populates="movies")
    genres: Mapped[list[Genre]] = relationship(
        secondary=movie_genres,
        back_populates="movies",
        order_by="Genre.id",
    )
    actors: Mapped[list[Actor]] = relationship(
        secondary=movie_actors,
        back_populates="movies",
        order_by="Actor.id",
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Movie(id={self.id}, title={self.title!r}, release_year={self.release_year})"


class PersonMixin:
    name: Mapped[str] = mapped_column(String(100), index=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    bio: Mapped[str] = mapped_column(Text, default="")


class Actor(PersonMixin, AuditMixin, Base):
    __tablename__ = "actors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movies: Mapped[list[Movie]] = relationship(
        secondary=movie_actors,
        back_populates="actors",
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Actor(id={self.id}, name={self.name!r})"


class Director(PersonMixin, AuditMixin, Base):
    __tablename__ = "directors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movies: Mapped[list[Movie]] = relationship(back_populates="director")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Director(id={self.id}, name={self.name!r})"


class Genre(AuditMixin, Base):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    description: Mapped[str] = mapped_column(String(500), default="")
    movies: Mapped[list[Movie]] = relationship(
        secondary=movie_genres,
        back_populates="genres",
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Genre(id={self.id}, name={self.name!r})"


class User(AuditMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[bytes] = mapped_column(LargeBinary)
    password_salt: Mapped[bytes] = mapped_column(LargeBinary)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"User(id={self.id}, username={self.username!r})"
