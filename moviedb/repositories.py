"""Data access helpers for catalog entities and users.

Repositories are stateless: each call receives the request's ``Session`` and
every mutating call commits before returning.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from moviedb.models import Actor, AuditMixin, Base, Director, Genre, Movie, User, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)
P = TypeVar("P", Actor, Director)


@dataclass(slots=True)
class PagedList(Generic[T]):
    """One page of an ordered result set plus the totals needed to navigate it."""

    items: list[T]
    total_count: int
    page_number: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


class Repository(Generic[T]):
    """Generic CRUD operations for one entity kind."""

    def __init__(self, model: type[T]) -> None:
        self.model = model

    def _query(self) -> Select:
        return select(self.model).order_by(self.model.id)

    def list_all(self, session: Session) -> list[T]:
        return list(session.execute(self._query()).scalars().unique())

    def list_paged(self, session: Session, page_number: int, page_size: int) -> PagedList[T]:
        if page_number < 1:
            raise ValueError("page_number must be >= 1")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        total = session.execute(select(func.count()).select_from(self.model)).scalar_one()
        query = self._query().offset((page_number - 1) * page_size).limit(page_size)
        items = list(session.execute(query).scalars().unique())
        return PagedList(items=items, total_count=total, page_number=page_number, page_size=page_size)

    def get_by_id(self, session: Session, entity_id: int) -> T | None:
        query = self._query().where(self.model.id == entity_id)
        return session.execute(query).scalars().first()

    def add(self, session: Session, entity: T) -> T:
        session.add(entity)
        session.commit()
        session.refresh(entity)
        return entity

    def update(self, session: Session, entity: T) -> None:
        """Persist ``entity`` over the stored row with the same id; absent ids are ignored."""

        if session.get(self.model, entity.id) is None:
            logger.debug("Skipping update of missing %s id=%s", self.model.__name__, entity.id)
            return
        if isinstance(entity, AuditMixin):
            # Changes confined to join tables do not fire the column onupdate.
            entity.modified_at = utcnow()
        session.merge(entity)
        session.commit()

    def delete(self, session: Session, entity_id: int) -> None:
        entity = session.get(self.model, entity_id)
        if entity is None:
            return
        session.delete(entity)
        session.commit()


class MovieRepository(Repository[Movie]):
    """Movie queries always load director, genres and actors eagerly."""

    def __init__(self) -> None:
        super().__init__(Movie)

    def _query(self) -> Select:
        return (
            select(Movie)
            .options(
                selectinload(Movie.director),
                selectinload(Movie.genres),
                selectinload(Movie.actors),
            )
            .order_by(Movie.id)
        )

    def by_director(self, session: Session, director_id: int) -> list[Movie]:
        query = self._query().where(Movie.director_id == director_id)
        return list(session.execute(query).scalars().unique())

    def by_genre(self, session: Session, genre_id: int) -> list[Movie]:
        query = self._query().where(Movie.genres.any(Genre.id == genre_id))
        return list(session.execute(query).scalars().unique())

    def by_actor(self, session: Session, actor_id: int) -> list[Movie]:
        query = self._query().where(Movie.actors.any(Actor.id == actor_id))
        return list(session.execute(query).scalars().unique())

    def search_by_title(self, session: Session, term: str) -> list[Movie]:
        query = self._query().where(Movie.title.icontains(term, autoescape=True))
        return list(session.execute(query).scalars().unique())


class PersonRepository(Repository[P]):
    """Shared repository for actors and directors."""

    def search_by_name(self, session: Session, term: str) -> list[P]:
        query = self._query().where(self.model.name.icontains(term, autoescape=True))
        return list(session.execute(query).scalars())


class GenreRepository(Repository[Genre]):
    def __init__(self) -> None:
        super().__init__(Genre)

    def get_by_name(self, session: Session, name: str) -> Genre | None:
        query = select(Genre).where(Genre.name == name)
        return session.execute(query).scalar_one_or_none()


class UserRepository(Repository[User]):
    def __init__(self) -> None:
        super().__init__(User)

    def get_by_username(self, session: Session, username: str) -> User | None:
        query = select(User).where(User.username == username)
        return session.execute(query).scalar_one_or_none()

    def get_by_email(self, session: Session, email: str) -> User | None:
        query = select(User).where(User.email == email)
        return session.execute(query).scalar_one_or_none()

