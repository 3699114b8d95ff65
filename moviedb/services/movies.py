"""Movie use cases: CRUD with director and association resolution."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moviedb.models import Director, Movie
from moviedb.repositories import MovieRepository, PersonRepository
from moviedb.schemas import MovieIn, MovieOut
from moviedb.services.associations import AssociationManager
from moviedb.services.base import EntityService
from moviedb.services.errors import InvalidOperationError

logger = logging.getLogger(__name__)


class MovieService(EntityService[Movie, MovieOut]):
    kind = "Movie"
    output = MovieOut

    def __init__(
        self,
        repository: MovieRepository,
        directors: PersonRepository[Director],
        associations: AssociationManager,
    ) -> None:
        super().__init__(repository)
        self.directors = directors
        self.associations = associations

    def to_output(self, entity: Movie) -> MovieOut:
        return MovieOut.from_movie(entity)

    def create(self, session: Session, data: MovieIn) -> MovieOut:
        movie = Movie()
        self.assign(session, movie, data)
        try:
            self.repository.add(session, movie)
        except SQLAlchemyError as exc:
            raise self.write_failed(session, "creating", data, exc) from exc
        logger.info(
            "Created Movie id=%s with %d actor(s) and %d genre(s)",
            movie.id,
            len(movie.actors),
            len(movie.genres),
        )
        # Re-read so the response reflects what was stored, associations included.
        return self.to_output(self.require(session, movie.id))

    def assign(self, session: Session, entity: Movie, data: MovieIn) -> None:
        entity.title = data.title
        entity.release_year = data.release_year
        entity.plot = data.plot
        entity.runtime_minutes = data.runtime_minutes
        entity.poster_url = data.poster_url
        entity.director = self._resolve_director(session, data.director_id)
        self.associations.apply(
            session,
            entity,
            actor_ids=data.actor_ids,
            genre_ids=data.genre_ids,
        )

    def _resolve_director(self, session: Session, director_id: int | None) -> Director | None:
        if director_id is None:
            return None
        director = self.directors.get_by_id(session, director_id)
        if director is None:
            raise InvalidOperationError(f"Director with ID {director_id} not found")
        return director

    def by_director(self, session: Session, director_id: int) -> list[MovieOut]:
        return [self.to_output(movie) for movie in self.repository.by_director(session, director_id)]

    def by_genre(self, session: Session, genre_id: int) -> list[MovieOut]:
        return [self.to_output(movie) for movie in self.repository.by_genre(session, genre_id)]

    def by_actor(self, session: Session, actor_id: int) -> list[MovieOut]:
        return [self.to_output(movie) for movie in self.repository.by_actor(session, actor_id)]

    def search(self, session: Session, term: str) -> list[MovieOut]:
        return [self.to_output(movie) for movie in self.repository.search_by_title(session, term)]
