"""Genre use cases."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from moviedb.models import Genre
from moviedb.repositories import GenreRepository, MovieRepository
from moviedb.schemas import GenreIn, GenreOut, MovieOut
from moviedb.services.base import EntityService
from moviedb.services.errors import CatalogError, InvalidOperationError


def _duplicate_name(name: str) -> InvalidOperationError:
    return InvalidOperationError(f"Genre '{name}' already exists")


class GenreService(EntityService[Genre, GenreOut]):
    kind = "Genre"
    output = GenreOut

    def __init__(self, repository: GenreRepository, movies: MovieRepository) -> None:
        super().__init__(repository)
        self.movies = movies

    def assign(self, session: Session, entity: Genre, data: GenreIn) -> None:
        # Genre names are unique; reject a name owned by another genre.
        existing = self.repository.get_by_name(session, data.name)
        if existing is not None and existing is not entity:
            raise _duplicate_name(data.name)
        super().assign(session, entity, data)

    def write_failed(
        self,
        session: Session,
        action: str,
        data: GenreIn,
        exc: SQLAlchemyError,
    ) -> CatalogError:
        error = super().write_failed(session, action, data, exc)
        if isinstance(exc, IntegrityError):
            # The name was stored by another request after the check in assign.
            return _duplicate_name(data.name)
        return error

    def movies_for(self, session: Session, genre_id: int) -> list[MovieOut]:
        self.require(session, genre_id)
        return [MovieOut.from_movie(movie) for movie in self.movies.by_genre(session, genre_id)]
