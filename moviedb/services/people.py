"""Actor and director use cases."""

from __future__ import annotations

from sqlalchemy.orm import Session

from moviedb.models import Actor, Director, Movie
from moviedb.repositories import MovieRepository, PersonRepository
from moviedb.schemas import MovieOut, PersonOut
from moviedb.services.base import EntityService


class ActorService(EntityService[Actor, PersonOut]):
    kind = "Actor"
    output = PersonOut

    def __init__(self, repository: PersonRepository[Actor], movies: MovieRepository) -> None:
        super().__init__(repository)
        self.movies = movies

    def search(self, session: Session, term: str) -> list[PersonOut]:
        return [self.to_output(actor) for actor in self.repository.search_by_name(session, term)]

    def movies_for(self, session: Session, actor_id: int) -> list[MovieOut]:
        self.require(session, actor_id)
        return _movie_outputs(self.movies.by_actor(session, actor_id))


class DirectorService(EntityService[Director, PersonOut]):
    kind = "Director"
    output = PersonOut

    def __init__(self, repository: PersonRepository[Director], movies: MovieRepository) -> None:
        super().__init__(repository)
        self.movies = movies

    def search(self, session: Session, term: str) -> list[PersonOut]:
        return [self.to_output(director) for director in self.repository.search_by_name(session, term)]

    def movies_for(self, session: Session, director_id: int) -> list[MovieOut]:
        self.require(session, director_id)
        return _movie_outputs(self.movies.by_director(session, director_id))


def _movie_outputs(movies: list[Movie]) -> list[MovieOut]:
    return [MovieOut.from_movie(movie) for movie in movies]


PersonService = ActorService | DirectorService
