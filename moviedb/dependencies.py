"""Shared repositories and the service providers injected into routers."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from moviedb.core.auth import get_token_issuer
from moviedb.core.security import PasswordHasher, TokenIssuer
from moviedb.models import Actor, Director
from moviedb.repositories import GenreRepository, MovieRepository, PersonRepository, UserRepository
from moviedb.services.associations import AssociationManager
from moviedb.services.auth import AuthService
from moviedb.services.genres import GenreService
from moviedb.services.movies import MovieService
from moviedb.services.people import ActorService, DirectorService

movie_repository = MovieRepository()
actor_repository: PersonRepository[Actor] = PersonRepository(Actor)
director_repository: PersonRepository[Director] = PersonRepository(Director)
genre_repository = GenreRepository()
user_repository = UserRepository()


@lru_cache(maxsize=1)
def get_movie_service() -> MovieService:
    return MovieService(
        movie_repository,
        director_repository,
        AssociationManager(actor_repository, genre_repository),
    )


@lru_cache(maxsize=1)
def get_actor_service() -> ActorService:
    return ActorService(actor_repository, movie_repository)


@lru_cache(maxsize=1)
def get_director_service() -> DirectorService:
    return DirectorService(director_repository, movie_repository)


@lru_cache(maxsize=1)
def get_genre_service() -> GenreService:
    return GenreService(genre_repository, movie_repository)


def get_auth_service(issuer: TokenIssuer = Depends(get_token_issuer)) -> AuthService:
    return AuthService(user_repository, PasswordHasher(), issuer)
