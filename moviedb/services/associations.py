"""Reconciliation of a movie's actor and genre association sets."""

from __future__ import annotations

import logging
from typing import Iterable, TypeVar

from sqlalchemy.orm import Session

from moviedb.models import Actor, Base, Movie
from moviedb.repositories import GenreRepository, PersonRepository, Repository

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Base)


def reconcile(current: list[E], target: list[E]) -> None:
    """Mutate ``current`` in place until it holds exactly the members of ``target``."""

    target_ids = {entity.id for entity in target}
    for entity in list(current):
        if entity.id not in target_ids:
            current.remove(entity)
    current_ids = {entity.id for entity in current}
    for entity in target:
        if entity.id not in current_ids:
            current.append(entity)
            current_ids.add(entity.id)


class AssociationManager:
    """Resolves requested actor/genre ids and applies them to a movie.

    Ids that do not match a stored row are skipped rather than rejected.
    """

    def __init__(
        self,
        actors: PersonRepository[Actor],
        genres: GenreRepository,
    ) -> None:
        self.actors = actors
        self.genres = genres

    def resolve(self, session: Session, repository: Repository[E], ids: Iterable[int]) -> list[E]:
        """Look up ``ids`` in order, dropping duplicates and unknown ids."""

        found: list[E] = []
        seen: set[int] = set()
        for entity_id in ids:
            if entity_id in seen:
                continue
            seen.add(entity_id)
            entity = repository.get_by_id(session, entity_id)
            if entity is None:
                logger.debug("Skipping unknown %s id=%s", repository.model.__name__, entity_id)
                continue
            found.append(entity)
        return found

    def apply(
        self,
        session: Session,
        movie: Movie,
        *,
        actor_ids: Iterable[int],
        genre_ids: Iterable[int],
    ) -> None:
        """Replace the movie's actors and genres with the resolved target sets."""

        reconcile(movie.actors, self.resolve(session, self.actors, actor_ids))
        reconcile(movie.genres, self.resolve(session, self.genres, genre_ids))
