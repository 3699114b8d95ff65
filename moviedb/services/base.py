"""Common get/create/update/delete flow shared by the catalog services."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moviedb.models import Base
from moviedb.repositories import Repository
from moviedb.schemas import Page
from moviedb.services.errors import CatalogError, InvalidOperationError, NotFoundError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Base)
OutT = TypeVar("OutT", bound=BaseModel)


class EntityService(Generic[EntityT, OutT]):
    """Service for one entity kind: existence checks plus entity/schema mapping."""

    kind: str = "Entity"
    output: type[OutT]

    def __init__(self, repository: Repository[EntityT]) -> None:
        self.repository = repository

    def to_output(self, entity: EntityT) -> OutT:
        return self.output.model_validate(entity)

    def require(self, session: Session, entity_id: int) -> EntityT:
        entity = self.repository.get_by_id(session, entity_id)
        if entity is None:
            raise NotFoundError.for_entity(self.kind, entity_id)
        return entity

    def list_all(self, session: Session) -> list[OutT]:
        return [self.to_output(entity) for entity in self.repository.list_all(session)]

    def list_paged(self, session: Session, page_number: int, page_size: int) -> Page[OutT]:
        paged = self.repository.list_paged(session, page_number, page_size)
        return Page[self.output].from_paged(paged, [self.to_output(entity) for entity in paged.items])

    def get(self, session: Session, entity_id: int) -> OutT:
        return self.to_output(self.require(session, entity_id))

    def create(self, session: Session, data: BaseModel) -> OutT:
        entity = self.repository.model()
        self.assign(session, entity, data)
        try:
            entity = self.repository.add(session, entity)
        except SQLAlchemyError as exc:
            raise self.write_failed(session, "creating", data, exc) from exc
        logger.info("Created %s id=%s", self.kind, entity.id)
        return self.to_output(entity)

    def update(self, session: Session, entity_id: int, data: BaseModel) -> None:
        entity = self.require(session, entity_id)
        self.assign(session, entity, data)
        try:
            self.repository.update(session, entity)
        except SQLAlchemyError as exc:
            raise self.write_failed(session, "updating", data, exc) from exc
        logger.info("Updated %s id=%s", self.kind, entity_id)

    def delete(self, session: Session, entity_id: int) -> None:
        self.require(session, entity_id)
        self.repository.delete(session, entity_id)
        logger.info("Deleted %s id=%s", self.kind, entity_id)

    def assign(self, session: Session, entity: EntityT, data: BaseModel) -> None:
        """Overwrite every mutable field of ``entity`` from ``data``."""

        values: dict[str, Any] = data.model_dump()
        for field, value in values.items():
            setattr(entity, field, value)

    def write_failed(
        self,
        session: Session,
        action: str,
        data: BaseModel,
        exc: SQLAlchemyError,
    ) -> CatalogError:
        """Roll back a failed commit and build the error reported to the caller."""

        session.rollback()
        cause = getattr(exc, "orig", None) or exc
        logger.warning("Error %s %s: %s", action, self.kind, cause)
        return InvalidOperationError(f"Error {action} {self.kind.lower()}", details=str(cause))
