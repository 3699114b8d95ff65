"""Actor and director endpoints, built from one router factory."""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from moviedb.core.auth import get_current_user
from moviedb.db import get_session
from moviedb.dependencies import get_actor_service, get_director_service
from moviedb.schemas import ErrorResponse, MovieOut, Page, PersonIn, PersonOut
from moviedb.services.people import PersonService


def build_person_router(kind: str, get_service: Callable[[], PersonService]) -> APIRouter:
    """Return the CRUD, search and filmography routes for ``/{kind}s``.

    Route names are prefixed with ``kind`` (``get_actor``, ``get_director``)
    so both routers can be mounted on the same app.
    """

    router = APIRouter(
        prefix=f"/{kind}s",
        tags=[f"{kind}s"],
        dependencies=[Depends(get_current_user)],
        responses={401: {"model": ErrorResponse}},
    )

    @router.get("", response_model=list[PersonOut], name=f"list_{kind}s")
    def list_people(
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> list[PersonOut]:
        return service.list_all(session)

    @router.get("/paged", response_model=Page[PersonOut], name=f"list_{kind}s_paged")
    def list_people_paged(
        page_number: int = Query(1, ge=1),
        page_size: int = Query(10, ge=1, le=100),
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> Page[PersonOut]:
        return service.list_paged(session, page_number, page_size)

    @router.get("/search", response_model=list[PersonOut], name=f"search_{kind}s")
    def search_people(
        term: str = Query(..., min_length=1, max_length=100),
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> list[PersonOut]:
        return service.search(session, term)

    @router.get(
        "/{person_id}",
        response_model=PersonOut,
        name=f"get_{kind}",
        responses={404: {"model": ErrorResponse}},
    )
    def get_person(
        person_id: int,
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> PersonOut:
        return service.get(session, person_id)

    @router.get(
        "/{person_id}/movies",
        response_model=list[MovieOut],
        name=f"list_{kind}_movies",
        responses={404: {"model": ErrorResponse}},
    )
    def list_person_movies(
        person_id: int,
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> list[MovieOut]:
        return service.movies_for(session, person_id)

    @router.post(
        "",
        response_model=PersonOut,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind}",
        responses={400: {"model": ErrorResponse}},
    )
    def create_person(
        payload: PersonIn,
        request: Request,
        response: Response,
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> PersonOut:
        person = service.create(session, payload)
        response.headers["Location"] = str(request.url_for(f"get_{kind}", person_id=person.id))
        return person

    @router.put(
        "/{person_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"update_{kind}",
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def update_person(
        person_id: int,
        payload: PersonIn,
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> Response:
        service.update(session, person_id, payload)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{person_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"delete_{kind}",
        responses={404: {"model": ErrorResponse}},
    )
    def delete_person(
        person_id: int,
        session: Session = Depends(get_session),
        service: PersonService = Depends(get_service),
    ) -> Response:
        service.delete(session, person_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


actors_router = build_person_router("actor", get_actor_service)
directors_router = build_person_router("director", get_director_service)
