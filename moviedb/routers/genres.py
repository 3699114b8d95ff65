"""Genre endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from moviedb.core.auth import get_current_user
from moviedb.db import get_session
from moviedb.dependencies import get_genre_service
from moviedb.schemas import ErrorResponse, GenreIn, GenreOut, MovieOut, Page
from moviedb.services.genres import GenreService

router = APIRouter(
    prefix="/genres",
    tags=["genres"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorResponse}},
)


@router.get("", response_model=list[GenreOut])
def list_genres(
    session: Session = Depends(get_session),
    service: GenreService = Depends(get_genre_service),
) -> list[GenreOut]:
    return service.list_all(session)


@router.get("/paged", response_model=Page[GenreOut])
def list_genres_paged(
    page_number: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
    service: GenreService = Depends(get_genre_service),
) -> Page[GenreOut]:
    return service.list_paged(session, page_number, page_size)


@router.get("/{genre_id}", response_model=GenreOut, responses={404: {"model": ErrorResponse}})
def get_genre(
    genre_id: int,
    session: Session = Depends(get_session),
    service: GenreService = Depends(get_genre_service),
) -> GenreOut:
    return service.get(session, genre_id)


@router.get("/{genre_id}/movies", response_model=list[MovieOut], responses={404: {"model": ErrorResponse}})
def list_genre_movies(
    genre_id: int,
    session: Session = Depends(get_session),
    service: GenreService = Depends(get_genre_service),
) -> list[MovieOut]:
    return service.movies_for(session, genre_id)


@router.post(
    "",
    response_model=GenreOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_genre(
    payload: GenreIn,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
    service: GenreService = Depends(get_genre_service),
) -> GenreOut:
    genre = service.create(session, payload)
    response.headers["Location"] = str(request.url_for("get_genre", genre_id=genre.id))
    return genre


@router.put(
    "/{genre_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_genre(
    genre_id: int,
    payload: GenreIn,
    session: Session = Depends(get_session),
    service: GenreService = Depends(get_genre_service),
) -> Response:
    service.update(session, genre_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{genre_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
def delete_genre(
    genre_id: int,
    session: Session = Depends(get_session),
    service: GenreService = Depends(get_genre_service),
) -> Response:
    service.delete(session, genre_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
