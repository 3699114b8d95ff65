"""Movie endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from moviedb.core.auth import get_current_user
from moviedb.db import get_session
from moviedb.dependencies import get_movie_service
from moviedb.schemas import ErrorResponse, MovieIn, MovieOut, Page
from moviedb.services.movies import MovieService

router = APIRouter(
    prefix="/movies",
    tags=["movies"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorResponse}},
)


@router.get("", response_model=list[MovieOut])
def list_movies(
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> list[MovieOut]:
    return service.list_all(session)


@router.get("/paged", response_model=Page[MovieOut])
def list_movies_paged(
    page_number: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> Page[MovieOut]:
    return service.list_paged(session, page_number, page_size)


@router.get("/search", response_model=list[MovieOut])
def search_movies(
    term: str = Query(..., min_length=1, max_length=200),
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> list[MovieOut]:
    return service.search(session, term)


@router.get("/director/{director_id}", response_model=list[MovieOut])
def list_movies_by_director(
    director_id: int,
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> list[MovieOut]:
    return service.by_director(session, director_id)


@router.get("/genre/{genre_id}", response_model=list[MovieOut])
def list_movies_by_genre(
    genre_id: int,
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> list[MovieOut]:
    return service.by_genre(session, genre_id)


@router.get("/actor/{actor_id}", response_model=list[MovieOut])
def list_movies_by_actor(
    actor_id: int,
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> list[MovieOut]:
    return service.by_actor(session, actor_id)


@router.get("/{movie_id}", response_model=MovieOut, responses={404: {"model": ErrorResponse}})
def get_movie(
    movie_id: int,
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> MovieOut:
    return service.get(session, movie_id)


@router.post(
    "",
    response_model=MovieOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_movie(
    payload: MovieIn,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> MovieOut:
    movie = service.create(session, payload)
    response.headers["Location"] = str(request.url_for("get_movie", movie_id=movie.id))
    return movie


@router.put(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_movie(
    movie_id: int,
    payload: MovieIn,
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> Response:
    service.update(session, movie_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
def delete_movie(
    movie_id: int,
    session: Session = Depends(get_session),
    service: MovieService = Depends(get_movie_service),
) -> Response:
    service.delete(session, movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
