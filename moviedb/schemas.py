"""Request/response models for the HTTP surface."""

from __future__ import annotations

from datetime import date
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from moviedb.models import Movie
from moviedb.repositories import PagedList

MIN_RELEASE_YEAR = 1888
RELEASE_YEAR_LOOKAHEAD = 5

ItemT = TypeVar("ItemT")


def max_release_year(today: date | None = None) -> int:
    return (today or date.today()).year + RELEASE_YEAR_LOOKAHEAD


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _not_in_future(value: date | None) -> date | None:
    if value is not None and value > date.today():
        raise ValueError("Date of birth cannot be in the future")
    return value


class MovieIn(BaseModel):
    """Full replacement payload for creating or updating a movie."""

    title: str = Field(..., max_length=200)
    release_year: int
    plot: str = Field(default="", max_length=2000)
    runtime_minutes: int = Field(..., gt=0, description="Runtime in minutes")
    poster_url: str = Field(default="", max_length=500)
    director_id: int | None = None
    genre_ids: list[int] = Field(default_factory=list)
    actor_ids: list[int] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("release_year")
    @classmethod
    def check_release_year(cls, value: int) -> int:
        upper = max_release_year()
        if not MIN_RELEASE_YEAR <= value <= upper:
            raise ValueError(f"Release year must be between {MIN_RELEASE_YEAR} and {upper}")
        return value


class PersonIn(BaseModel):
    """Payload shared by actors and directors."""

    name: str = Field(..., max_length=100)
    date_of_birth: date | None = None
    bio: str = Field(default="", max_length=2000)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("date_of_birth")
    @classmethod
    def check_date_of_birth(cls, value: date | None) -> date | None:
        return _not_in_future(value)


class GenreIn(BaseModel):
    name: str = Field(..., max_length=50)
    description: str = Field(default="", max_length=500)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _not_blank(value)


class EntityRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class PersonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    date_of_birth: date | None = None
    bio: str = ""


class GenreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str = ""


class MovieOut(BaseModel):
    id: int
    title: str
    release_year: int
    plot: str = ""
    runtime_minutes: int
    poster_url: str = ""
    director_id: int | None = None
    director_name: str | None = None
    genres: list[EntityRef] = Field(default_factory=list)
    actors: list[EntityRef] = Field(default_factory=list)

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieOut":
        director = movie.director
        return cls(
            id=movie.id,
            title=movie.title,
            release_year=movie.release_year,
            plot=movie.plot or "",
            runtime_minutes=movie.runtime_minutes,
            poster_url=movie.poster_url or "",
            director_id=movie.director_id,
            director_name=director.name if director else None,
            genres=[EntityRef.model_validate(genre) for genre in movie.genres],
            actors=[EntityRef.model_validate(actor) for actor in movie.actors],
        )


class Page(BaseModel, Generic[ItemT]):
    items: list[ItemT]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool

    @classmethod
    def from_paged(cls, paged: PagedList[Any], items: list[ItemT]) -> "Page[ItemT]":
        return cls(
            items=items,
            total_count=paged.total_count,
            page_number=paged.page_number,
            page_size=paged.page_size,
            total_pages=paged.total_pages,
            has_previous=paged.has_previous,
            has_next=paged.has_next,
        )


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class AuthResponse(BaseModel):
    token: str
    username: str


class ErrorResponse(BaseModel):
    message: str
    details: list[dict[str, Any]] | str | None = None
