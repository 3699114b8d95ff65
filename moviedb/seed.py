"""Sample catalog data loaded into an empty database at startup."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from moviedb.core.security import PasswordHasher
from moviedb.models import Actor, Base, Director, Genre, Movie, User

logger = logging.getLogger(__name__)

GENRES = [
    ("Action", "Action films"),
    ("Comedy", "Comedy films"),
    ("Drama", "Drama films"),
    ("Science Fiction", "Science Fiction films"),
    ("Horror", "Horror films"),
    ("Thriller", "Thriller films"),
    ("Romance", "Romance films"),
]

DIRECTORS = [
    ("Christopher Nolan", date(1970, 7, 30), "British-American film director known for mind-bending narratives"),
    ("Quentin Tarantino", date(1963, 3, 27), "American film director known for nonlinear storytelling"),
    ("Steven Spielberg", date(1946, 12, 18), "American film director and producer"),
]

ACTORS = [
    ("Leonardo DiCaprio", date(1974, 11, 11), "American actor known for intense performances"),
    ("Tom Hanks", date(1956, 7, 9), "American actor and filmmaker"),
    ("Meryl Streep", date(1949, 6, 22), "American actress known for versatility"),
    ("Brad Pitt", date(1963, 12, 18), "American actor and producer"),
]

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Password123"


def _is_empty(session: Session, model: type[Base]) -> bool:
    return session.execute(select(func.count()).select_from(model)).scalar_one() == 0


def _by_name(session: Session, model: type[Actor] | type[Director] | type[Genre], name: str):
    return session.execute(select(model).where(model.name == name)).scalars().first()


def _sample_movies(session: Session) -> list[Movie] | None:
    nolan = _by_name(session, Director, "Christopher Nolan")
    leo = _by_name(session, Actor, "Leonardo DiCaprio")
    sci_fi = _by_name(session, Genre, "Science Fiction")
    drama = _by_name(session, Genre, "Drama")
    thriller = _by_name(session, Genre, "Thriller")
    if None in (nolan, leo, sci_fi, drama, thriller):
        return None
    return [
        Movie(
            title="Inception",
            release_year=2010,
            plot=(
                "A thief who steals corporate secrets through the use of dream-sharing "
                "technology is given the inverse task of planting an idea into the mind of a C.E.O."
            ),
            runtime_minutes=148,
            poster_url="https://example.com/inception.jpg",
            director=nolan,
            actors=[leo],
            genres=[sci_fi, thriller],
        ),
        Movie(
            title="Interstellar",
            release_year=2014,
            plot=(
                "A team of explorers travel through a wormhole in space in an attempt "
                "to ensure humanity's survival."
            ),
            runtime_minutes=169,
            poster_url="https://example.com/interstellar.jpg",
            director=nolan,
            genres=[sci_fi, drama],
        ),
    ]


def seed_database(session: Session, hasher: PasswordHasher | None = None) -> None:
    """Populate each table that is still empty; tables with rows are left alone."""

    if _is_empty(session, Genre):
        session.add_all(Genre(name=name, description=description) for name, description in GENRES)
        session.commit()
        logger.info("Seeded %d genres", len(GENRES))

    if _is_empty(session, Director):
        session.add_all(Director(name=name, date_of_birth=born, bio=bio) for name, born, bio in DIRECTORS)
        session.commit()
        logger.info("Seeded %d directors", len(DIRECTORS))

    if _is_empty(session, Actor):
        session.add_all(Actor(name=name, date_of_birth=born, bio=bio) for name, born, bio in ACTORS)
        session.commit()
        logger.info("Seeded %d actors", len(ACTORS))

    if _is_empty(session, Movie):
        movies = _sample_movies(session)
        if movies is None:
            logger.warning("Skipping sample movies: their director, actor or genres are missing")
        else:
            session.add_all(movies)
            session.commit()
            logger.info("Seeded %d movies", len(movies))

    if _is_empty(session, User):
        password_hash, password_salt = (hasher or PasswordHasher()).hash_password(ADMIN_PASSWORD)
        session.add(
            User(
                username=ADMIN_USERNAME,
                email=ADMIN_EMAIL,
                password_hash=password_hash,
                password_salt=password_salt,
            )
        )
        session.commit()
        logger.info("Seeded admin user")
