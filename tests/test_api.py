from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from moviedb.core.config import get_settings
from moviedb.core.ratelimit import build_limiter
from moviedb.dependencies import get_actor_service, get_movie_service
from moviedb.main import app
from moviedb.models import Actor
from moviedb.repositories import MovieRepository, PersonRepository
from moviedb.services.people import ActorService

API = "/api/v1"


def _movie_payload(**overrides):
    payload = {
        "title": "Inception",
        "release_year": 2010,
        "plot": "Dream-sharing heist.",
        "runtime_minutes": 148,
        "poster_url": "https://example.com/inception.jpg",
        "director_id": None,
        "genre_ids": [],
        "actor_ids": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def seeded(client, auth_headers):
    """Create a genre, an actor and a director through the API."""

    genre = client.post(f"{API}/genres", json={"name": "Science Fiction"}, headers=auth_headers).json()
    actor = client.post(f"{API}/actors", json={"name": "Leonardo DiCaprio"}, headers=auth_headers).json()
    director = client.post(f"{API}/directors", json={"name": "Christopher Nolan"}, headers=auth_headers).json()
    return {"genre": genre, "actor": actor, "director": director}


def test_health_is_public(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.parametrize("path", ["/movies", "/actors", "/directors", "/genres", "/movies/1"])
def test_protected_endpoints_require_a_token(client, path):
    resp = client.get(f"{API}{path}")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Missing bearer token"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_invalid_token_is_rejected(client):
    resp = client.get(f"{API}/movies", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid authentication credentials"


def test_register_and_login(client):
    payload = {"username": "critic", "email": "critic@example.com", "password": "Password123"}
    resp = client.post(f"{API}/auth/register", json=payload)
    assert resp.status_code == 201
    assert resp.json()["username"] == "critic"
    assert resp.json()["token"]

    duplicate = client.post(f"{API}/auth/register", json=payload)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"message": "Username already exists"}

    login = client.post(f"{API}/auth/login", json={"username": "critic", "password": "Password123"})
    assert login.status_code == 200
    assert login.json()["username"] == "critic"

    token = login.json()["token"]
    assert client.get(f"{API}/movies", headers={"Authorization": f"Bearer {token}"}).status_code == 200


def test_login_with_bad_credentials(client, auth_headers):
    resp = client.post(f"{API}/auth/login", json={"username": "critic", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid username or password"}

    resp = client.post(f"{API}/auth/login", json={"username": "ghost", "password": "Password123"})
    assert resp.status_code == 401


def test_register_validates_email(client):
    resp = client.post(
        f"{API}/auth/register",
        json={"username": "critic", "email": "not-an-email", "password": "Password123"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation failed"


def test_movie_lifecycle(client, auth_headers, seeded):
    payload = _movie_payload(
        director_id=seeded["director"]["id"],
        genre_ids=[seeded["genre"]["id"]],
        actor_ids=[seeded["actor"]["id"], 999],
    )
    created = client.post(f"{API}/movies", json=payload, headers=auth_headers)
    assert created.status_code == 201
    body = created.json()
    assert created.headers["location"].endswith(f"{API}/movies/{body['id']}")
    assert body["director_name"] == "Christopher Nolan"
    assert body["genres"] == [{"id": seeded["genre"]["id"], "name": "Science Fiction"}]
    assert body["actors"] == [{"id": seeded["actor"]["id"], "name": "Leonardo DiCaprio"}]

    fetched = client.get(f"{API}/movies/{body['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json() == body

    updated = client.put(
        f"{API}/movies/{body['id']}",
        json=_movie_payload(title="Inception Redux", runtime_minutes=150),
        headers=auth_headers,
    )
    assert updated.status_code == 204
    assert updated.content == b""

    after = client.get(f"{API}/movies/{body['id']}", headers=auth_headers).json()
    assert after["title"] == "Inception Redux"
    assert after["runtime_minutes"] == 150
    assert after["director_id"] is None
    assert after["genres"] == []
    assert after["actors"] == []

    deleted = client.delete(f"{API}/movies/{body['id']}", headers=auth_headers)
    assert deleted.status_code == 204
    assert client.get(f"{API}/movies/{body['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"{API}/movies/{body['id']}", headers=auth_headers).status_code == 404


def test_missing_movie_returns_404_message(client, auth_headers):
    resp = client.get(f"{API}/movies/999", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"message": "Movie with ID 999 not found"}

    resp = client.put(f"{API}/movies/999", json=_movie_payload(), headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"title": "   "},
        {"title": "x" * 201},
        {"release_year": 1887},
        {"release_year": date.today().year + 6},
        {"runtime_minutes": 0},
        {"plot": "x" * 2001},
        {"poster_url": "x" * 501},
    ],
)
def test_movie_validation_errors(client, auth_headers, overrides):
    resp = client.post(f"{API}/movies", json=_movie_payload(**overrides), headers=auth_headers)
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert body["details"]


def test_release_year_upper_bound_is_inclusive(client, auth_headers):
    resp = client.post(
        f"{API}/movies",
        json=_movie_payload(release_year=date.today().year + 5),
        headers=auth_headers,
    )
    assert resp.status_code == 201


def test_unknown_director_is_a_bad_request(client, auth_headers):
    resp = client.post(f"{API}/movies", json=_movie_payload(director_id=999), headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Director with ID 999 not found"}


def test_movie_queries(client, auth_headers, seeded):
    movie = client.post(
        f"{API}/movies",
        json=_movie_payload(
            director_id=seeded["director"]["id"],
            genre_ids=[seeded["genre"]["id"]],
            actor_ids=[seeded["actor"]["id"]],
        ),
        headers=auth_headers,
    ).json()
    client.post(f"{API}/movies", json=_movie_payload(title="Heat", release_year=1995), headers=auth_headers)

    def titles(path, **params):
        resp = client.get(f"{API}{path}", params=params, headers=auth_headers)
        assert resp.status_code == 200
        return [item["title"] for item in resp.json()]

    assert titles("/movies") == ["Inception", "Heat"]
    assert titles("/movies/search", term="Incep") == ["Inception"]
    assert titles("/movies/search", term="xyz123") == []
    assert titles(f"/movies/director/{seeded['director']['id']}") == ["Inception"]
    assert titles(f"/movies/genre/{seeded['genre']['id']}") == ["Inception"]
    assert titles(f"/movies/actor/{seeded['actor']['id']}") == ["Inception"]
    assert titles("/movies/actor/999") == []
    assert titles(f"/actors/{seeded['actor']['id']}/movies") == [movie["title"]]
    assert titles(f"/directors/{seeded['director']['id']}/movies") == [movie["title"]]
    assert titles(f"/genres/{seeded['genre']['id']}/movies") == [movie["title"]]


@pytest.mark.parametrize("kind", ["actors", "directors", "genres"])
def test_related_movies_of_missing_parent_is_404(client, auth_headers, kind):
    resp = client.get(f"{API}/{kind}/999/movies", headers=auth_headers)
    assert resp.status_code == 404


def test_paged_listing(client, auth_headers):
    for index in range(25):
        client.post(f"{API}/genres", json={"name": f"Genre {index:02d}"}, headers=auth_headers)

    resp = client.get(f"{API}/genres/paged", params={"page_number": 3, "page_size": 10}, headers=auth_headers)
    assert resp.status_code == 200
    page = resp.json()
    assert len(page["items"]) == 5
    assert page["total_count"] == 25
    assert page["total_pages"] == 3
    assert page["has_next"] is False
    assert page["has_previous"] is True

    bad = client.get(f"{API}/genres/paged", params={"page_number": 0}, headers=auth_headers)
    assert bad.status_code == 400


@pytest.mark.parametrize("kind", ["actors", "directors"])
def test_person_lifecycle(client, auth_headers, kind):
    created = client.post(
        f"{API}/{kind}",
        json={"name": "Tom Hanks", "date_of_birth": "1956-07-09", "bio": "American actor"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    person = created.json()
    assert created.headers["location"].endswith(f"{API}/{kind}/{person['id']}")
    assert person["date_of_birth"] == "1956-07-09"

    search = client.get(f"{API}/{kind}/search", params={"term": "hanks"}, headers=auth_headers)
    assert [p["id"] for p in search.json()] == [person["id"]]

    resp = client.put(f"{API}/{kind}/{person['id']}", json={"name": "Thomas Hanks"}, headers=auth_headers)
    assert resp.status_code == 204
    assert client.get(f"{API}/{kind}/{person['id']}", headers=auth_headers).json()["name"] == "Thomas Hanks"

    assert client.delete(f"{API}/{kind}/{person['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"{API}/{kind}/{person['id']}", headers=auth_headers).status_code == 404
    assert client.put(f"{API}/{kind}/{person['id']}", json={"name": "X"}, headers=auth_headers).status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"name": ""},
        {"name": "x" * 101},
        {"name": "Future Kid", "date_of_birth": (date.today() + timedelta(days=1)).isoformat()},
        {"name": "Verbose", "bio": "x" * 2001},
    ],
)
def test_person_validation_errors(client, auth_headers, payload):
    resp = client.post(f"{API}/actors", json=payload, headers=auth_headers)
    assert resp.status_code == 400


def test_genre_lifecycle(client, auth_headers):
    created = client.post(f"{API}/genres", json={"name": "Drama", "description": "Drama films"}, headers=auth_headers)
    assert created.status_code == 201
    genre = created.json()

    duplicate = client.post(f"{API}/genres", json={"name": "Drama"}, headers=auth_headers)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"message": "Genre 'Drama' already exists"}

    resp = client.put(
        f"{API}/genres/{genre['id']}",
        json={"name": "Drama", "description": "Serious films"},
        headers=auth_headers,
    )
    assert resp.status_code == 204
    assert client.get(f"{API}/genres/{genre['id']}", headers=auth_headers).json()["description"] == "Serious films"
    assert client.delete(f"{API}/genres/{genre['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"{API}/genres", headers=auth_headers).json() == []


def test_unexpected_errors_are_hidden(client, auth_headers):
    class ExplodingService:
        def list_all(self, session):
            raise RuntimeError("database exploded")

    app.dependency_overrides[get_movie_service] = ExplodingService
    unsafe_client = TestClient(app, raise_server_exceptions=False)

    resp = unsafe_client.get(f"{API}/movies", headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json() == {"message": "An unexpected error occurred"}


def test_store_failure_on_create_is_a_bad_request_with_details(client, auth_headers):
    class LockedActors(PersonRepository):
        def add(self, session, entity):
            raise OperationalError("INSERT INTO actors", {}, Exception("database is locked"))

    app.dependency_overrides[get_actor_service] = lambda: ActorService(LockedActors(Actor), MovieRepository())

    resp = client.post(f"{API}/actors", json={"name": "Tom Hanks"}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"message": "Error creating actor", "details": "database is locked"}


def test_requests_over_the_rate_limit_are_rejected(client, auth_headers, monkeypatch):
    settings = get_settings().model_copy(update={"rate_limit": "3/minute", "rate_limit_enabled": True})
    monkeypatch.setattr(app.state, "limiter", build_limiter(settings))

    for _ in range(3):
        assert client.get(f"{API}/genres", headers=auth_headers).status_code == 200
    resp = client.get(f"{API}/genres", headers=auth_headers)

    assert resp.status_code == 429
    assert resp.json()["message"].startswith("Rate limit exceeded")


def test_actor_and_director_routers_keep_distinct_route_names():
    assert app.url_path_for("get_actor", person_id=7) == f"{API}/actors/7"
    assert app.url_path_for("get_director", person_id=7) == f"{API}/directors/7"
