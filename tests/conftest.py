import os

# Must be set before moviedb is imported: settings are cached and the engine is built at import.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["JWT_ISSUER"] = "TestIssuer"
os.environ["JWT_AUDIENCE"] = "TestAudience"
os.environ["SEED_DATABASE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from moviedb.db import build_engine, get_session, init_models
from moviedb.main import app
from moviedb.models import Actor, Director, Genre


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://")
    init_models(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def _session_override():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    resp = client.post(
        "/api/v1/auth/register",
        json={"username": "critic", "email": "critic@example.com", "password": "Password123"},
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def catalog(session):
    """A small catalog: two genres, two actors and one director."""

    sci_fi = Genre(name="Science Fiction", description="Science Fiction films")
    thriller = Genre(name="Thriller", description="Thriller films")
    leo = Actor(name="Leonardo DiCaprio", bio="American actor")
    brad = Actor(name="Brad Pitt", bio="American actor and producer")
    nolan = Director(name="Christopher Nolan", bio="British-American film director")
    session.add_all([sci_fi, thriller, leo, brad, nolan])
    session.commit()
    return {"sci_fi": sci_fi, "thriller": thriller, "leo": leo, "brad": brad, "nolan": nolan}
