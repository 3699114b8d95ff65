"""FastAPI entrypoint wiring routers, startup tasks and error mapping."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError

from moviedb.core.auth import get_token_issuer
from moviedb.core.config import get_settings
from moviedb.core.ratelimit import build_limiter
from moviedb.db import SessionLocal, init_models
from moviedb.routers import auth, genres, movies
from moviedb.routers.people import actors_router, directors_router
from moviedb.seed import seed_database
from moviedb.services.errors import (
    CatalogError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Fail fast on missing JWT config, ensure tables, then seed sample data."""

    get_token_issuer()
    init_models()
    if get_settings().seed_database:
        session = SessionLocal()
        try:
            seed_database(session)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("An error occurred while seeding the database")
        finally:
            session.close()
    yield


app = FastAPI(title="Movie Database API", version="1.0.0", lifespan=lifespan)
app.state.limiter = build_limiter(get_settings())
app.add_middleware(SlowAPIMiddleware)

_api_prefix = get_settings().api_prefix
for _router in (auth.router, movies.router, actors_router, directors_router, genres.router):
    app.include_router(_router, prefix=_api_prefix)


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


_STATUS_BY_ERROR: dict[type[CatalogError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidOperationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
}


@app.exception_handler(CatalogError)
async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = next(
        (code for kind, code in _STATUS_BY_ERROR.items() if isinstance(exc, kind)),
        None,
    )
    if status_code is None:
        # ConfigurationError and any future kind without a mapping.
        return await handle_unexpected_error(request, exc)

    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    content = {"message": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    logger.warning("%s %s rejected: %d validation error(s)", request.method, request.url.path, len(details))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "details": details},
    )


@app.exception_handler(RateLimitExceeded)
def handle_rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Sync so SlowAPIMiddleware can call it directly.
    logger.warning("%s %s throttled for %s: %s", request.method, request.url.path, request.client, exc.detail)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"message": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An unexpected error occurred"},
    )
