"""Login and registration endpoints (no bearer token required)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from moviedb.db import get_session
from moviedb.dependencies import get_auth_service
from moviedb.schemas import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest
from moviedb.services.auth import AuthService
from moviedb.services.errors import InvalidOperationError, UnauthorizedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse, responses={401: {"model": ErrorResponse}})
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        return service.login(session, payload)
    except UnauthorizedError:
        logger.warning("Login failed for user: %s", payload.username)
        raise


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def register(
    payload: RegisterRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        return service.register(session, payload)
    except InvalidOperationError as exc:
        logger.warning("Registration failed for user %s: %s", payload.username, exc.message)
        raise
