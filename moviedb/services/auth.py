"""User registration and login."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from moviedb.core.security import PasswordHasher, TokenIssuer
from moviedb.models import User
from moviedb.repositories import UserRepository
from moviedb.schemas import AuthResponse, LoginRequest, RegisterRequest
from moviedb.services.errors import InvalidOperationError, UnauthorizedError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.issuer = issuer

    def register(self, session: Session, request: RegisterRequest) -> AuthResponse:
        """Create a user with a freshly salted password hash and sign them in."""

        if self.users.get_by_username(session, request.username) is not None:
            raise InvalidOperationError("Username already exists")
        if self.users.get_by_email(session, request.email) is not None:
            raise InvalidOperationError("Email already exists")

        password_hash, password_salt = self.hasher.hash_password(request.password)
        try:
            user = self.users.add(
                session,
                User(
                    username=request.username,
                    email=request.email,
                    password_hash=password_hash,
                    password_salt=password_salt,
                ),
            )
        except IntegrityError as exc:
            # A concurrent registration took the username or email after the checks above.
            session.rollback()
            logger.warning("Registration of %s hit a unique constraint: %s", request.username, exc.orig)
            raise InvalidOperationError("Username or email already exists") from exc
        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return self._respond(user)

    def login(self, session: Session, request: LoginRequest) -> AuthResponse:
        user = self.users.get_by_username(session, request.username)
        if user is None:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not self.hasher.verify_password(request.password, user.password_hash, user.password_salt):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return self._respond(user)

    def _respond(self, user: User) -> AuthResponse:
        token = self.issuer.issue(user_id=user.id, username=user.username)
        return AuthResponse(token=token, username=user.username)
