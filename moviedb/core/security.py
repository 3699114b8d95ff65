"""Credential hashing and JWT issuance."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from moviedb.core.config import Settings
from moviedb.services.errors import ConfigurationError, UnauthorizedError

logger = logging.getLogger(__name__)

SALT_BYTES = 128
JWT_ALGORITHM = "HS256"


class PasswordHasher:
    """Salted HMAC-SHA512: the salt is the HMAC key, the password the message."""

    def __init__(self, salt_bytes: int = SALT_BYTES) -> None:
        self.salt_bytes = salt_bytes

    def hash_password(self, password: str) -> tuple[bytes, bytes]:
        """Return ``(password_hash, password_salt)`` using a fresh random salt."""

        salt = secrets.token_bytes(self.salt_bytes)
        return self._mac(password, salt).finalize(), salt

    def verify_password(self, password: str, password_hash: bytes, password_salt: bytes) -> bool:
        # HMAC.verify compares in constant time.
        try:
            self._mac(password, password_salt).verify(password_hash)
        except InvalidSignature:
            return False
        return True

    @staticmethod
    def _mac(password: str, salt: bytes) -> hmac.HMAC:
        mac = hmac.HMAC(salt, hashes.SHA512())
        mac.update(password.encode("utf-8"))
        return mac


@dataclass(frozen=True, slots=True)
class CurrentUser:
    """Identity carried by a validated bearer token."""

    id: int
    username: str


class TokenIssuer:
    """Builds and validates signed, time-bounded HS256 tokens."""

    def __init__(
        self,
        *,
        secret: str | None,
        issuer: str,
        audience: str,
        expiry: timedelta = timedelta(days=7),
    ) -> None:
        if not secret:
            raise ConfigurationError("JWT secret is not configured (set JWT_SECRET)")
        self._secret = secret
        self.issuer = issuer
        self.audience = audience
        self.expiry = expiry

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expiry=timedelta(days=settings.jwt_expiry_days),
        )

    def issue(self, *, user_id: int, username: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "name": username,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": issued_at,
            "exp": issued_at + self.expiry,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        """Validate signature, expiry, issuer and audience; return the claims."""

        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["exp", "sub", "name"]},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.warning("JWT validation failed: token expired")
            raise UnauthorizedError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            logger.warning("JWT validation failed: %s", exc)
            raise UnauthorizedError("Invalid authentication credentials") from exc

    def current_user(self, token: str) -> CurrentUser:
        claims = self.decode(token)
        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise UnauthorizedError("Invalid authentication credentials") from exc
        return CurrentUser(id=user_id, username=claims["name"])
