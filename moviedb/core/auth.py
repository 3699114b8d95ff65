"""Authentication dependencies for validating bearer JWTs."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from moviedb.core.config import get_settings
from moviedb.core.security import CurrentUser, TokenIssuer
from moviedb.services.errors import UnauthorizedError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    """Return the process-wide token issuer; raises ConfigurationError without a secret."""

    return TokenIssuer.from_settings(get_settings())


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> CurrentUser:
    """Verify the bearer token and return the authenticated identity."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        logger.warning("Request rejected: missing bearer token")
        raise UnauthorizedError("Missing bearer token")
    return issuer.current_user(credentials.credentials)
