"""Bearer token verification.

Tokens are issued elsewhere (the auth service signs HS256 JWTs with
JWT_SECRET). This module only checks them and turns the claims into an
Identity. Validates signature and expiration, plus the issuer when one is
configured.
"""

import logging
from dataclasses import dataclass

import jwt

logger = logging.getLogger(__name__)

ALGORITHMS = ["HS256"]


@dataclass(frozen=True)
class Identity:
    user_id: int | str
    email: str | None = None
    role: str = "listener"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


class TokenVerifier:
    def __init__(self, secret: str | None, issuer: str | None = None):
        self._secret = secret
        self._issuer = issuer

    def verify(self, token: str) -> Identity | None:
        """Return the token's identity, or None when it is not acceptable."""
        if not self._secret:
            logger.warning("JWT_SECRET not configured; rejecting bearer token")
            return None

        options = {"require": ["exp"]}
        kwargs = {"issuer": self._issuer} if self._issuer else {}
        try:
            claims = jwt.decode(token, self._secret, algorithms=ALGORITHMS, options=options, **kwargs)
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            return None
        except jwt.PyJWTError as e:
            logger.warning("Rejected invalid token: %s", e)
            return None

        user_id = claims.get("id", claims.get("userId", claims.get("sub")))
        if user_id is None:
            logger.warning("Rejected token without a user id claim")
            return None
        return Identity(user_id=user_id, email=claims.get("email"), role=claims.get("role") or "listener")
