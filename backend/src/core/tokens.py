"""Signed access tokens (JWT) for authenticated users."""
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel

from core.config import Settings


class AccessToken(BaseModel):
    """Token wrapper returned by signup and signin."""

    access_token: str
    token_type: str = "bearer"


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity claims carried by an access token."""

    subject: str
    email: str


class TokenIssuer:
    """
    Mints and verifies short-lived, HMAC-signed access tokens.

    Tokens are stateless: validity is signature plus expiry only. Nothing is stored
    server-side, so there is no revocation before expiry.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(minutes=15),
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret is not configured")
        self._secret = secret
        self._algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        """Build an issuer from application settings."""
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(
        self,
        subject: int | str,
        email: str,
        now: datetime | None = None,
    ) -> AccessToken:
        """
        Sign a token for the given user.

        Args:
            subject: User identifier, stored as the string `sub` claim.
            email: User email, stored as the `email` claim.
            now: Issue time. Defaults to the current UTC time.
        """
        issued_at = now or datetime.now(UTC)
        payload = {
            "sub": str(subject),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return AccessToken(access_token=token)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify a token's signature and expiry and return its claims.

        Raises:
            jwt.PyJWTError: If the token is malformed, tampered with, expired, or
                missing a required claim.
        """
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": ["sub", "email", "exp"]},
        )
        return TokenClaims(subject=payload["sub"], email=payload["email"])
