"""Authentication: bearer token validation and current-user resolution."""
import logging

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import to_http_exception
from core.tokens import TokenIssuer
from db.session import get_async_session
from models.user import User
from services import user_service
from services.errors import ServiceError, unauthorized

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


class IdentityExtractor:
    """
    Resolve a signed access token to the user it was issued for.

    A token is accepted only if its signature and expiry verify AND its subject
    still names an existing user. Every failure is reported as `unauthorized`.
    """

    def __init__(self, issuer: TokenIssuer) -> None:
        self._issuer = issuer

    async def extract(self, db: AsyncSession, token: str) -> User | ServiceError:
        """Verify the token and load its user."""
        try:
            claims = self._issuer.decode(token)
        except jwt.ExpiredSignatureError:
            return unauthorized("Token has expired")
        except jwt.PyJWTError as e:
            # Log full details for debugging (server-side only)
            logger.warning("JWT validation failed: %s", e, exc_info=True)
            return unauthorized("Invalid token")

        try:
            user_id = int(claims.subject)
        except ValueError:
            logger.warning("JWT subject is not a user id")
            return unauthorized("Invalid token")

        user = await user_service.get_user(db, user_id)
        if user is None:
            return unauthorized("User not found")
        return user


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Dependency that validates the bearer token and returns the current user.

    Raises:
        HTTPException: 401 if the header is missing or the token is rejected.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    extractor: IdentityExtractor = request.app.state.identity_extractor
    result = await extractor.extract(db, credentials.credentials)
    if isinstance(result, ServiceError):
        raise to_http_exception(result)
    return result
