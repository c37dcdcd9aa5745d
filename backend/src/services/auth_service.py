"""Service layer for signup and signin."""
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import PasswordHasher
from core.tokens import AccessToken, TokenIssuer
from models.user import User
from schemas.user import AuthRequest
from services.errors import ServiceError, credentials_incorrect, credentials_taken

logger = logging.getLogger(__name__)

# Index name created by User.email (unique=True, index=True)
EMAIL_UNIQUE_INDEX = "ix_users_email"


def normalize_email(email: str) -> str:
    """Lower-case and trim an email for case-insensitive matching."""
    return email.strip().lower()


def is_email_conflict(error: IntegrityError) -> bool:
    """
    True if the IntegrityError is a violation of the unique email index.

    PostgreSQL reports the index name; SQLite reports the table.column.
    """
    message = str(error.orig)
    return EMAIL_UNIQUE_INDEX in message or "users.email" in message


class AuthService:
    """
    Signup and signin workflows.

    Holds no per-request state. Both operations return an AccessToken on success
    and a ServiceError for expected failures; datastore errors other than an email
    uniqueness violation propagate unchanged.
    """

    def __init__(
        self,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
        normalize_emails: bool = False,
    ) -> None:
        self._hasher = hasher
        self._issuer = issuer
        self._normalize_emails = normalize_emails
        # Verified against when the email is unknown so both signin failures cost the same
        self._dummy_digest = hasher.hash("dummy-password-for-timing")

    def canonical_email(self, email: str) -> str:
        """Apply the configured email matching policy."""
        return normalize_email(email) if self._normalize_emails else email

    async def signup(
        self,
        db: AsyncSession,
        data: AuthRequest,
    ) -> AccessToken | ServiceError:
        """
        Register a new user and return a token for them.

        Returns:
            AccessToken for the new user, or a `credentials_taken` error if the
            email is already registered.

        Note:
            Does not commit. Caller (session generator) handles commit at request end.
        """
        digest = await asyncio.to_thread(self._hasher.hash, data.password)
        user = User(email=self.canonical_email(data.email), hash=digest)
        db.add(user)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            if is_email_conflict(e):
                return credentials_taken()
            raise
        await db.refresh(user)

        logger.info("User %s signed up", user.id)
        return self._issuer.issue(user.id, user.email)

    async def signin(
        self,
        db: AsyncSession,
        data: AuthRequest,
    ) -> AccessToken | ServiceError:
        """
        Check credentials and return a token.

        An unknown email and a wrong password produce the same error value, so the
        response never reveals whether an account exists.
        """
        result = await db.execute(
            select(User).where(User.email == self.canonical_email(data.email)),
        )
        user = result.scalar_one_or_none()

        if user is None:
            await asyncio.to_thread(self._hasher.verify, self._dummy_digest, data.password)
            logger.info("Signin rejected")
            return credentials_incorrect()

        matches = await asyncio.to_thread(self._hasher.verify, user.hash, data.password)
        if not matches:
            logger.info("Signin rejected")
            return credentials_incorrect()

        if self._hasher.needs_rehash(user.hash):
            user.hash = await asyncio.to_thread(self._hasher.hash, data.password)
            await db.flush()

        return self._issuer.issue(user.id, user.email)
