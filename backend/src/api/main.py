"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.errors import register_exception_handlers
from api.routers import auth, bookmarks, health, users
from core.auth import IdentityExtractor
from core.config import Settings, get_settings
from core.security import PasswordHasher
from core.tokens import TokenIssuer
from db.session import engine
from services.auth_service import AuthService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    logger.info("Bookmarks API starting")
    yield
    # Shutdown: release pooled database connections
    await engine.dispose()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        # Token responses must not be cached by intermediaries
        response.headers["Cache-Control"] = "no-store"
        return response


def create_app(
    settings: Settings | None = None,
    password_hasher: PasswordHasher | None = None,
) -> FastAPI:
    """
    Build the application and the auth components it owns.

    The hasher, token issuer, identity extractor and auth workflow are constructed
    here once and attached to `app.state`; request handlers receive them through
    dependencies rather than module globals.
    """
    app_settings = settings or get_settings()
    hasher = password_hasher or PasswordHasher()
    issuer = TokenIssuer.from_settings(app_settings)

    app = FastAPI(
        title="Bookmarks API",
        description="Personal bookmark management with token-based authentication.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.token_issuer = issuer
    app.state.identity_extractor = IdentityExtractor(issuer)
    app.state.auth_service = AuthService(
        hasher,
        issuer,
        normalize_emails=app_settings.normalize_email,
    )

    register_exception_handlers(app)

    # Security headers middleware (runs after CORS, adds headers to responses)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(bookmarks.router)
    return app


app = create_app()
