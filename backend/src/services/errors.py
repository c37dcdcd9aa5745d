"""
Typed error values returned by the service layer.

Services return a ServiceError instead of raising for expected domain failures
(taken credentials, wrong password, missing or foreign resources, bad tokens).
Callers branch on `kind`; the API layer maps each kind to a fixed HTTP status.
Unexpected datastore failures are not represented here and propagate as exceptions.
"""
from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal[
    "validation",             # Malformed or missing input fields
    "credentials_taken",      # Signup/profile email already in use
    "credentials_incorrect",  # Unknown email or wrong password (deliberately merged)
    "not_found",              # Resource missing or owned by someone else
    "forbidden",              # Caller may not act on the resource
    "unauthorized",           # Missing, invalid, or expired token
]


@dataclass(frozen=True)
class ServiceError:
    """A domain failure with a stable kind and a client-safe message."""

    kind: ErrorKind
    message: str


def credentials_taken() -> ServiceError:
    """Email already registered. Reveals nothing about the existing account."""
    return ServiceError("credentials_taken", "Credentials taken")


def credentials_incorrect() -> ServiceError:
    """Signin failed. Identical for unknown email and wrong password."""
    return ServiceError("credentials_incorrect", "Credentials incorrect")


def not_found(resource: str = "Resource") -> ServiceError:
    """Resource does not exist or is not visible to the caller."""
    return ServiceError("not_found", f"{resource} not found")


def forbidden(message: str = "Operation is not allowed on this resource") -> ServiceError:
    """
    Caller is identified but may not perform the operation.

    Reserved: bookmark ownership failures report not_found instead, so no current
    operation returns this kind. It stays mapped to 403 in api.errors.
    """
    return ServiceError("forbidden", message)


def unauthorized(message: str = "Invalid or expired token") -> ServiceError:
    """Authentication failed."""
    return ServiceError("unauthorized", message)
