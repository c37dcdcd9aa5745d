"""Map service-layer error values and request validation failures to HTTP responses."""
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.errors import ErrorKind, ServiceError

STATUS_BY_KIND: dict[ErrorKind, int] = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "credentials_taken": status.HTTP_403_FORBIDDEN,
    "credentials_incorrect": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
}


def to_http_exception(error: ServiceError) -> HTTPException:
    """Build the HTTPException for a service error."""
    headers = {"WWW-Authenticate": "Bearer"} if error.kind == "unauthorized" else None
    return HTTPException(
        status_code=STATUS_BY_KIND[error.kind],
        detail=error.message,
        headers=headers,
    )


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed or missing request fields as a 400 client error."""
    return JSONResponse(
        status_code=STATUS_BY_KIND["validation"],
        content={"error": "validation", "detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on the application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
