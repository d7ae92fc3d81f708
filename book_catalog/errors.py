"""Exceptions raised by the book catalog and their HTTP rendering."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)

INVALID_BODY = "Invalid request body"
INVALID_ID = "Invalid book ID"


class CatalogError(Exception):
    """Base exception carrying the message shown to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class MalformedInputError(CatalogError):
    """The request body or identifier could not be parsed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(CatalogError):
    """No book has the requested identifier."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreError(CatalogError):
    """A document store call failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StartupError(Exception):
    """Configuration or connectivity problem detected before serving."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Render catalog errors as flat ``{"error": ...}`` bodies."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Error parsing request body for %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_BODY)
