"""Exception hierarchy and its HTTP mapping.

Services raise these; the handlers registered by ``register_error_handlers``
turn them into JSON responses of the form ``{"error": ..., **details}``.
Routes never build error responses by hand.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger()


class ClientDeskError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message}


class Unauthorized(ClientDeskError):
    """Missing, invalid or expired session token."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class InvalidInput(ClientDeskError):
    """Payload or query parameters failed validation.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` dicts.
    """

    status_code = 400

    def __init__(
        self,
        errors: list[dict[str, str]],
        message: str = "Invalid input data",
    ):
        super().__init__(message, {"errors": errors})
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "InvalidInput":
        return cls([{"field": field, "message": message}])

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.errors}


class NotFound(ClientDeskError):
    """Row is absent or owned by another user. The two are never distinguished."""

    status_code = 404

    def __init__(self, entity: str = "Resource", context: dict[str, Any] | None = None):
        super().__init__(f"{entity} not found", context)
        self.entity = entity


class Conflict(ClientDeskError):
    """Request clashes with existing state (e.g. duplicate email)."""

    status_code = 409


class StorageError(ClientDeskError):
    """Unexpected persistence failure. Details are logged, never returned."""

    status_code = 500

    def __init__(self, message: str = "Internal server error", context: dict[str, Any] | None = None):
        super().__init__(message, context)


def _field_name(loc: tuple) -> str:
    # ("body", "budget") -> "budget"; ("query", "startDate") -> "startDate";
    # ("path", "client_id") -> "clientId"
    if not loc:
        return "body"
    source, rest = loc[0], [str(p) for p in loc[1:]]
    if source == "path":
        rest = [to_camel(p) for p in rest]
    elif source not in ("body", "query"):
        rest = [str(source), *rest]
    return ".".join(rest) or "body"


def validation_errors_to_invalid_input(exc: RequestValidationError) -> InvalidInput:
    return InvalidInput(
        [
            {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
    )


async def _handle_app_error(request: Request, exc: ClientDeskError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = validation_errors_to_invalid_input(exc)
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def _handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("storage.error", path=request.url.path, method=request.method)
    err = StorageError()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path, method=request.method)
    err = StorageError()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientDeskError, _handle_app_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, _handle_storage_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
