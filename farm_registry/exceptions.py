"""
Domain exceptions and their HTTP rendering.
Every service failure is a typed exception carrying a human-readable message;
the handlers below map each type to one status code and a {name, message} envelope.
"""

import json
import logging
from typing import Any, Iterable

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FarmRegistryError(Exception):
    """Base exception. Subclasses fix the status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"name": type(self).__name__, "message": self.message}


class BadRequestError(FarmRegistryError):
    """Malformed or invalid input (payload, query, identifiers)."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(FarmRegistryError):
    """Missing, malformed or expired bearer credential."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(FarmRegistryError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(FarmRegistryError):
    status_code = status.HTTP_404_NOT_FOUND


class UnprocessableEntityError(FarmRegistryError):
    """Semantically invalid domain input: unresolvable address, duplicate farm."""

    status_code = 422


class UpstreamServiceError(FarmRegistryError):
    """Geocoder or routing service unreachable or returned something unusable."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


# --- Validation message formatting (class-validator wording) ---

_LOCATION_PREFIXES = ("body", "query", "path", "header")
_NUMBER_ERRORS = ("float_type", "float_parsing", "int_type", "int_parsing", "decimal_type", "decimal_parsing")


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc if p not in _LOCATION_PREFIXES]
    return ".".join(parts) or "body"


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[str]:
    """Turn pydantic error dicts into ordered field-level messages."""
    messages = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        kind = error.get("type", "")
        if kind == "value_error" and "error" in error.get("ctx", {}):
            messages.append(str(error["ctx"]["error"]))
        elif kind in ("missing", "string_too_short"):
            messages.append(f"{field} should not be empty")
        elif kind == "string_too_long":
            limit = error.get("ctx", {}).get("max_length")
            messages.append(f"{field} must be shorter than or equal to {limit} characters")
        elif kind.startswith("uuid"):
            messages.append(f"{field} must be a UUID")
        elif kind == "string_type":
            messages.append(f"{field} must be a string")
        elif kind in _NUMBER_ERRORS:
            messages.append(f"{field} must be a number conforming to the specified constraints")
        elif kind == "json_invalid":
            messages.append("body must be valid JSON")
        else:
            messages.append(f"{field}: {error.get('msg', 'is invalid')}")
    return messages


def bad_request_from_errors(errors: Iterable[dict[str, Any]]) -> BadRequestError:
    return BadRequestError(json.dumps(format_validation_errors(errors)))


# --- FastAPI handlers (registered in main.create_app) ---

async def farm_registry_exception_handler(request: Request, exc: FarmRegistryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI reports 422 for request validation; this API reports 400."""
    error = bad_request_from_errors(exc.errors())
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"name": "InternalServerError", "message": "Internal Server Error"},
    )
