from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.application.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitExceededError,
    UnauthorizedError,
    ValidationError,
)
from app.config import settings
from app.infrastructure.logging import get_logger

logger = get_logger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required"
SCHOOL_REGISTRATION_PATH = "/schools/registration"


def _message(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


def _field_name(loc: tuple | list) -> str | None:
    fields = [part for part in loc if part != "body" and isinstance(part, str)]
    return fields[-1] if fields else None


def _describe(error: dict) -> dict:
    return {"field": _field_name(error.get("loc", ())), "message": error.get("msg", "Invalid value")}


def _missing_fields_status(request: Request) -> int:
    if request.method == "POST" and request.url.path.rstrip("/").endswith(settings.api_prefix + SCHOOL_REGISTRATION_PATH):
        return settings.registration_missing_fields_status
    return status.HTTP_400_BAD_REQUEST


def validation_error_response(request: Request, errors: list[dict]) -> JSONResponse:
    details = [_describe(error) for error in errors]
    missing = [error for error in errors if error.get("type") == "missing"]
    if missing:
        return _message(_missing_fields_status(request), ALL_FIELDS_REQUIRED, errors=details)

    first = errors[0] if errors else {}
    field = _field_name(first.get("loc", ()))
    reason = first.get("msg", "Invalid request")
    if first.get("type") == "hostile_input" or field is None:
        message = reason
    else:
        message = f"Invalid {field}: {reason}"
    return _message(status.HTTP_400_BAD_REQUEST, message, errors=details)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = list(exc.errors())
        logger.info("request_validation_failed", error_types=[error.get("type") for error in errors])
        return validation_error_response(request, errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation(_: Request, exc: ValidationError):
        return _message(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(_: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": str(exc)},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(_: Request, exc: ForbiddenError):
        return _message(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(_: Request, exc: NotFoundError):
        return _message(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ConflictError)
    async def handle_conflict(_: Request, exc: ConflictError):
        return _message(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limited(_: Request, exc: RateLimitExceededError):
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"message": str(exc)},
            headers={"Retry-After": str(exc.retry_after)},
        )
