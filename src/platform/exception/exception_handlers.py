"""
Every failure leaves the API as `{success: false, message, errors?}`.

- `CustomBaseError` subclasses carry their own status and message
- request validation failures are 400 with pydantic's error list
- a unique-constraint violation no repository translated is 409
- anything else is 500; its detail is exposed only in development
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.responses import Response

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def error_envelope(status_code: int, message: str, errors: Any = None) -> JSONResponse:
    body: dict[str, Any] = {'success': False, 'message': message}
    if errors is not None:
        body['errors'] = errors
    return JSONResponse(status_code=status_code, content=body)


def _internal_detail(exc: Exception) -> str | None:
    return f'{type(exc).__name__}: {exc}' if settings.is_development else None


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, CustomBaseError):
        return await unhandled_error_handler(request, exc)
    if exc.status_code >= 500:
        Logger.base.error(
            f'💥 [{exc.status_code}] {request.method} {request.url.path}: {exc.message}'
        )
    return error_envelope(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return error_envelope(
        status.HTTP_400_BAD_REQUEST, 'Invalid request body', jsonable_encoder(errors)
    )


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.warning(f'⚔️ [DB] Constraint violation on {request.url.path}: {exc}')
    return error_envelope(
        status.HTTP_409_CONFLICT, 'Conflict: resource already exists', _internal_detail(exc)
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(
        f'💥 Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
    )
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error', _internal_detail(exc)
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: domain_error_handler,
    RequestValidationError: validation_error_handler,
    IntegrityError: integrity_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
