"""Map domain and framework exceptions to failure envelopes.

Unexpected exceptions are handled by
:class:`~patisserie.api.middleware.RequestContextMiddleware`.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidDataError, ObjectNotFoundError, ValidationError

from patisserie.api.responses import failure
from patisserie.auth import AuthenticationError, PermissionDeniedError
from patisserie.utils.ratelimit import RateLimitExceeded


def first_message(messages) -> str:
    """The first human readable error out of a Protean ``messages`` dict."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, (list, tuple)):
                if value:
                    return str(value[0])
            elif value:
                return str(value)
    elif messages:
        return str(messages)
    return "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    @app.exception_handler(InvalidDataError)
    async def validation_error_handler(request: Request, exc: ValidationError | InvalidDataError) -> JSONResponse:
        return failure(first_message(exc.messages), 400, errors=exc.messages)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        return failure(message, 400, errors=errors)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return failure(str(exc) or "Resource not found", 404)

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
        return failure(exc.message, 401)

    @app.exception_handler(PermissionDeniedError)
    async def permission_handler(request: Request, exc: PermissionDeniedError) -> JSONResponse:
        return failure(exc.message, 403)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        return failure(exc.message, 429, retryAfter=exc.retry_after)
