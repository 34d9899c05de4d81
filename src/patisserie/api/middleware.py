"""Request-scoped logging context and the last-resort error envelope."""

from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from patisserie.api.responses import failure
from patisserie.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind ``request_id`` to every log line of the request.

    Exceptions no handler claimed are logged with their traceback and
    answered with a 500 envelope.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        clear_context()
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error while serving request")
            return failure("Something went wrong!", 500)
        finally:
            clear_context()
        return response
