import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from .friendly_msg import DEFAULT_MESSAGE

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line for errors raised outside a ``safe_handler`` route."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled server error on %s %s: %s", request.method, request.url.path, e
            )
            return JSONResponse(
                {"success": False, "error": DEFAULT_MESSAGE, "path": request.url.path},
                status_code=500,
            )
