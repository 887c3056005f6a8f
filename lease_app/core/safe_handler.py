import logging
from functools import wraps

from fastapi import HTTPException, Request

from .errors import BackendError, BackendUnavailable
from .friendly_msg import get_friendly_message

logger = logging.getLogger(__name__)


def _describe(request: Request | None) -> str:
    if request is None:
        return ""
    client_ip = request.client.host if request.client else "unknown"
    trace_id = request.headers.get("X-Request-ID", "none")
    return f"TraceID={trace_id} | {request.url.path} from {client_ip}"


def safe_handler(func):
    @wraps(func)
    async def wrapper(*args, **kwargs):
        request: Request | None = None
        for arg in list(args) + list(kwargs.values()):
            if isinstance(arg, Request):
                request = arg
                break

        try:
            return await func(*args, **kwargs)
        except HTTPException as e:
            logger.warning(f"[HTTPException] {_describe(request)}: {e.status_code} {e.detail}")
            raise
        except BackendUnavailable as e:
            logger.error(f"[Backend unavailable] {_describe(request)} in {func.__name__}: {e}")
            raise HTTPException(status_code=503, detail=get_friendly_message(e))
        except BackendError as e:
            logger.warning(
                f"[BackendError] {_describe(request)} in {func.__name__}: "
                f"{e.status_code} {e.detail}"
            )
            # the backend's own 5xx is a gateway failure from our side
            status_code = 502 if e.status_code >= 500 else e.status_code
            raise HTTPException(status_code=status_code, detail=e.detail)
        except Exception as e:
            logger.error(
                f"[Unhandled Error] {_describe(request)} in {func.__name__}: {e}",
                exc_info=True,
            )
            raise HTTPException(status_code=500, detail=get_friendly_message(e))

    return wrapper
