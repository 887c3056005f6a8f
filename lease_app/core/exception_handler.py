import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ValidationErrorHandler:
    async def __call__(self, request: Request, exc: RequestValidationError):
        errors = {}
        for err in exc.errors():
            # drop the "body"/"query" prefix so keys match form field names
            loc = [str(part) for part in err.get("loc", ())[1:]] or ["__root__"]
            errors.setdefault(".".join(loc), str(err.get("msg")))

        logger.info("Rejected %s: %s", request.url.path, errors)
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": "Validation failed",
                "path": request.url.path,
                "details": errors,
            },
        )
