"""Turn service errors into JSON error responses.

Status code mapping:
- ``validation`` → 400 Bad Request
- ``not_found`` → 404 Not Found
- ``conflict`` → 409 Conflict
- ``internal`` and any other exception → 500 Internal Server Error
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mycircle.errors import CRMError, ErrorKind
from mycircle.schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _handle_crm_error(request: Request, exc: CRMError) -> JSONResponse:
    if exc.kind is ErrorKind.INTERNAL:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(_STATUS[exc.kind], exc.kind.value.upper(), exc.message)


class CatchAllErrorMiddleware(BaseHTTPMiddleware):
    """Convert unhandled exceptions into the standard 500 error envelope."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.error(
                "Unhandled exception on %s %s",
                request.method,
                request.url.path,
                exc_info=True,
            )
            return _error_response(500, "INTERNAL", "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CRMError, _handle_crm_error)  # type: ignore[arg-type]
    app.add_middleware(CatchAllErrorMiddleware)
