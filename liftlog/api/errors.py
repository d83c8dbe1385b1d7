"""Map service errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from liftlog.core.errors import LiftlogError

logger = logging.getLogger(__name__)


async def liftlog_error_handler(request: Request, exc: LiftlogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LiftlogError, liftlog_error_handler)
