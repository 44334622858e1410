from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import (
    BadRequestError,
    BidNotFoundError,
    DomainError,
    ForbiddenError,
    TenderHistoryNotFoundError,
    TenderNotFoundError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

# checked in order, first isinstance match wins
STATUS_BY_ERROR = (
    (BadRequestError, 400),
    (UserNotFoundError, 401),
    (ForbiddenError, 403),
    (TenderHistoryNotFoundError, 404),
    (TenderNotFoundError, 404),
    (BidNotFoundError, 404),
)


def status_for(exc: DomainError) -> int:
    for cls, code in STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return code
    return 500


def _reason(status_code: int, reason: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"reason": reason})


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    logger.info(
        "domain error",
        extra={
            "path": request.url.path,
            "error": type(exc).__name__,
            "status_code": code,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
    return _reason(code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return _reason(400, "; ".join(parts) or "Invalid request")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _reason(exc.status_code, str(exc.detail))


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled error",
        extra={
            "path": request.url.path,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
    return _reason(500, "Internal server error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
