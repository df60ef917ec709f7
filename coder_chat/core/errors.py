from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coder_chat.models.chat import ErrorResponse


class ProxyError(Exception):
    """Error surfaced to the caller as ``{"error": ..., "details": ...}``."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(ProxyError):
    """Missing or malformed required fields in the request body."""

    status_code = 400


class UpstreamError(ProxyError):
    """The completion provider failed or returned something unusable."""

    status_code = 500


class StartupError(RuntimeError):
    """Required configuration is missing; the server must not start."""


def error_details(exc: BaseException) -> str:
    # openai.APIError carries a human readable `message`.
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or type(exc).__name__


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProxyError, proxy_error_handler)
