"""
Relay error taxonomy.

Services raise these; the handlers registered in `register_exception_handlers`
turn them into the JSON bodies the client app expects.
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tripcompanion.core.logger import logs


class RelayError(Exception):
    """Base class for every failure the relay reports to its caller."""
    status_code: int = 500

    def __init__(
        self,
        error: Any,
        *,
        reply: Optional[str] = None,
        details: Any = None,
        status_code: Optional[int] = None,
        **extra: Any,
    ):
        super().__init__(error)
        self.error = error
        self.reply = reply
        self.details = details
        self.extra = extra
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict:
        body: dict[str, Any] = {"error": self.error}
        if self.reply is not None:
            body["reply"] = self.reply
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class ValidationError(RelayError):
    """A required input field is missing."""
    status_code = 400


class ConfigurationError(RelayError):
    """No usable provider is configured."""
    status_code = 500


class UpstreamContractError(RelayError):
    """The upstream answered, but not in the expected shape."""
    status_code = 500


class UpstreamTransportError(RelayError):
    """Network failure, timeout, non-2xx or a non-OK upstream status."""
    status_code = 500


class NotFoundError(RelayError):
    status_code = 404


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logs.log(logging.WARNING, f"Rejected request to {request.url.path}", extra={"errors": exc.errors()})
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request parameters", "details": str(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logs.log(logging.ERROR, f"Unhandled error on {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def upstream_error_body(exc: Exception) -> Any:
    """Raw JSON (or text) body of a failed upstream response, if one was received."""
    response = getattr(exc, "response", None)
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None


def upstream_error_message(exc: Exception) -> str:
    """The upstream's own `error.message` when present, else the local message."""
    response = getattr(exc, "response", None)
    body = upstream_error_body(exc)
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    if response is not None:
        # httpx puts the full URL (query-string keys included) in str(exc)
        return f"Request failed with status code {response.status_code}"
    return str(exc)
