import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error taxonomy: every failure a client can see is one of these
# ---------------------------------------------------------------------------

class ApiError(Exception):
    """
    Base class for failures rendered to the client as {"error": message}.
    The message is public; internal detail belongs in the exception chain and the logs.
    """
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingToken(ApiError):
    status_code = 401
    message = "Access token required"


class InvalidToken(ApiError):
    status_code = 403
    message = "Invalid token"


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid article"


class InvalidRequestBody(ApiError):
    status_code = 400
    message = "Invalid request body"


class NotFound(ApiError):
    status_code = 404
    message = "Article not found"


class StorageError(ApiError):
    status_code = 500
    message = "Storage error"


# ---------------------------------------------------------------------------
# Handlers: translate exceptions into JSON error bodies at the request boundary
# ---------------------------------------------------------------------------

async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(f"{request.method} {request.url.path} -> {exc.status_code} ({exc.message})")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or wrongly-typed fields; the field-level detail is not returned
    logger.info(f"{request.method} {request.url.path} -> 400 (request body rejected: {exc.errors()})")
    return JSONResponse(status_code=400, content={"error": InvalidRequestBody.message})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
