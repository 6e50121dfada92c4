"""Exception handlers mapping adapter errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clair_adapter.consts import MIME_TYPE_ERROR
from clair_adapter.exceptions import AdapterError, ErrorKind
from clair_adapter.models.model_harbor import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.REGISTRY: 502,
    ErrorKind.LAYER_SUBMISSION: 502,
    ErrorKind.BACKEND: 502,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(message=message))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        media_type=MIME_TYPE_ERROR,
    )


async def handle_adapter_error(request: Request, exc: AdapterError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed ({exc.kind.value}): {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.kind.value}): {exc}")
    return error_response(status_code, str(exc))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON is a 400; a well-formed body with bad fields is a 422."""
    errors = exc.errors()
    logger.debug(f"Invalid request body for {request.url.path}: {errors}")
    if any(err["type"] == "json_invalid" for err in errors):
        return error_response(400, "invalid request: malformed JSON body")
    fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in errors)
    return error_response(422, f"invalid request: {fields}")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Internal server error on {request.method} {request.url.path}")
    return error_response(500, "Internal Server Error")


def install_handlers(app: FastAPI) -> None:
    """Installs the adapter's exception handlers on the FastAPI app."""
    handlers = {
        AdapterError: handle_adapter_error,
        RequestValidationError: handle_validation_error,
        Exception: handle_unexpected_error,
    }
    for exc, handler in handlers.items():
        app.add_exception_handler(exc, handler)  # type: ignore
