"""Mapping of pipeline errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from treatment_assistant.errors import AssistantError, ErrorKind, ModelUnavailableError


logger = logging.getLogger(__name__)


STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.MALFORMED_MODEL_OUTPUT: 502,
    ErrorKind.SCHEMA_MISMATCH: 502,
    ErrorKind.PERSISTENCE_FAILURE: 500,
}

STATUS_BY_MODEL_REASON = {
    ModelUnavailableError.AUTHENTICATION: 401,
    ModelUnavailableError.TIMEOUT: 504,
    ModelUnavailableError.UPSTREAM: 502,
}


def status_code_for(error: AssistantError) -> int:
    """HTTP status for a surfaced error."""
    if isinstance(error, ModelUnavailableError):
        return STATUS_BY_MODEL_REASON.get(error.reason, 502)
    return STATUS_BY_KIND.get(error.kind, 500)


async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind.value}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_envelope())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AssistantError, assistant_error_handler)
