"""
FastAPI wiring for ValidationError.

Endpoints (or repositories) translate database errors with
QueryErrorTranslator.translate_errors() / raise_for(); this handler only renders the
resulting ValidationError. The payload comes from ValidationError.to_payload() and never
contains SQL text, bindings or engine codes.

    from fastapi import FastAPI
    from dbvalidation.api import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..exceptions.base import ValidationError

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """
    422 Unprocessable Entity.
    Payload: {"message": "...", "errors": {"email": ["..."]}}
    """
    logger.info("ValidationError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
