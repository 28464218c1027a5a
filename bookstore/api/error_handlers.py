"""Error Handlers — global exception handlers producing the {status, message} envelope.

Invariants:
    - AppError → its own status code (default 500) and label (default "error")
    - RequestValidationError → 400 "fail", per-field messages joined with ". "
    - Starlette HTTPException (unmatched route, wrong method) → same envelope
    - Exception (catch-all) → 500 "error", never leaks internal details
    - Handlers hold no state and never mutate the exception they receive

Design Decisions:
    - Four-layer handler: operational (AppError), validation (Pydantic),
      routing (HTTPException), catch-all (Exception)
    - expose_details adds a "stack" key for local debugging only; the default
      envelope has exactly two keys
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.core.errors import AppError, DEFAULT_STATUS, FAIL_STATUS

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Something went very wrong"


def register_error_handlers(app: FastAPI, expose_details: bool = False) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_app_error_handler(app, expose_details)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app, expose_details)


def _register_app_error_handler(app: FastAPI, expose_details: bool) -> None:
    """Register operational error handler."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Handle all operational errors raised by handlers and services."""
        status_code = exc.resolved_status_code()
        log = logger.error if status_code >= 500 else logger.warning
        log(
            f"AppError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return _envelope_response(
            status_code, exc.to_response(), exc if expose_details else None,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "status": FAIL_STATUS,
                "message": build_validation_message(exc.errors()),
            },
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (404 unmatched, 405 wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = (
                f"{request.url.path} was not found on the server. "
                "Please check the Url"
            )
        else:
            message = str(exc.detail)
        label = FAIL_STATUS if exc.status_code < 500 else DEFAULT_STATUS
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": label, "message": message},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI, expose_details: bool) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return _envelope_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"status": DEFAULT_STATUS, "message": GENERIC_MESSAGE},
            exc if expose_details else None,
        )


def build_validation_message(errors) -> str:
    """Join per-field validation messages into one sentence list."""
    messages = []
    for e in errors:
        # Drop the "body"/"query"/"path" location prefix
        loc = [str(part) for part in e["loc"][1:]] or [str(p) for p in e["loc"]]
        messages.append(f"{'.'.join(loc)}: {e['msg']}")
    return ". ".join(messages)


def _envelope_response(
    status_code: int, body: dict, exc: BaseException | None,
) -> JSONResponse:
    if exc is not None:
        body = {
            **body,
            "stack": "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__),
            ),
        }
    return JSONResponse(status_code=status_code, content=body)
