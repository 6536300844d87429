"""Error Handlers - turn raised errors into the API's JSON error envelope.

Invariants:
    - Every error body has the shape {"error": {code, message, category, severity, ...}}
    - PunchlinesError keeps its own http_status; rule violations log at WARNING,
      infrastructure failures at ERROR
    - RequestValidationError -> 400 listing each offending field
    - Anything else -> 500 with a generic message; the traceback only goes to logs
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from punchlines.core.errors import ErrorSeverity, PunchlinesError

logger = logging.getLogger(__name__)


def _envelope(code: str, message: str, category: str, **extra) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category,
            "severity": extra.pop("severity", ErrorSeverity.ERROR.value),
            **extra,
        },
    }


async def handle_punchlines_error(request: Request, exc: PunchlinesError):
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level,
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "game_code": exc.context.game_code,
            "player_id": exc.context.player_id,
            "round_number": exc.context.round_number,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request body/query: {details}",
        extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data", "validation",
            details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}",
        exc_info=True,
        extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred", "internal",
            severity=ErrorSeverity.CRITICAL.value,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PunchlinesError, handle_punchlines_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
