# catalog/core/errors.py
"""Exception handlers mapping every failure onto the error envelope."""
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.core.logging import get_logger
from catalog.core.responses import fail

logger = get_logger(__name__)

VALIDATION_MESSAGE = "The given data was invalid."

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def format_validation_errors(errors) -> dict[str, list[str]]:
    """Group pydantic errors by dotted field path.

    ``("body", "orders", 0, "id")`` becomes ``"orders.0.id"``.
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "__root__"
        grouped.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return grouped


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(fail(str(exc.detail))),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder(
                fail(VALIDATION_MESSAGE, errors=format_validation_errors(exc.errors()))
            ),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=fail("Internal server error", error=str(exc)),
        )
