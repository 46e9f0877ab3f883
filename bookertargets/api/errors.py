"""Map domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bookertargets.dashboard import UnknownWidgetError
from bookertargets.exceptions import (
    DivisionByZeroError,
    DuplicatePeriodError,
    TargetError,
    TargetNotFoundError,
)


def status_for(error: Exception) -> int:
    """HTTP status code for a domain error."""
    if isinstance(error, (TargetNotFoundError, UnknownWidgetError)):
        return 404
    if isinstance(error, DuplicatePeriodError):
        return 409
    if isinstance(error, DivisionByZeroError):
        return 500
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers turning domain errors into JSON error responses."""

    async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})

    app.add_exception_handler(TargetError, handle_domain_error)
    app.add_exception_handler(UnknownWidgetError, handle_domain_error)
