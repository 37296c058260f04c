"""
Error types shared by the service and API layers, plus their HTTP mapping.

Two outcomes leave the normal request path:

``NotFound``
    No person exists for the requested id.  Rendered as ``404`` with an
    empty body.
``StorageError``
    Anything that went wrong talking to the database: the connection
    could not be opened, a constraint was violated (e.g. a duplicate
    id on create), a stored procedure is missing or was called with the
    wrong parameters, or a lookup returned more rows than it should.
    Rendered as a generic ``500``; the cause is only logged.
"""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class NotFound(Exception):
    """Raised when no person exists for ``person_id``."""

    def __init__(self, person_id: int) -> None:
        super().__init__(f"Person {person_id} not found")
        self.person_id = person_id


class StorageError(Exception):
    """Raised for any failure at the database boundary."""


async def not_found_handler(request: Request, exc: NotFound) -> Response:
    """Answer 404 with an empty body."""
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Log the storage failure and answer a generic 500."""
    logger.error(
        "Storage failure on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the handlers for ``NotFound`` and ``StorageError`` to ``app``."""
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
