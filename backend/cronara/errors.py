"""Service error taxonomy shared by services and API handlers."""

from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy.exc import SQLAlchemyError
import structlog

logger = structlog.get_logger(__name__)


class ServiceError(Exception):
    """Base error rendered as {"error": message} by the API."""

    status_code = 400

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ServiceError):
    """Missing or malformed input. Raised before any store call."""


class StoreError(ServiceError):
    """The record store failed or returned no row where one was required."""


class NotFoundError(ServiceError):
    """A required row does not exist."""


class AuthError(ServiceError):
    """The request is not authenticated as the principal it acts for."""

    status_code = 401


class UnexpectedError(ServiceError):
    """Any uncaught exception while handling a request."""

    status_code = 500


@contextmanager
def store_operation(message: str, **log_context) -> Iterator[None]:
    """Convert record store failures into StoreError(message)."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.warning("store_operation_failed", operation=message, error=str(exc), **log_context)
        raise StoreError(message, detail=str(getattr(exc, "orig", None) or exc)) from exc
