"""
Uniform result objects returned by every service operation.

Services raise ``ServiceError`` subclasses internally; the
``service_result`` decorator converts them (and any unexpected exception)
into a ``Result`` at the service boundary so nothing propagates to callers.
"""
import enum
import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    """Closed set of failure kinds a caller can branch on."""
    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"
    CONFLICT = "Conflict"
    UNKNOWN = "Unknown"


class ServiceError(Exception):
    """Expected failure raised inside a service method."""
    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ForbiddenError(ServiceError):
    kind = ErrorKind.FORBIDDEN


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


@dataclass
class Result(Generic[T]):
    ok: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    value: Optional[T] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(ok=False, error=message, kind=kind)


def service_result(fallback_error: str) -> Callable:
    """
    Wrap a service method so it always returns a ``Result``.

    The wrapped method returns its payload (or nothing) on success.
    ``ServiceError`` keeps its kind and message; anything else is logged,
    the storage session is rolled back, and the method fails with
    ``fallback_error`` as an ``Unknown`` error.

    Args:
        fallback_error: Message reported for unexpected failures
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., Result]:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs) -> Result:
            try:
                return Result.success(func(self, *args, **kwargs))
            except ServiceError as exc:
                if exc.kind == ErrorKind.FORBIDDEN:
                    logger.warning(f"{func.__qualname__} refused: {exc.message}")
                return Result.failure(exc.kind, exc.message)
            except Exception as exc:
                logger.error(f"{func.__qualname__} failed: {exc}", exc_info=True)
                self.storage.rollback()
                return Result.failure(ErrorKind.UNKNOWN, fallback_error)
        return wrapper
    return decorator
