"""
Propagation rule applied at every boundary an operation owns.

Known failures travel unchanged. Anything raised from outside the taxonomy
is normalized into an ApplicationException that embeds the original's text.
"""

from contextlib import contextmanager
from functools import wraps
from typing import Callable, Iterator, Optional
import inspect

from .exceptions import AppException, ApplicationException, describe_failure


def is_known_failure(error: object) -> bool:
    """Check whether a value belongs to the taxonomy."""
    return isinstance(error, AppException)


def normalize_error(error: BaseException, context: str = "") -> AppException:
    """Return known failures unchanged; wrap anything else as Application."""
    if isinstance(error, AppException):
        return error

    message = "Unexpected error"
    if context:
        message += f" in {context}"
    message += f": {describe_failure(error)}"

    return ApplicationException(
        message=message,
        trace=error.__traceback__,
        original_exception=error
    )


@contextmanager
def propagation_boundary(context: str = "") -> Iterator[None]:
    """
    Apply the propagation rule to the enclosed block.

    Usage:
        with propagation_boundary("profile lookup"):
            repository.load(user_id)
    """
    try:
        yield
    except AppException:
        raise
    except Exception as e:
        raise normalize_error(e, context) from e


def owns_failures(context: Optional[str] = None) -> Callable:
    """Decorator form of propagation_boundary for sync and async functions."""
    def decorator(func: Callable) -> Callable:
        label = context or func.__qualname__

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                with propagation_boundary(label):
                    return await func(*args, **kwargs)
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            with propagation_boundary(label):
                return func(*args, **kwargs)
        return wrapper

    return decorator
