"""
Supervisory boundary that scopes a call or task and forwards any
otherwise-unhandled failure to the dispatcher before it terminates.
"""

from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Iterator, Optional, TypeVar
import logging

from .dispatcher import ErrorDispatcher

logger = logging.getLogger('boundary')

T = TypeVar('T')


class FailureBoundary:
    """Top-level capture region around a task or request lifecycle."""

    def __init__(self, dispatcher: ErrorDispatcher, name: str = "task"):
        self.dispatcher = dispatcher
        self.name = name

    def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> Optional[T]:
        """Run a callable; return its result, or None once a failure was dispatched."""
        try:
            return func(*args, **kwargs)
        except Exception as e:
            self._forward(e)
            return None

    async def run_async(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> Optional[T]:
        """Await a coroutine function inside the boundary. Cancellation passes through."""
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            self._forward(e)
            return None

    @contextmanager
    def guard(self) -> Iterator[None]:
        """Context manager form; the failure is dispatched and suppressed."""
        try:
            yield
        except Exception as e:
            self._forward(e)

    def _forward(self, error: Exception) -> None:
        logger.debug(f"Boundary '{self.name}' captured {type(error).__name__}")
        self.dispatcher.dispatch(error, error.__traceback__)
