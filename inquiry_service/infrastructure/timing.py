"""Duration measurement for repository calls and use cases."""
from __future__ import annotations

import inspect
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Awaitable, Callable, ParamSpec, TypeVar

import structlog

P = ParamSpec("P")
T = TypeVar("T")

log = structlog.stdlib.get_logger()


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


@contextmanager
def timed_operation(operation: str, **context: Any):
    """Log ``<operation>.completed`` at debug level with the block's duration.

    Yields a dict that holds ``elapsed_ms`` once the block exits, whether it
    raised or not.

    Example:
        with timed_operation("db.save", inquiry_id=inquiry.id) as timing:
            await session.flush()
    """
    timing: dict[str, Any] = {}
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing["elapsed_ms"] = _elapsed_ms(start)
        log.debug(f"{operation}.completed", elapsed_ms=timing["elapsed_ms"], **context)


def log_execution(
    operation: str, extract_context: Callable[..., dict[str, Any]] | None = None
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorate a coroutine function to log its start, completion and failure.

    ``extract_context`` receives the call's arguments and returns extra fields
    for every event. Exceptions are logged and re-raised unchanged.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"log_execution needs a coroutine function, got {func!r}")

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            context = extract_context(*args, **kwargs) if extract_context else {}
            log.info(f"{operation}.started", **context)
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"{operation}.failed",
                    elapsed_ms=_elapsed_ms(start),
                    error=str(e),
                    error_type=type(e).__name__,
                    **context,
                )
                raise
            log.info(f"{operation}.completed", elapsed_ms=_elapsed_ms(start), **context)
            return result

        return wrapper

    return decorator
