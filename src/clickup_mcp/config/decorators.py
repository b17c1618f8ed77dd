"""Logging and timing decorators for core coroutines.

Both decorators wrap ``async def`` callables; the dependency service and
its components are all coroutine based.
"""

import functools
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")

AsyncFn = Callable[..., Awaitable[T]]


def log_call(
    logger_name: Optional[str] = None,
) -> Callable[[AsyncFn], AsyncFn]:
    """
    Decorator to log coroutine calls with structured data.

    Args:
        logger_name: Optional logger name (defaults to function module)
    """

    def decorator(func: AsyncFn) -> AsyncFn:
        log = logging.getLogger(logger_name or func.__module__)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            log.debug(
                f"Calling {func.__name__}",
                extra={
                    "function": func.__name__,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Error in {func.__name__}: {e}",
                    extra={
                        "function": func.__name__,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
                raise
            log.debug(
                f"Completed {func.__name__}",
                extra={"function": func.__name__, "success": True},
            )
            return result

        return wrapper

    return decorator


def timed(
    metric_name: Optional[str] = None,
) -> Callable[[AsyncFn], AsyncFn]:
    """
    Decorator to measure and log coroutine execution time.

    Args:
        metric_name: Optional metric name (defaults to function name)
    """

    def decorator(func: AsyncFn) -> AsyncFn:
        name = metric_name or func.__name__
        log = logging.getLogger(func.__module__)

        def _emit(start: float, error: Optional[Exception]) -> None:
            extra: dict = {
                "metric": name,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                "success": error is None,
            }
            if error is not None:
                extra["error"] = str(error)
            log.info(f"Timer: {name}", extra=extra)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _emit(start, e)
                raise
            _emit(start, None)
            return result

        return wrapper

    return decorator
