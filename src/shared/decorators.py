from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def log_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Log any exception raised by the decorated client method, then re-raise.

    The log line carries the qualified method name, the owning client's
    ``log_context`` (store, channel or endpoint) when it has one, and the
    exception type and message. Nested decorated calls log once per level.

    Usage::

        @log_errors
        def query(self, query: str, response_model: type[M]) -> M: ...
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            context = getattr(args[0], "log_context", None) if args else None
            where = f"{func.__qualname__} {context}" if context else func.__qualname__
            logger.error(f"[{where}] {type(exc).__name__}: {exc}")
            raise

    return wrapper
