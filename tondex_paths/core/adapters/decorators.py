from __future__ import annotations

from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

from tondex_paths.core.errors import TonDexError

T = TypeVar("T")


def error_message(exc: BaseException) -> str:
    """``"<ErrorClass>: <text>"`` so callers can branch on the failure kind."""
    return f"{exc.__class__.__name__}: {exc}"


def status_tuple(
    fn: Callable[..., Coroutine[Any, Any, T]],
) -> Callable[..., Coroutine[Any, Any, tuple[bool, T | str]]]:
    """Wrap an async adapter method to return ``(True, result)`` or ``(False, message)``.

    ``TonDexError`` covers bad input, revision mismatches and failed get-methods;
    those log at WARNING. Anything else is a bug and logs at ERROR with its
    traceback.
    """

    @wraps(fn)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> tuple[bool, T | str]:
        try:
            result = await fn(self, *args, **kwargs)
            return (True, result)
        except TonDexError as exc:
            self.logger.warning(f"{fn.__name__} failed: {exc}")
            return (False, error_message(exc))
        except Exception as exc:
            self.logger.opt(exception=exc).error(f"Error in {fn.__name__}: {exc}")
            return (False, error_message(exc))

    return wrapper  # type: ignore[return-value]
