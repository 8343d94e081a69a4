"""Composable "primary strategy with fallback" wrappers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def with_fallback(
    primary: Callable[..., Awaitable[T]],
    fallback: Callable[..., Awaitable[T]],
    *,
    accept: Callable[[T], bool] | None = None,
    label: str | None = None,
) -> Callable[..., Awaitable[T]]:
    """Run ``primary``; on an exception or a result ``accept`` rejects, run ``fallback``.

    Both callables receive the same arguments.
    """

    name = label or getattr(primary, "__name__", "operation")

    @wraps(primary)
    async def runner(*args: Any, **kwargs: Any) -> T:
        try:
            result = await primary(*args, **kwargs)
        except Exception as exc:
            logger.warning("%s failed, using fallback: %s", name, exc, exc_info=True)
            return await fallback(*args, **kwargs)
        if accept is not None and not accept(result):
            logger.warning("%s returned an unusable result %r, using fallback", name, result)
            return await fallback(*args, **kwargs)
        return result

    return runner


def constant(value: T) -> Callable[..., Awaitable[T]]:
    """Fallback that ignores its arguments and returns ``value``."""

    async def _constant(*_args: Any, **_kwargs: Any) -> T:
        return value

    return _constant


__all__ = ["constant", "with_fallback"]
