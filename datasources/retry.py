"""
Retry decorator for async connector methods.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, Tuple, Type, TypeVar, cast

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def retry(
    *,
    attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"retry expects a coroutine function, got {func!r}")

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            _attempt = 0
            _delay = delay
            while True:
                try:
                    return await func(*args, **kwargs)
                except exceptions as exc:
                    _attempt += 1
                    if _attempt >= attempts:
                        raise
                    log.info(
                        "%s failed (attempt %d/%d): %s; retrying in %.2fs",
                        func.__qualname__, _attempt, attempts, exc, _delay,
                    )
                    await asyncio.sleep(_delay)
                    _delay *= backoff

        return cast(F, wrapper)

    return decorator
