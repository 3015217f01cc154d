"""Concurrency helpers for the build pipeline.

Units of work run concurrently on one event loop. ``gather_settled`` waits
for every dispatched unit to finish before reporting failures.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Iterable
from typing import Any, TypeVar

from morph_core.errors import BuildError

T = TypeVar("T")


async def resolve(value: T | Awaitable[T]) -> T:
    """Await ``value`` if a collaborator returned an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


async def gather_settled(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and wait for all of them to settle.

    Failures are flattened: a failing awaitable that itself raised a
    BuildError contributes that error's failures, not the wrapper.

    Returns:
        Results in dispatch order.

    Raises:
        BuildError: If any awaitable raised an Exception.
        BaseException: Cancellation and interrupts are re-raised as-is.
    """
    results: list[Any] = await asyncio.gather(*aws, return_exceptions=True)

    failures: list[BaseException] = []
    for result in results:
        if isinstance(result, BuildError):
            failures.extend(result.failures)
        elif isinstance(result, Exception):
            failures.append(result)
        elif isinstance(result, BaseException):
            raise result

    if failures:
        raise BuildError(failures)
    return results
