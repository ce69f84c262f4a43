"""
Awaitable variants of the blocking provider services.

The ``ovh`` client is synchronous, so the gateway and every service built on
it are too. :class:`AsyncMixin` gives each service an ``a<method>`` twin that
runs the blocking call in a worker thread; the pipeline awaits those twins
one stage at a time.

    prober = Prober(gateway)
    server_time = await prober.acheck_connectivity()
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


def async_wrap(
    fn: Callable[..., T],
) -> Callable[..., Coroutine[Any, Any, T]]:
    """Run *fn* through :func:`asyncio.to_thread` when awaited."""

    @functools.wraps(fn)
    async def _in_thread(*args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(fn, *args, **kwargs)

    return _in_thread


class AsyncMixin:
    """Adds ``a<name>`` for each public plain function a subclass defines.

    Only the subclass's own namespace is scanned, so an abstract method on a
    base class never gets a twin bound to the abstract body. Static methods,
    coroutines and names that already have a twin are left alone.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name, attr in list(vars(cls).items()):
            if name.startswith("_") or not inspect.isfunction(attr):
                continue
            if inspect.iscoroutinefunction(attr) or hasattr(cls, f"a{name}"):
                continue
            setattr(cls, f"a{name}", async_wrap(attr))
