"""
Async access to EC2 operations.

:class:`AsyncMixin` gives each public operation of a service an awaitable
``a<name>`` twin that runs the synchronous boto3 call in a worker thread
via :func:`asyncio.to_thread`.  One await is one request; nothing is
retried or cancelled here.

Usage::

    compute = connect("eu-west-1")
    instances = await compute.aget_all_instances()
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Coroutine


def _async_twin(name: str) -> Callable[..., Coroutine[Any, Any, Any]]:
    """Build ``a<name>``, resolving ``name`` on the instance at call time."""

    async def twin(self: Any, *args: Any, **kwargs: Any) -> Any:
        return await asyncio.to_thread(getattr(self, name), *args, **kwargs)

    twin.__name__ = twin.__qualname__ = f"a{name}"
    twin.__doc__ = f"Awaitable :meth:`{name}`, run in a worker thread."
    return twin


class AsyncMixin:
    """Mixin that adds ``a<method>`` twins for a service's operations.

    Twins are created once, when the subclass is defined, for every public
    plain function in its body.  Because a twin looks its operation up by
    name, an override in a further subclass is what gets awaited.

    Attributes:
        async_operations: Names of the operations that received a twin.
    """

    async_operations: tuple[str, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        added = []
        for name, attr in list(vars(cls).items()):
            if name.startswith("_") or not inspect.isfunction(attr):
                continue
            if inspect.iscoroutinefunction(attr) or hasattr(cls, f"a{name}"):
                continue
            setattr(cls, f"a{name}", _async_twin(name))
            added.append(name)
        cls.async_operations = (*cls.async_operations, *added)
