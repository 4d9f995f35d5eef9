from __future__ import annotations

import inspect
from typing import Any, Callable


async def call_hook(hook: Callable[..., Any] | None, *args: Any) -> None:
    """Invoke an optional callback that may be a plain function or a coroutine function."""
    if hook is None:
        return
    result = hook(*args)
    if inspect.isawaitable(result):
        await result
