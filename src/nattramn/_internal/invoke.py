"""Call page handlers uniformly, whether they are ``def`` or ``async def``."""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
