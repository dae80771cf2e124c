"""
Side Effect Operation Types

Hooks that run around a primary operation are wrapped in one of two types so
the failure policy is part of the hook's declared type:

- BestEffort: failure is logged and discarded, the caller gets None
- Propagating: failure reaches the caller unchanged
"""

import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BestEffort(Generic[T]):
    """Fire-and-forget operation whose failure must not block the caller"""

    def __init__(self, operation: Callable[..., Awaitable[T]], name: Optional[str] = None):
        self.operation = operation
        self.name = name or getattr(operation, "__name__", repr(operation))

    async def __call__(self, *args, **kwargs) -> Optional[T]:
        try:
            return await self.operation(*args, **kwargs)
        except Exception:
            logger.warning("Best-effort operation %s failed", self.name, exc_info=True)
            return None

    def __repr__(self) -> str:
        return f"BestEffort({self.name})"


class Propagating(Generic[T]):
    """Operation whose failure is the caller's to handle"""

    def __init__(self, operation: Callable[..., Awaitable[T]], name: Optional[str] = None):
        self.operation = operation
        self.name = name or getattr(operation, "__name__", repr(operation))

    async def __call__(self, *args, **kwargs) -> T:
        return await self.operation(*args, **kwargs)

    def __repr__(self) -> str:
        return f"Propagating({self.name})"
