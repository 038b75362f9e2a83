# =============================================================================
# In-Memory Object Store
# =============================================================================
# Process-local ObjectStore for tests and single-process use.
# =============================================================================

import asyncio

from ..errors import ObjectNotFoundError
from .base import ObjectStore

__all__ = ["InMemoryObjectStore"]


class InMemoryObjectStore(ObjectStore):
    """
    Dictionary-backed object store with true write-if-absent semantics.

    Every operation yields to the event loop once before touching state so
    that concurrent callers interleave the way they would against a remote
    store.

    Attributes:
        write_count: Number of writes that actually stored a payload
    """

    def __init__(self) -> None:
        self._objects: dict[tuple[str, str], str] = {}
        self.write_count = 0

    async def exists(self, container: str, key: str) -> bool:
        await asyncio.sleep(0)
        return (container, key) in self._objects

    async def write_if_absent(self, container: str, key: str, payload: str) -> None:
        await asyncio.sleep(0)
        if (container, key) in self._objects:
            return
        self._objects[(container, key)] = payload
        self.write_count += 1

    async def read(self, container: str, key: str) -> str:
        await asyncio.sleep(0)
        try:
            return self._objects[(container, key)]
        except KeyError:
            raise ObjectNotFoundError(container, key) from None

    async def list_by_prefix(self, container: str, prefix: str) -> list[str]:
        await asyncio.sleep(0)
        return [
            key
            for (stored_container, key) in self._objects
            if stored_container == container and key.startswith(prefix)
        ]

    def put(self, container: str, key: str, payload: str) -> None:
        """Store a payload unconditionally (seeding fixtures, simulating corruption)."""
        self._objects[(container, key)] = payload
