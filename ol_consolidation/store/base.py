# =============================================================================
# Object Store Port
# =============================================================================
# Abstract capability the consolidation engine depends on. The store is the
# only state shared between invocations.
# =============================================================================

from abc import ABC, abstractmethod

__all__ = ["ObjectStore"]


class ObjectStore(ABC):
    """
    Base class for durable key/blob stores used to accumulate run state.

    Keys are ``/``-delimited paths inside a container (bucket). Payloads are
    UTF-8 text. All operations are coroutines so that many of them can be
    in flight at once on a single event loop.
    """

    @abstractmethod
    async def exists(self, container: str, key: str) -> bool:
        """
        Check whether an object is currently stored at ``key``.

        Args:
            container: Container (bucket) name
            key: Object key

        Returns:
            True if an object exists at key
        """
        pass

    @abstractmethod
    async def write_if_absent(self, container: str, key: str, payload: str) -> None:
        """
        Store ``payload`` at ``key`` unless an object is already there.

        Safe to call concurrently for the same key. Colliding writers always
        carry identical content for a key, so implementations that cannot
        write conditionally may overwrite instead.

        Args:
            container: Container (bucket) name
            key: Object key
            payload: UTF-8 text to store
        """
        pass

    @abstractmethod
    async def read(self, container: str, key: str) -> str:
        """
        Read the payload stored at ``key``.

        Raises:
            ObjectNotFoundError: If no object exists at key
            UnicodeDecodeError: If the stored bytes are not UTF-8 text
        """
        pass

    @abstractmethod
    async def list_by_prefix(self, container: str, prefix: str) -> list[str]:
        """
        List every key currently stored under ``prefix``.

        The result is an unordered snapshot; writes in flight may be missing.

        Returns:
            Full object keys (prefix included)
        """
        pass
