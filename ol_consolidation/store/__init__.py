"""Object store port and in-process implementation."""

from .base import ObjectStore
from .memory import InMemoryObjectStore

__all__ = [
    "ObjectStore",
    "InMemoryObjectStore",
]
