"""Dagster Resources - External Service Connections."""

from .minio_store import MinIOObjectStore

__all__ = [
    "MinIOObjectStore",
]
