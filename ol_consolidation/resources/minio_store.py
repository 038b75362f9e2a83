# =============================================================================
# MinIO Object Store - S3-Compatible Accumulation Backend
# =============================================================================
# ObjectStore implementation over MinIO/S3, exposed as a Dagster resource.
# The minio client is blocking; calls run in a worker thread so many of them
# can be in flight from one event loop.
# =============================================================================

import asyncio
import io
from typing import Optional

from dagster import ConfigurableResource
from minio import Minio
from minio.error import S3Error
from pydantic import Field, PrivateAttr

from ..errors import ObjectNotFoundError
from ..models import MinIOSettings
from ..store import ObjectStore

__all__ = ["MinIOObjectStore"]

_MISSING_OBJECT_CODES = ("NoSuchKey", "NoSuchObject")


class MinIOObjectStore(ConfigurableResource):
    """
    Dagster resource storing accumulated run state in MinIO (S3-compatible).

    Implements the ObjectStore port:
    - exists: stat_object, missing key -> False
    - write_if_absent: put_object of UTF-8 JSON text
    - read: get_object, missing key -> ObjectNotFoundError
    - list_by_prefix: recursive list_objects

    One Minio client (and its connection pool) is shared by every call made
    through a resource instance.

    Attributes:
        endpoint: MinIO server endpoint (host:port)
        access_key: Access key for authentication
        secret_key: Secret key for authentication
        use_ssl: Whether to use SSL/TLS (default: False)
    """

    endpoint: str = Field(..., description="MinIO server endpoint (host:port)")
    access_key: str = Field(..., description="Access key for authentication")
    secret_key: str = Field(..., description="Secret key for authentication")
    use_ssl: bool = Field(False, description="Whether to use SSL/TLS")

    _client: Optional[Minio] = PrivateAttr(default=None)

    @classmethod
    def from_settings(cls, settings: Optional[MinIOSettings] = None) -> "MinIOObjectStore":
        """
        Build the resource from MINIO_* environment settings.

        Args:
            settings: Explicit settings; loaded from the environment when omitted

        Returns:
            Configured MinIOObjectStore
        """
        settings = settings or MinIOSettings()
        return cls(
            endpoint=settings.endpoint,
            access_key=settings.access_key,
            secret_key=settings.secret_key,
            use_ssl=settings.use_ssl,
        )

    def get_client(self) -> Minio:
        """
        Return the MinIO client, creating it on first use.

        Returns:
            Configured Minio client
        """
        if self._client is None:
            self._client = Minio(
                self.endpoint,
                access_key=self.access_key,
                secret_key=self.secret_key,
                secure=self.use_ssl,
            )
        return self._client

    @staticmethod
    def _raise_if_missing_bucket(exc: S3Error, container: str) -> None:
        if exc.code == "NoSuchBucket":
            raise RuntimeError(f"Container '{container}' does not exist") from exc

    def _exists(self, client: Minio, container: str, key: str) -> bool:
        try:
            client.stat_object(container, key)
            return True
        except S3Error as exc:
            if exc.code in _MISSING_OBJECT_CODES:
                return False
            self._raise_if_missing_bucket(exc, container)
            raise

    def _write(self, client: Minio, container: str, key: str, payload: str) -> None:
        data = payload.encode("utf-8")
        try:
            client.put_object(
                container,
                key,
                io.BytesIO(data),
                length=len(data),
                content_type="application/json",
            )
        except S3Error as exc:
            self._raise_if_missing_bucket(exc, container)
            raise

    def _read(self, client: Minio, container: str, key: str) -> str:
        try:
            response = client.get_object(container, key)
        except S3Error as exc:
            if exc.code in _MISSING_OBJECT_CODES:
                raise ObjectNotFoundError(container, key) from exc
            self._raise_if_missing_bucket(exc, container)
            raise

        try:
            data = response.read()
        finally:
            response.close()
            response.release_conn()

        return data.decode("utf-8")

    def _list(self, client: Minio, container: str, prefix: str) -> list[str]:
        try:
            objects = client.list_objects(container, prefix=prefix, recursive=True)
            return [obj.object_name for obj in objects if not obj.is_dir]
        except S3Error as exc:
            self._raise_if_missing_bucket(exc, container)
            raise

    # get_client() runs on the event loop thread, never in a worker

    async def exists(self, container: str, key: str) -> bool:
        """
        Check whether an object exists.

        Raises:
            RuntimeError: If the container (bucket) does not exist
            S3Error: For access or transport failures
        """
        return await asyncio.to_thread(self._exists, self.get_client(), container, key)

    async def write_if_absent(self, container: str, key: str, payload: str) -> None:
        """
        Upload a payload.

        S3 has no portable conditional put, so this relies on the caller's
        existence check; a lost race rewrites identical content.

        Raises:
            RuntimeError: If the container (bucket) does not exist
            S3Error: If upload fails
        """
        await asyncio.to_thread(self._write, self.get_client(), container, key, payload)

    async def read(self, container: str, key: str) -> str:
        """
        Download an object as UTF-8 text.

        Raises:
            ObjectNotFoundError: If the object does not exist
            UnicodeDecodeError: If the stored bytes are not UTF-8
            RuntimeError: If the container (bucket) does not exist
            S3Error: For access or transport failures
        """
        return await asyncio.to_thread(self._read, self.get_client(), container, key)

    async def list_by_prefix(self, container: str, prefix: str) -> list[str]:
        """
        List object keys under a prefix (recursive).

        Raises:
            RuntimeError: If the container (bucket) does not exist
            S3Error: For access or transport failures
        """
        return await asyncio.to_thread(self._list, self.get_client(), container, prefix)


# Dagster resources are pydantic models; register instead of inheriting
ObjectStore.register(MinIOObjectStore)
