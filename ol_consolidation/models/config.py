# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides Pydantic Settings models for the consolidation engine:
# - ConsolidationSettings: container, fan-out bound, corrupt-record policy
# - MinIOSettings: connection settings for MinIOObjectStore
# =============================================================================

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "DEFAULT_CONTAINER",
    "DEFAULT_MAX_CONCURRENCY",
    "StrictnessMode",
    "RunIdSource",
    "ConsolidationSettings",
    "MinIOSettings",
]


DEFAULT_CONTAINER = "ol-synapsemessages"
DEFAULT_MAX_CONCURRENCY = 16


class StrictnessMode(str, Enum):
    """What consolidation does with an accumulated record it cannot read."""

    DROP = "drop"
    FAIL = "fail"


class RunIdSource(str, Enum):
    """Where the engine takes the run identifier from when none is passed."""

    EVENT = "event"
    JOB_NAME = "job_name"


# =============================================================================
# Consolidation Settings
# =============================================================================

class ConsolidationSettings(BaseSettings):
    """
    Configuration for the message consolidation engine.

    Maps environment variables with prefix "OL_CONSOLIDATION_":
    - OL_CONSOLIDATION_CONTAINER → container
    - OL_CONSOLIDATION_MAX_CONCURRENCY → max_concurrency
    - OL_CONSOLIDATION_STRICTNESS → strictness
    - OL_CONSOLIDATION_RUN_ID_SOURCE → run_id_source

    Attributes:
        container: Bucket/container holding accumulated records
            (default: "ol-synapsemessages")
        max_concurrency: Upper bound on in-flight store calls per stage
            (default: 16)
        strictness: "drop" skips unreadable records, "fail" raises
            (default: "drop")
        run_id_source: "event" uses run.runId, "job_name" derives the run id
            from a Synapse job name (default: "event")
    """

    container: str = Field(
        DEFAULT_CONTAINER,
        min_length=1,
        validation_alias="OL_CONSOLIDATION_CONTAINER",
        description="Container holding accumulated records",
    )
    max_concurrency: int = Field(
        DEFAULT_MAX_CONCURRENCY,
        ge=1,
        validation_alias="OL_CONSOLIDATION_MAX_CONCURRENCY",
        description="Maximum concurrent store operations per stage",
    )
    strictness: StrictnessMode = Field(
        StrictnessMode.DROP,
        validation_alias="OL_CONSOLIDATION_STRICTNESS",
        description="Policy for unreadable accumulated records",
    )
    run_id_source: RunIdSource = Field(
        RunIdSource.EVENT,
        validation_alias="OL_CONSOLIDATION_RUN_ID_SOURCE",
        description="Where to read the run identifier from",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )


# =============================================================================
# MinIO Settings (S3-Compatible Object Storage)
# =============================================================================

class MinIOSettings(BaseSettings):
    """
    Connection settings for the MinIO store that holds run state.

    Read by MinIOObjectStore.from_settings. Variable names follow the MinIO
    server image, so one .env serves both the server and this library:
    MINIO_ENDPOINT, MINIO_ROOT_USER, MINIO_ROOT_PASSWORD, MINIO_USE_SSL.
    """

    endpoint: str = Field(..., validation_alias="MINIO_ENDPOINT", description="host:port of the MinIO server")
    access_key: str = Field(..., validation_alias="MINIO_ROOT_USER", description="Access key")
    secret_key: str = Field(..., validation_alias="MINIO_ROOT_PASSWORD", description="Secret key")
    use_ssl: bool = Field(False, validation_alias="MINIO_USE_SSL", description="Connect over TLS")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
