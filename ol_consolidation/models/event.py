# =============================================================================
# OpenLineage Event Models
# =============================================================================
# Pydantic models for the partial lineage events delivered per run:
# - DatasetReference: (namespace, name) identity of a dataset
# - InputDataset / OutputDataset: dataset records carried by an event
# - LineageEvent: the triggering event and, once merged, the consolidated record
# =============================================================================

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DatasetReference",
    "Dataset",
    "InputDataset",
    "OutputDataset",
    "RunInfo",
    "JobInfo",
    "LineageEvent",
]


# Unknown keys are kept so facets round-trip verbatim through the store
_OPEN_MODEL = ConfigDict(populate_by_name=True, extra="allow")


class DatasetReference(BaseModel):
    """
    Identity of an input or output dataset.

    Attributes:
        namespace: Dataset namespace (e.g., "abfss://raw@lake.dfs.core.windows.net")
        name: Dataset name within the namespace (e.g., "/sales/2024")
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(..., description="Dataset namespace")
    name: str = Field(..., description="Dataset name")


class Dataset(BaseModel):
    """
    Base OpenLineage dataset record.

    Only ``namespace`` and ``name`` are interpreted; every other field
    (including unknown ones) is preserved as received.
    """

    model_config = _OPEN_MODEL

    namespace: str = Field(..., description="Dataset namespace")
    name: str = Field(..., description="Dataset name")
    facets: Optional[dict[str, Any]] = Field(None, description="Dataset facets")

    @property
    def reference(self) -> DatasetReference:
        """The (namespace, name) identity of this record."""
        return DatasetReference(namespace=self.namespace, name=self.name)

    def to_payload(self) -> str:
        """
        Serialize the record to its canonical JSON payload.

        Uses wire (camelCase) names and omits optional fields the record was
        never given. Fields received as an explicit null are kept, so a
        record loaded from a delivery is stored exactly as it arrived.

        Returns:
            JSON text suitable for storing as a UTF-8 object
        """
        return self.model_dump_json(by_alias=True, exclude_unset=True)

    @classmethod
    def from_payload(cls, payload: str) -> "Dataset":
        """
        Deserialize a record previously written with ``to_payload``.

        Raises:
            pydantic.ValidationError: If the payload is not valid JSON, is
                JSON ``null`` or does not describe a dataset
        """
        return cls.model_validate_json(payload)


class InputDataset(Dataset):
    """Dataset read by a run."""

    input_facets: Optional[dict[str, Any]] = Field(
        None, alias="inputFacets", description="Input-specific facets"
    )


class OutputDataset(Dataset):
    """Dataset written by a run."""

    output_facets: Optional[dict[str, Any]] = Field(
        None, alias="outputFacets", description="Output-specific facets"
    )


class RunInfo(BaseModel):
    """Run section of an OpenLineage event."""

    model_config = _OPEN_MODEL

    run_id: str = Field(..., alias="runId", description="OpenLineage run id")
    facets: Optional[dict[str, Any]] = Field(None, description="Run facets")


class JobInfo(BaseModel):
    """Job section of an OpenLineage event."""

    model_config = _OPEN_MODEL

    namespace: str = Field(..., description="Job namespace")
    name: str = Field(..., description="Job name")
    facets: Optional[dict[str, Any]] = Field(None, description="Job facets")


class LineageEvent(BaseModel):
    """
    OpenLineage run event.

    As delivered, an event is a *partial* observation of a run: it carries
    whichever inputs and outputs were visible to the emitter at that moment.
    After consolidation the same object carries the full, deduplicated
    input and output lists accumulated for the run.

    Attributes:
        event_type: START, RUNNING, COMPLETE, ... (wire name ``eventType``)
        event_time: ISO-8601 timestamp, kept as text (wire name ``eventTime``)
        run: Run section holding the run id
        job: Job section (namespace and name)
        inputs: Input dataset records
        outputs: Output dataset records
        producer: URI of the emitting integration
        schema_url: OpenLineage schema URL (wire name ``schemaURL``)
    """

    model_config = _OPEN_MODEL

    event_type: Optional[str] = Field(None, alias="eventType")
    event_time: Optional[str] = Field(None, alias="eventTime")
    run: RunInfo
    job: Optional[JobInfo] = None
    inputs: list[InputDataset] = Field(default_factory=list)
    outputs: list[OutputDataset] = Field(default_factory=list)
    producer: Optional[str] = None
    schema_url: Optional[str] = Field(None, alias="schemaURL")
