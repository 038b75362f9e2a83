# =============================================================================
# OpenLineage Message Consolidation
# =============================================================================
# Accumulates partial OpenLineage deliveries per run in an object store and
# emits one merged lineage record once the run has inputs and outputs.
# See individual modules for detailed documentation.
# =============================================================================

"""
OpenLineage message consolidation.

Modules:
- models: Pydantic event models and settings
- content_key / keys: content addressing and store key layout
- store: ObjectStore port and in-memory implementation
- capture / discovery / consolidation: the three engine stages
- engine: MessageConsolidator entry point
- resources: Dagster resource backing the store with MinIO
"""

__version__ = "0.1.0"

from .capture import CaptureResult, capture_event
from .consolidation import consolidate
from .content_key import content_key, dataset_content_key
from .discovery import DiscoveredKeys, discover_run
from .engine import MessageConsolidator
from .errors import (
    ConsolidationError,
    EventValidationError,
    ObjectNotFoundError,
    RecordDeserializationError,
)
from .models import (
    ConsolidationSettings,
    DatasetReference,
    InputDataset,
    LineageEvent,
    OutputDataset,
    RunIdSource,
    StrictnessMode,
)
from .store import InMemoryObjectStore, ObjectStore

__all__ = [
    "CaptureResult",
    "capture_event",
    "consolidate",
    "content_key",
    "dataset_content_key",
    "DiscoveredKeys",
    "discover_run",
    "MessageConsolidator",
    "ConsolidationError",
    "EventValidationError",
    "ObjectNotFoundError",
    "RecordDeserializationError",
    "ConsolidationSettings",
    "DatasetReference",
    "InputDataset",
    "LineageEvent",
    "OutputDataset",
    "RunIdSource",
    "StrictnessMode",
    "InMemoryObjectStore",
    "ObjectStore",
]
