# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models and settings for the consolidation engine.
# =============================================================================

"""
Data models for lineage consolidation.

This library provides:
- LineageEvent and its dataset records (inputs/outputs)
- DatasetReference: (namespace, name) identity of a dataset
- Configuration models
"""

# Event models
from .event import (
    DatasetReference,
    Dataset,
    InputDataset,
    OutputDataset,
    RunInfo,
    JobInfo,
    LineageEvent,
)

# Configuration models
from .config import (
    DEFAULT_CONTAINER,
    DEFAULT_MAX_CONCURRENCY,
    StrictnessMode,
    RunIdSource,
    ConsolidationSettings,
    MinIOSettings,
)

__all__ = [
    # Event models
    "DatasetReference",
    "Dataset",
    "InputDataset",
    "OutputDataset",
    "RunInfo",
    "JobInfo",
    "LineageEvent",
    # Configuration models
    "DEFAULT_CONTAINER",
    "DEFAULT_MAX_CONCURRENCY",
    "StrictnessMode",
    "RunIdSource",
    "ConsolidationSettings",
    "MinIOSettings",
]
