"""
Shared pytest fixtures for consolidation tests.

Provides reusable event and dataset fixtures to avoid duplication across test files.
"""

import pytest

from ol_consolidation.models import (
    ConsolidationSettings,
    InputDataset,
    LineageEvent,
    OutputDataset,
)
from ol_consolidation.store import InMemoryObjectStore


TEST_CONTAINER = "test-container"


# =============================================================================
# Store / Settings Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory object store."""
    return InMemoryObjectStore()


@pytest.fixture
def settings():
    """Consolidation settings pointing at the test container."""
    return ConsolidationSettings(container=TEST_CONTAINER, max_concurrency=4)


# =============================================================================
# Dataset Fixtures
# =============================================================================

@pytest.fixture
def make_input():
    """Factory for InputDataset records on the raw zone."""
    def _make(name: str, namespace: str = "abfss://raw@lake.dfs.core.windows.net", **extra):
        return InputDataset(namespace=namespace, name=name, **extra)
    return _make


@pytest.fixture
def make_output():
    """Factory for OutputDataset records on the curated zone."""
    def _make(name: str, namespace: str = "abfss://curated@lake.dfs.core.windows.net", **extra):
        return OutputDataset(namespace=namespace, name=name, **extra)
    return _make


# =============================================================================
# Event Fixtures
# =============================================================================

@pytest.fixture
def valid_event_dict():
    """Complete OpenLineage COMPLETE event as delivered on the wire."""
    return {
        "eventType": "COMPLETE",
        "eventTime": "2024-01-01T12:00:00.000Z",
        "run": {
            "runId": "d3f5b1e2-0000-4000-8000-000000000001",
            "facets": {"spark_version": {"spark-version": "3.3.1"}},
        },
        "job": {
            "namespace": "adbworkspace,azuresynapsespark",
            "name": "load_sales_pool01_1234.execute_insert_into_hadoop_fs_relation_command",
        },
        "inputs": [
            {
                "namespace": "abfss://raw@lake.dfs.core.windows.net",
                "name": "/sales/2024",
                "facets": {"schema": {"fields": [{"name": "id", "type": "integer"}]}},
                "inputFacets": {},
            }
        ],
        "outputs": [
            {
                "namespace": "abfss://curated@lake.dfs.core.windows.net",
                "name": "/sales_clean/2024",
                "facets": {"lifecycleStateChange": {"lifecycleStateChange": "OVERWRITE"}},
                "outputFacets": {"outputStatistics": {"rowCount": 10}},
            }
        ],
        "producer": "https://github.com/OpenLineage/OpenLineage/tree/0.18.0/integration/spark",
        "schemaURL": "https://openlineage.io/spec/1-0-5/OpenLineage.json#/definitions/RunEvent",
    }


@pytest.fixture
def valid_event(valid_event_dict):
    """Complete LineageEvent model instance."""
    return LineageEvent.model_validate(valid_event_dict)


@pytest.fixture
def make_event():
    """Factory for partial events of one run."""
    def _make(inputs=(), outputs=(), run_id: str = "R1", job_name: str = "nb_pool_1234.task"):
        return LineageEvent(
            eventType="COMPLETE",
            run={"runId": run_id},
            job={"namespace": "synapse", "name": job_name},
            inputs=list(inputs),
            outputs=list(outputs),
        )
    return _make
