# =============================================================================
# Capture Stage
# =============================================================================
# Persists every input/output record of a partial event under its content
# key, skipping records the run has already accumulated.
# =============================================================================

"""Capture stage: write a partial event's datasets into run state."""

import logging
from dataclasses import dataclass

from .concurrency import gather_bounded
from .content_key import dataset_content_key
from .keys import build_key, input_prefix, output_prefix
from .models import DEFAULT_CONTAINER, DEFAULT_MAX_CONCURRENCY, Dataset, LineageEvent
from .store import ObjectStore

__all__ = ["CaptureResult", "capture_event"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptureResult:
    """Per-side counts of records written and skipped by one capture."""

    inputs_written: int = 0
    inputs_skipped: int = 0
    outputs_written: int = 0
    outputs_skipped: int = 0

    @property
    def written(self) -> int:
        return self.inputs_written + self.outputs_written

    @property
    def skipped(self) -> int:
        return self.inputs_skipped + self.outputs_skipped


async def _capture_record(
    store: ObjectStore,
    container: str,
    prefix: str,
    record: Dataset,
) -> bool:
    payload = record.to_payload()
    key = build_key(prefix, dataset_content_key(record))

    if await store.exists(container, key):
        logger.debug(f"Skipping already captured record: {key}")
        return False

    await store.write_if_absent(container, key, payload)
    logger.debug(f"Captured record: {key}")
    return True


async def capture_event(
    store: ObjectStore,
    event: LineageEvent,
    run_id: str,
    *,
    container: str = DEFAULT_CONTAINER,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> CaptureResult:
    """
    Persist the inputs and outputs of a partial event for a run.

    Each record is handled independently: serialize, derive its key, check
    existence, write if absent. All records are processed concurrently with
    at most ``max_concurrency`` store operations in flight. Re-capturing an
    event is a no-op apart from the existence checks.

    Args:
        store: Object store holding accumulated run state
        event: Partial lineage event
        run_id: Validated run identifier
        container: Container (bucket) for run state
        max_concurrency: Maximum records processed at once

    Returns:
        CaptureResult with written/skipped counts per side

    Raises:
        Exception: Any store failure, unchanged. The whole event should be
            retried; records already captured are skipped on retry.
    """
    in_prefix = input_prefix(run_id)
    out_prefix = output_prefix(run_id)

    tasks = [_capture_record(store, container, in_prefix, record) for record in event.inputs]
    tasks.extend(
        _capture_record(store, container, out_prefix, record) for record in event.outputs
    )

    written = await gather_bounded(tasks, max_concurrency)
    input_flags = written[: len(event.inputs)]
    output_flags = written[len(event.inputs):]

    result = CaptureResult(
        inputs_written=sum(input_flags),
        inputs_skipped=len(input_flags) - sum(input_flags),
        outputs_written=sum(output_flags),
        outputs_skipped=len(output_flags) - sum(output_flags),
    )
    logger.info(
        f"Captured run {run_id}: {result.written} written, {result.skipped} skipped "
        f"({len(event.inputs)} inputs, {len(event.outputs)} outputs)"
    )
    return result
