# =============================================================================
# Consolidation Stage
# =============================================================================
# Applies the completion gate and merges accumulated run state into the
# triggering event.
# =============================================================================

"""
Consolidation stage: merge accumulated records into one lineage record.

Flow:
1. Return None unless both discovered key lists are non-empty
2. Download and deserialize every key concurrently
3. Replace each side of the event that produced at least one readable record
4. Return the event
"""

import logging
from typing import Optional, Type, TypeVar

from pydantic import ValidationError

from .concurrency import gather_bounded
from .discovery import DiscoveredKeys
from .errors import RecordDeserializationError
from .models import (
    DEFAULT_CONTAINER,
    DEFAULT_MAX_CONCURRENCY,
    Dataset,
    InputDataset,
    LineageEvent,
    OutputDataset,
    StrictnessMode,
)
from .store import ObjectStore

__all__ = ["consolidate"]

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Dataset)


def _reject(key: str, reason: str, exc: Exception, strictness: StrictnessMode) -> None:
    if strictness == StrictnessMode.FAIL:
        raise RecordDeserializationError(key, reason) from exc
    logger.warning(f"Dropping unreadable accumulated record {key}: {reason}")


async def _load_record(
    store: ObjectStore,
    container: str,
    key: str,
    model: Type[D],
    strictness: StrictnessMode,
) -> Optional[D]:
    # Undecodable bytes are a corrupt record, not a store failure
    try:
        return model.from_payload(await store.read(container, key))
    except UnicodeDecodeError as exc:
        _reject(key, f"payload is not UTF-8 text ({exc.reason})", exc, strictness)
    except ValidationError as exc:
        _reject(key, f"{exc.error_count()} validation error(s)", exc, strictness)
    return None


async def consolidate(
    store: ObjectStore,
    event: LineageEvent,
    discovered: DiscoveredKeys,
    *,
    container: str = DEFAULT_CONTAINER,
    strictness: StrictnessMode = StrictnessMode.DROP,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> Optional[LineageEvent]:
    """
    Merge a run's accumulated records into the triggering event.

    Args:
        store: Object store holding accumulated run state
        event: Triggering partial event; mutated in place when merged
        discovered: Keys found by the discovery stage
        container: Container (bucket) for run state
        strictness: DROP skips unreadable records, FAIL raises
        max_concurrency: Maximum downloads in flight

    Returns:
        The merged event, or None while the run has no inputs or no outputs

    Raises:
        RecordDeserializationError: In FAIL mode, if any record is unreadable
        ObjectNotFoundError: If a discovered key disappeared from the store
    """
    if not discovered.is_complete:
        logger.info(
            f"Run incomplete: {len(discovered.inputs)} inputs, "
            f"{len(discovered.outputs)} outputs accumulated"
        )
        return None

    tasks = [
        _load_record(store, container, key, InputDataset, strictness)
        for key in discovered.inputs
    ]
    tasks.extend(
        _load_record(store, container, key, OutputDataset, strictness)
        for key in discovered.outputs
    )
    records = await gather_bounded(tasks, max_concurrency)

    inputs = [r for r in records[: len(discovered.inputs)] if r is not None]
    outputs = [r for r in records[len(discovered.inputs):] if r is not None]

    # A side with nothing readable keeps the event's own partial list
    if inputs:
        event.inputs = inputs
    if outputs:
        event.outputs = outputs

    logger.info(
        f"Consolidated {len(inputs)}/{len(discovered.inputs)} inputs and "
        f"{len(outputs)}/{len(discovered.outputs)} outputs"
    )
    return event
