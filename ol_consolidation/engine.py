# =============================================================================
# Message Consolidator
# =============================================================================
# Entry point tying the capture, discovery and consolidation stages together
# for one partial event delivery.
# =============================================================================

import logging
from typing import Optional

from .capture import capture_event
from .consolidation import consolidate
from .discovery import discover_run
from .errors import EventValidationError
from .models import ConsolidationSettings, LineageEvent
from .run_id import resolve_run_id
from .store import ObjectStore

__all__ = ["MessageConsolidator"]

logger = logging.getLogger(__name__)


class MessageConsolidator:
    """
    Accumulates partial lineage events per run and emits a merged record.

    The consolidator holds no run state of its own: everything is read from
    and written to the injected object store, so any number of independent
    processes can handle deliveries for the same run.

    Args:
        store: Object store holding accumulated run state
        settings: Engine settings; loaded from the environment when omitted
    """

    def __init__(
        self,
        store: ObjectStore,
        settings: Optional[ConsolidationSettings] = None,
    ):
        self.store = store
        self.settings = settings if settings is not None else ConsolidationSettings()

    async def consolidate_event(
        self,
        event: LineageEvent,
        run_id: Optional[str] = None,
    ) -> Optional[LineageEvent]:
        """
        Capture a partial event and try to consolidate its run.

        Args:
            event: Partial lineage event for one delivery
            run_id: Grouping identifier; resolved from the event when omitted

        Returns:
            The consolidated lineage record, or None while the run is still
            missing inputs or outputs

        Raises:
            EventValidationError: If the event or run id is unusable (no store
                calls are made)
            Exception: Store failures propagate unchanged; retrying the whole
                call is safe
        """
        if not isinstance(event, LineageEvent):
            raise EventValidationError(
                f"Expected a LineageEvent, got {type(event).__name__}"
            )
        run_id = resolve_run_id(event, run_id, self.settings.run_id_source)

        try:
            await capture_event(
                self.store,
                event,
                run_id,
                container=self.settings.container,
                max_concurrency=self.settings.max_concurrency,
            )
            discovered = await discover_run(
                self.store, run_id, container=self.settings.container
            )
            result = await consolidate(
                self.store,
                event,
                discovered,
                container=self.settings.container,
                strictness=self.settings.strictness,
                max_concurrency=self.settings.max_concurrency,
            )
        except Exception as exc:
            logger.error(f"Consolidation failed for run {run_id}: {exc}", exc_info=True)
            raise

        if result is None:
            logger.info(f"Run {run_id} is not complete yet; no record emitted")
        else:
            logger.info(
                f"Run {run_id} consolidated: {len(result.inputs)} inputs, "
                f"{len(result.outputs)} outputs"
            )
        return result
