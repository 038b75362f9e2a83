# =============================================================================
# Discovery Stage
# =============================================================================
# Lists everything accumulated so far for a run, by this or earlier
# invocations.
# =============================================================================

import asyncio
from dataclasses import dataclass, field

from .keys import input_prefix, output_prefix
from .models import DEFAULT_CONTAINER
from .store import ObjectStore

__all__ = ["DiscoveredKeys", "discover_run"]


@dataclass
class DiscoveredKeys:
    """Snapshot of the input and output keys accumulated for a run."""

    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True once at least one input and one output have been accumulated."""
        return bool(self.inputs) and bool(self.outputs)


async def discover_run(
    store: ObjectStore,
    run_id: str,
    *,
    container: str = DEFAULT_CONTAINER,
) -> DiscoveredKeys:
    """
    List the input and output keys stored for a run.

    Either list may be empty. Writes racing with the listing may be missed;
    a later invocation picks them up.
    """
    inputs, outputs = await asyncio.gather(
        store.list_by_prefix(container, input_prefix(run_id)),
        store.list_by_prefix(container, output_prefix(run_id)),
    )
    return DiscoveredKeys(inputs=list(inputs), outputs=list(outputs))
