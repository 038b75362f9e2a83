# =============================================================================
# Run Identifier Helpers
# =============================================================================
# Validation and resolution of the identifier that groups partial deliveries.
# =============================================================================

"""Run identifier validation and resolution."""

from typing import Optional

from .errors import EventValidationError
from .models import LineageEvent, RunIdSource

__all__ = [
    "validate_run_id",
    "run_id_from_job_name",
    "resolve_run_id",
]


def validate_run_id(value: object) -> str:
    """
    Validate a run identifier.

    Args:
        value: Candidate run identifier

    Returns:
        The identifier with surrounding whitespace removed

    Raises:
        EventValidationError: If the value is not a string or is blank
    """
    if not isinstance(value, str):
        raise EventValidationError(
            f"Run id must be a string, got {type(value).__name__}"
        )

    value = value.strip()
    if not value:
        raise EventValidationError("Run id cannot be empty or whitespace only")

    return value


def run_id_from_job_name(job_name: str) -> str:
    """
    Extract the Synapse run id embedded in an OpenLineage job name.

    Synapse Spark jobs are named ``<notebook>_<pool>_<runId>.<suffix>``; the
    run id is the last underscore-separated segment before the first dot.

    Args:
        job_name: OpenLineage ``job.name``

    Returns:
        The embedded run id

    Raises:
        EventValidationError: If no run id segment can be found

    Examples:
        >>> run_id_from_job_name("load_sales_pool01_1234.execute_insert")
        '1234'
    """
    if not isinstance(job_name, str) or not job_name.strip():
        raise EventValidationError("Job name is required to derive a run id")

    head = job_name.split(".", 1)[0]
    candidate = head.split("_")[-1]
    if not candidate.strip():
        raise EventValidationError(
            f"Cannot derive run id from job name '{job_name}'"
        )

    return candidate.strip()


def resolve_run_id(
    event: LineageEvent,
    run_id: Optional[str] = None,
    source: RunIdSource = RunIdSource.EVENT,
) -> str:
    """
    Determine the run identifier to group an event under.

    An explicit ``run_id`` always wins. Otherwise the identifier comes from
    ``event.run.runId`` or, with ``RunIdSource.JOB_NAME``, from the job name.

    Raises:
        EventValidationError: If no valid identifier is available
    """
    if run_id is not None:
        return validate_run_id(run_id)

    if source == RunIdSource.JOB_NAME:
        if event.job is None:
            raise EventValidationError("Event has no job section to derive a run id from")
        return run_id_from_job_name(event.job.name)

    return validate_run_id(event.run.run_id)
