# =============================================================================
# Store Key Layout
# =============================================================================
# Key naming for accumulated run state:
#   {runId}/Input/{contentKey}
#   {runId}/Output/{contentKey}
# =============================================================================

"""
Key layout utilities for accumulated run state.

This module provides functions for:
- Building the per-run input and output prefixes
- Joining a prefix with a content key
"""

from .content_key import validate_content_key

__all__ = [
    "INPUT_SEGMENT",
    "OUTPUT_SEGMENT",
    "input_prefix",
    "output_prefix",
    "build_key",
]

INPUT_SEGMENT = "Input"
OUTPUT_SEGMENT = "Output"


def _run_prefix(run_id: str, segment: str) -> str:
    if not run_id:
        raise ValueError("Run id cannot be empty when building a key prefix")
    return f"{run_id}/{segment}/"


def input_prefix(run_id: str) -> str:
    """
    Prefix under which a run's input records are stored.

    Examples:
        >>> input_prefix("R1")
        'R1/Input/'
    """
    return _run_prefix(run_id, INPUT_SEGMENT)


def output_prefix(run_id: str) -> str:
    """
    Prefix under which a run's output records are stored.

    Examples:
        >>> output_prefix("R1")
        'R1/Output/'
    """
    return _run_prefix(run_id, OUTPUT_SEGMENT)


def build_key(prefix: str, content_key: str) -> str:
    """
    Join a run prefix and a content key into a full object key.

    Args:
        prefix: Prefix from ``input_prefix`` or ``output_prefix``
        content_key: 64-character uppercase hex content key

    Returns:
        Object key (e.g., "R1/Input/E3B0...B855")

    Raises:
        ValueError: If prefix does not end with '/' or the content key is malformed
    """
    if not prefix.endswith("/"):
        raise ValueError(f"Invalid key prefix: '{prefix}'. Must end with '/'")
    return prefix + validate_content_key(content_key)
