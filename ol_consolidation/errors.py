# =============================================================================
# Consolidation Errors
# =============================================================================
# Exceptions raised by the consolidation engine. Transient store errors
# (minio.error.S3Error, network errors) are not wrapped and propagate as-is.
# =============================================================================

__all__ = [
    "ConsolidationError",
    "EventValidationError",
    "ObjectNotFoundError",
    "RecordDeserializationError",
]


class ConsolidationError(Exception):
    """Base class for consolidation engine errors."""


class EventValidationError(ConsolidationError, ValueError):
    """The event or run identifier cannot be grouped. Raised before any store call."""


class ObjectNotFoundError(ConsolidationError, KeyError):
    """No object is stored at the requested key."""

    def __init__(self, container: str, key: str):
        self.container = container
        self.key = key
        super().__init__(f"Object '{key}' not found in container '{container}'")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class RecordDeserializationError(ConsolidationError):
    """An accumulated record could not be read back (strict mode only)."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Accumulated record '{key}' is unreadable: {reason}")
