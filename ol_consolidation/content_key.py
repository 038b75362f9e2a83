# =============================================================================
# Content Addressing
# =============================================================================
# Derives the store key suffix for a dataset from its (name, namespace).
# Keys are compared across independent invocations, so the byte encoding and
# digest format must never change.
# =============================================================================

"""
Content keys for dataset references.

A content key is the uppercase hex SHA-256 digest of the UTF-8 bytes of
``name + namespace`` (no separator). Uppercase hex matches the keys already
present in accumulated run state.
"""

import hashlib
import re

from .models import Dataset

__all__ = [
    "CONTENT_KEY_LENGTH",
    "content_key",
    "dataset_content_key",
    "validate_content_key",
]

CONTENT_KEY_LENGTH = 64

_CONTENT_KEY_PATTERN = re.compile(r"^[A-F0-9]{64}$")


def content_key(name: str, namespace: str) -> str:
    """
    Compute the content key for a dataset reference.

    Args:
        name: Dataset name (may be empty)
        namespace: Dataset namespace (may be empty)

    Returns:
        64-character uppercase hexadecimal digest

    Raises:
        TypeError: If name or namespace is not a string

    Examples:
        >>> content_key("", "")
        'E3B0C44298FC1C149AFBF4C8996FB92427AE41E4649B934CA495991B7852B855'
    """
    if not isinstance(name, str):
        raise TypeError(f"Dataset name must be a string, got {type(name).__name__}")
    if not isinstance(namespace, str):
        raise TypeError(
            f"Dataset namespace must be a string, got {type(namespace).__name__}"
        )

    digest = hashlib.sha256(f"{name}{namespace}".encode("utf-8"))
    return digest.hexdigest().upper()


def dataset_content_key(dataset: Dataset) -> str:
    """Content key for an input or output dataset record."""
    ref = dataset.reference
    return content_key(ref.name, ref.namespace)


def validate_content_key(value: str) -> str:
    """
    Validate content key format.

    Args:
        value: Candidate content key

    Returns:
        The key, unchanged

    Raises:
        TypeError: If the value is not a string
        ValueError: If the value is not 64 uppercase hex characters
    """
    if not isinstance(value, str):
        raise TypeError(f"Content key must be a string, got {type(value).__name__}")

    if not _CONTENT_KEY_PATTERN.match(value):
        raise ValueError(
            f"Invalid content key format: '{value}'. "
            f"Expected {CONTENT_KEY_LENGTH} uppercase hex characters"
        )

    return value
