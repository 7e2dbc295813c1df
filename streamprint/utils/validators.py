"""
Input validation for streamprint.

Provides capability checks for binary sources and range checks for
similarity thresholds and 64-bit hash values.
"""

from __future__ import annotations

from typing import Any

from ..config import HASH_BITS, HASH_MASK


def is_readable(source: Any) -> bool:
    """
    Check that a source can be read from.

    Args:
        source: File-like object

    Returns:
        True if the source exposes ``read`` and reports itself readable

    Examples:
        >>> import io
        >>> is_readable(io.BytesIO(b'abc'))
        True
        >>> is_readable(None)
        False
    """
    if source is None or not hasattr(source, 'read'):
        return False
    readable = getattr(source, 'readable', None)
    if readable is None:
        return True
    try:
        return bool(readable())
    except (OSError, ValueError):
        # Closed files raise ValueError
        return False


def is_seekable(source: Any) -> bool:
    """
    Check that a source supports random access.

    Args:
        source: File-like object

    Returns:
        True if the source exposes ``seek``/``tell`` and reports itself seekable
    """
    if source is None or not hasattr(source, 'seek') or not hasattr(source, 'tell'):
        return False
    seekable = getattr(source, 'seekable', None)
    if seekable is None:
        return True
    try:
        return bool(seekable())
    except (OSError, ValueError):
        return False


def validate_threshold(threshold: int) -> tuple[bool, str]:
    """
    Validate that a threshold value is within acceptable range.

    Args:
        threshold: Threshold value to validate (0-64 for 64-bit hashes)

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_threshold(10)
        (True, '')
        >>> validate_threshold(100)
        (False, 'Threshold must be between 0 and 64')
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        return False, "Threshold must be an integer"
    if not 0 <= threshold <= HASH_BITS:
        return False, f"Threshold must be between 0 and {HASH_BITS}"
    return True, ""


def validate_thresholds(low: int, high: int) -> tuple[bool, str]:
    """
    Validate a low/high threshold pair.

    Args:
        low: Maximum distance reported as a duplicate
        high: Maximum distance reported as similar

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_thresholds(3, 10)
        (True, '')
        >>> validate_thresholds(5, 5)
        (True, '')
        >>> validate_thresholds(10, 3)
        (False, 'Low threshold (10) must not exceed high threshold (3)')
    """
    for name, value in (('Low', low), ('High', high)):
        is_valid, error = validate_threshold(value)
        if not is_valid:
            return False, f"{name} threshold: {error}"

    if low > high:
        return False, f"Low threshold ({low}) must not exceed high threshold ({high})"

    return True, ""


def validate_hash_value(value: Any) -> tuple[bool, str]:
    """
    Validate that a value is a 64-bit unsigned integer.

    Examples:
        >>> validate_hash_value(0xFFFFFFFFFFFFFFFF)
        (True, '')
        >>> validate_hash_value(-1)
        (False, 'Hash must be between 0 and 2**64 - 1')
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, "Hash must be an integer"
    if not 0 <= value <= HASH_MASK:
        return False, "Hash must be between 0 and 2**64 - 1"
    return True, ""


__all__ = [
    'is_readable',
    'is_seekable',
    'validate_threshold',
    'validate_thresholds',
    'validate_hash_value',
]
