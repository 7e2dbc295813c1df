"""
Utilities package for streamprint.

Provides:
- formatters: Hex formatting for digests and 64-bit hashes
- validators: Source capability checks and threshold validation
"""

from __future__ import annotations

from . import formatters
from . import validators

from .formatters import format_hash, parse_hash, format_digest
from .validators import (
    is_readable,
    is_seekable,
    validate_threshold,
    validate_thresholds,
    validate_hash_value,
)

__all__ = [
    # Submodules
    'formatters',
    'validators',
    # Formatters
    'format_hash',
    'parse_hash',
    'format_digest',
    # Validators
    'is_readable',
    'is_seekable',
    'validate_threshold',
    'validate_thresholds',
    'validate_hash_value',
]
