"""
Formatting utilities for streamprint.

Provides hex rendering and parsing for digests and 64-bit hashes.
"""

from __future__ import annotations

from typing import Optional


def format_hash(value: Optional[int]) -> Optional[str]:
    """
    Format a 64-bit hash as 16 lowercase hex digits.

    Examples:
        >>> format_hash(255)
        '00000000000000ff'
        >>> format_hash(None) is None
        True
    """
    if value is None:
        return None
    return f"{value:016x}"


def parse_hash(text: Optional[str]) -> Optional[int]:
    """
    Parse a hex string produced by format_hash.

    Examples:
        >>> parse_hash('00000000000000ff')
        255
    """
    if text is None or text == "":
        return None
    return int(text, 16)


def format_digest(digest: bytes) -> str:
    """
    Format a cryptographic digest as lowercase hex.

    Examples:
        >>> format_digest(b'\\x01\\xab')
        '01ab'
    """
    return digest.hex()


__all__ = ['format_hash', 'parse_hash', 'format_digest']
