"""
Hashing package for streamprint.

Provides the three content fingerprints and their aggregation.

Public API:
- HashAlgorithm: Supported cryptographic digests
- calculate_cryptographic_hash: Digest of a whole source (exact identity)
- calculate_visual_hash: 64-bit difference hash of an image
- calculate_semantic_hash: 64-bit SimHash of a text
- to_fingerprint: All three hashes over one seekable source
- to_image_hash / from_image_hash: Bridge to imagehash.ImageHash
- has_heif_support: Check if HEIC/HEIF decoding is available
"""

from __future__ import annotations

from .cryptographic import HashAlgorithm, calculate_cryptographic_hash
from .visual import (
    calculate_visual_hash,
    difference_hash,
    to_image_hash,
    from_image_hash,
)
from .semantic import (
    calculate_semantic_hash,
    tokenize,
    token_hash,
    simhash,
)
from .fingerprint import to_fingerprint

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    # Cryptographic
    'HashAlgorithm',
    'calculate_cryptographic_hash',
    # Visual
    'calculate_visual_hash',
    'difference_hash',
    'to_image_hash',
    'from_image_hash',
    # Semantic
    'calculate_semantic_hash',
    'tokenize',
    'token_hash',
    'simhash',
    # Aggregation
    'to_fingerprint',
    # Feature detection
    'has_heif_support',
]
