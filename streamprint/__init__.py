"""
streamprint
===========
Content fingerprinting and similarity classification for binary sources.

Features:
- MIME type sniffing from magic bytes, with Office container refinement
- Cryptographic digests for exact identity (SHA-2, SHA-3, legacy MD5/SHA1)
- Perceptual difference hash (dHash) for near-duplicate images
- SimHash for near-duplicate text
- Four-level similarity verdicts from configurable Hamming thresholds
"""

__version__ = "1.0.0"

from .models import Fingerprint, SimilarityVerdict, ThresholdConfig
from .config import FALLBACK_MIME_TYPE, DEFAULT_THRESHOLD_LOW, DEFAULT_THRESHOLD_HIGH
from .exceptions import (
    StreamprintError,
    UnsupportedAlgorithmError,
    SourceNotSeekableError,
    InvalidThresholdError,
    FingerprintCancelledError,
)
from .sniffing import Signature, DEFAULT_SIGNATURES, get_mime_type
from .hashing import (
    HashAlgorithm,
    calculate_cryptographic_hash,
    calculate_visual_hash,
    calculate_semantic_hash,
    to_fingerprint,
    to_image_hash,
    from_image_hash,
)
from .comparison import hamming_distance, compare_hashes, SimilarityClassifier
from .user_config import UserConfig, get_user_config

__all__ = [
    "Fingerprint",
    "SimilarityVerdict",
    "ThresholdConfig",
    "FALLBACK_MIME_TYPE",
    "DEFAULT_THRESHOLD_LOW",
    "DEFAULT_THRESHOLD_HIGH",
    "StreamprintError",
    "UnsupportedAlgorithmError",
    "SourceNotSeekableError",
    "InvalidThresholdError",
    "FingerprintCancelledError",
    "Signature",
    "DEFAULT_SIGNATURES",
    "get_mime_type",
    "HashAlgorithm",
    "calculate_cryptographic_hash",
    "calculate_visual_hash",
    "calculate_semantic_hash",
    "to_fingerprint",
    "to_image_hash",
    "from_image_hash",
    "hamming_distance",
    "compare_hashes",
    "SimilarityClassifier",
    "UserConfig",
    "get_user_config",
]
