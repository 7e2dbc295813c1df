"""
Data models for streamprint.

Contains the fingerprint value object, the similarity verdict enumeration
and the threshold configuration used to classify Hamming distances.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import DEFAULT_THRESHOLD_LOW, DEFAULT_THRESHOLD_HIGH
from .exceptions import InvalidThresholdError
from .utils.formatters import format_hash, parse_hash, format_digest
from .utils.validators import validate_thresholds


class SimilarityVerdict(Enum):
    """
    Outcome of comparing two hashes or fingerprints.

    Ordered from closest to furthest match.
    """
    EXACT = "exact"
    DUPLICATE = "duplicate"
    SIMILAR = "similar"
    DIFFERENT = "different"

    @property
    def rank(self) -> int:
        """Position in closeness order (0 = exact)."""
        return _VERDICT_ORDER.index(self)

    def is_match(self) -> bool:
        """True for every verdict except DIFFERENT."""
        return self is not SimilarityVerdict.DIFFERENT


_VERDICT_ORDER = (
    SimilarityVerdict.EXACT,
    SimilarityVerdict.DUPLICATE,
    SimilarityVerdict.SIMILAR,
    SimilarityVerdict.DIFFERENT,
)


@dataclass(frozen=True)
class ThresholdConfig:
    """
    Hamming distance thresholds for 64-bit hash comparison.

    Attributes:
        low: Largest non-zero distance classified as a duplicate
        high: Largest distance classified as similar

    ``low == high`` is allowed and leaves the similar band empty.
    """
    low: int = DEFAULT_THRESHOLD_LOW
    high: int = DEFAULT_THRESHOLD_HIGH

    def __post_init__(self):
        is_valid, error = validate_thresholds(self.low, self.high)
        if not is_valid:
            raise InvalidThresholdError(error)

    @classmethod
    def from_user_config(cls) -> 'ThresholdConfig':
        """Build thresholds from environment variables and the config file."""
        from .user_config import get_user_config

        config = get_user_config()
        return cls(low=config.threshold_low, high=config.threshold_high)


@dataclass(frozen=True)
class Fingerprint:
    """
    Content fingerprint of one binary source.

    Attributes:
        cryptographic_hash: Digest of the full byte stream (exact identity)
        visual_hash: 64-bit difference hash, 0 if the source is not an image
        semantic_hash: 64-bit SimHash over the decoded text
    """
    cryptographic_hash: bytes
    visual_hash: Optional[int] = None
    semantic_hash: Optional[int] = None

    @property
    def hex_digest(self) -> str:
        """Return the cryptographic hash as lowercase hex."""
        return format_digest(self.cryptographic_hash)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'cryptographic_hash': self.hex_digest,
            'visual_hash': format_hash(self.visual_hash),
            'semantic_hash': format_hash(self.semantic_hash),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Fingerprint':
        """Create Fingerprint from dictionary."""
        return cls(
            cryptographic_hash=bytes.fromhex(data['cryptographic_hash']),
            visual_hash=parse_hash(data.get('visual_hash')),
            semantic_hash=parse_hash(data.get('semantic_hash')),
        )
