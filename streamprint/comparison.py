"""
Similarity classification for 64-bit hashes and fingerprints.

Two hashes are compared by Hamming distance (number of differing bits):

    distance == 0          -> exact
    0 < distance <= low    -> duplicate
    low < distance <= high -> similar
    distance > high        -> different

Defaults (low=3, high=10) tolerate re-encoding and minor edits while
rejecting unrelated content.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .config import DEFAULT_THRESHOLD_LOW, DEFAULT_THRESHOLD_HIGH
from .hashing.cryptographic import HashAlgorithm
from .hashing.fingerprint import to_fingerprint
from .models import Fingerprint, SimilarityVerdict, ThresholdConfig
from .utils.validators import validate_hash_value

logger = logging.getLogger(__name__)


def hamming_distance(hash_a: int, hash_b: int) -> int:
    """
    Count the differing bits between two 64-bit hashes.

    Raises:
        ValueError: Either value is not a 64-bit unsigned integer

    Examples:
        >>> hamming_distance(0b1011, 0b0001)
        2
    """
    for value in (hash_a, hash_b):
        is_valid, error = validate_hash_value(value)
        if not is_valid:
            raise ValueError(error)
    return bin(hash_a ^ hash_b).count('1')


def classify_distance(distance: int, thresholds: ThresholdConfig) -> SimilarityVerdict:
    """Map a Hamming distance onto a verdict."""
    if distance == 0:
        return SimilarityVerdict.EXACT
    if distance <= thresholds.low:
        return SimilarityVerdict.DUPLICATE
    if distance <= thresholds.high:
        return SimilarityVerdict.SIMILAR
    return SimilarityVerdict.DIFFERENT


def compare_hashes(
    hash_a: Optional[int],
    hash_b: Optional[int],
    low: int = DEFAULT_THRESHOLD_LOW,
    high: int = DEFAULT_THRESHOLD_HIGH,
) -> SimilarityVerdict:
    """
    Classify the similarity of two 64-bit hashes.

    Args:
        hash_a: First hash (None compares as different)
        hash_b: Second hash (None compares as different)
        low: Largest distance reported as a duplicate
        high: Largest distance reported as similar

    Returns:
        SimilarityVerdict

    Examples:
        >>> compare_hashes(0xFF, 0xFF)
        <SimilarityVerdict.EXACT: 'exact'>
        >>> compare_hashes(0xFF, 0xFE)
        <SimilarityVerdict.DUPLICATE: 'duplicate'>
    """
    thresholds = ThresholdConfig(low=low, high=high)
    if hash_a is None or hash_b is None:
        return SimilarityVerdict.DIFFERENT
    return classify_distance(hamming_distance(hash_a, hash_b), thresholds)


class SimilarityClassifier:
    """
    Classifies hashes, fingerprints and sources with fixed thresholds.

    Usage:
        classifier = SimilarityClassifier(ThresholdConfig(low=2, high=8))
        verdict = classifier.compare_fingerprints(fp_a, fp_b)
    """

    def __init__(self, thresholds: Optional[ThresholdConfig] = None):
        """
        Initialize the classifier.

        Args:
            thresholds: Distance thresholds. Defaults to the user
                configuration (environment, config file, then 3/10).
        """
        self.thresholds = thresholds or ThresholdConfig.from_user_config()

    def compare(self, hash_a: Optional[int], hash_b: Optional[int]) -> SimilarityVerdict:
        """Classify two 64-bit hashes; None compares as different."""
        if hash_a is None or hash_b is None:
            return SimilarityVerdict.DIFFERENT
        return classify_distance(hamming_distance(hash_a, hash_b), self.thresholds)

    def _compare_channel(self, hash_a: Optional[int], hash_b: Optional[int]) -> SimilarityVerdict:
        # 0 is the "no signal" sentinel (undecodable image, empty text)
        if not hash_a or not hash_b:
            return SimilarityVerdict.DIFFERENT
        verdict = self.compare(hash_a, hash_b)
        # Same perceptual content with different bytes is a duplicate, not exact
        if verdict is SimilarityVerdict.EXACT:
            return SimilarityVerdict.DUPLICATE
        return verdict

    def compare_fingerprints(self, source: Fingerprint, target: Fingerprint) -> SimilarityVerdict:
        """
        Classify two fingerprints.

        Equal cryptographic hashes are an exact match. Otherwise the closer
        of the visual and semantic verdicts is returned, capped at duplicate.

        Args:
            source: Fingerprint to compare
            target: Fingerprint to compare against

        Returns:
            SimilarityVerdict
        """
        if source.cryptographic_hash == target.cryptographic_hash:
            return SimilarityVerdict.EXACT

        visual = self._compare_channel(source.visual_hash, target.visual_hash)
        semantic = self._compare_channel(source.semantic_hash, target.semantic_hash)
        return min(visual, semantic, key=lambda verdict: verdict.rank)

    def compare_sources(
        self,
        source: Any,
        target: Any,
        algorithm: Union[HashAlgorithm, str, None] = None,
    ) -> SimilarityVerdict:
        """
        Fingerprint two seekable sources and classify them.

        Both sources are returned to their original positions.
        """
        source_fingerprint = to_fingerprint(source, algorithm)
        target_fingerprint = to_fingerprint(target, algorithm)
        verdict = self.compare_fingerprints(source_fingerprint, target_fingerprint)
        logger.debug(
            f"Compared {source_fingerprint.hex_digest[:12]} with "
            f"{target_fingerprint.hex_digest[:12]}: {verdict.value}"
        )
        return verdict


__all__ = [
    'hamming_distance',
    'classify_distance',
    'compare_hashes',
    'SimilarityClassifier',
]
