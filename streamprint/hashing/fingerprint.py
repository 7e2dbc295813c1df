"""
Fingerprint aggregation: all three hashes over one seekable source.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from ..exceptions import SourceNotSeekableError
from ..models import Fingerprint
from ..utils.formatters import format_hash
from ..utils.validators import is_seekable
from .cryptographic import HashAlgorithm, CancelCheck, check_cancelled, calculate_cryptographic_hash
from .semantic import TextDecoder, calculate_semantic_hash
from .visual import ImageDecoder, calculate_visual_hash

_logger = logging.getLogger(__name__)


def _resolve_algorithm(algorithm: Union[HashAlgorithm, str, None]) -> HashAlgorithm:
    if algorithm is None:
        from ..user_config import get_user_config
        algorithm = get_user_config().hash_algorithm
    return HashAlgorithm.parse(algorithm)


def to_fingerprint(
    source: Any,
    algorithm: Union[HashAlgorithm, str, None] = None,
    cancel_check: Optional[CancelCheck] = None,
    image_decoder: Optional[ImageDecoder] = None,
    text_decoder: Optional[TextDecoder] = None,
) -> Fingerprint:
    """
    Compute the cryptographic, visual and semantic hashes of a source.

    The source is read three times from the start, so it must be seekable.
    All hashes are computed regardless of content type; callers decide
    which fields are meaningful (typically from get_mime_type). On return,
    and on cancellation, the source is back at the position it had on entry.

    Args:
        source: Readable, seekable binary file-like object
        algorithm: Cryptographic digest (default: user config, sha256)
        cancel_check: Optional callable polled before each pass
        image_decoder: Optional replacement for PIL.Image.open
        text_decoder: Optional replacement for UTF-8 decoding

    Returns:
        Fingerprint of the source. visual_hash is 0 for undecodable images;
        visual_hash is None if its pass hit an I/O error, semantic_hash if
        reading or decoding the text failed.

    Raises:
        ValueError: source is None
        SourceNotSeekableError: source cannot be rewound
        UnsupportedAlgorithmError: algorithm is not supported
        FingerprintCancelledError: cancel_check returned True
    """
    if source is None:
        raise ValueError("source is required")
    if not is_seekable(source):
        raise SourceNotSeekableError("To calculate a fingerprint, the source must be seekable")

    algorithm = _resolve_algorithm(algorithm)
    # Fail on unavailable digests before touching the source
    algorithm.new()

    start_position = source.tell()
    try:
        check_cancelled(cancel_check)
        source.seek(0)
        cryptographic_hash = calculate_cryptographic_hash(source, algorithm, cancel_check)

        check_cancelled(cancel_check)
        visual_hash: Optional[int]
        try:
            source.seek(0)
            visual_hash = calculate_visual_hash(source, image_decoder)
        except OSError as e:
            _logger.debug(f"Visual pass failed: {e}")
            visual_hash = None

        check_cancelled(cancel_check)
        semantic_hash: Optional[int]
        try:
            source.seek(0)
            semantic_hash = calculate_semantic_hash(source, text_decoder)
        except (OSError, ValueError) as e:
            # ValueError covers UnicodeDecodeError from strict decoders
            _logger.debug(f"Semantic pass failed: {e}")
            semantic_hash = None
    finally:
        source.seek(start_position)

    _logger.debug(
        f"Fingerprint {algorithm.value}={cryptographic_hash.hex()} "
        f"visual={format_hash(visual_hash)} semantic={format_hash(semantic_hash)}"
    )

    return Fingerprint(
        cryptographic_hash=cryptographic_hash,
        visual_hash=visual_hash,
        semantic_hash=semantic_hash,
    )


__all__ = ['to_fingerprint']
