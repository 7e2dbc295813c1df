"""
SimHash for near-duplicate text detection.

Every token votes on each of 64 bits according to its own hash; the final
hash keeps the bits with a positive tally. Small edits and reordering move
only a few votes, so related texts land a small Hamming distance apart.
"""

from __future__ import annotations

import hashlib
import logging
import re
from typing import Any, Callable, Iterable, Optional

from ..config import HASH_BITS
from ..utils.validators import is_seekable

_logger = logging.getLogger(__name__)

TextDecoder = Callable[[bytes], str]

# Whitespace plus the sentence punctuation the tokenizer splits on
_SPLIT_RE = re.compile(r"[ \r\n\t.,!?]+")


def decode_text(data: bytes) -> str:
    """Decode UTF-8, dropping a byte order mark and replacing invalid sequences."""
    return data.decode('utf-8-sig', errors='replace')


def tokenize(text: str) -> list[str]:
    """
    Split text into case-folded word tokens.

    Examples:
        >>> tokenize("Hello, World!  hello?")
        ['hello', 'world', 'hello']
    """
    return [token for token in _SPLIT_RE.split(text.casefold()) if token]


def token_hash(token: str) -> int:
    """Deterministic 64-bit hash of a token (BLAKE2b, 8-byte digest)."""
    digest = hashlib.blake2b(token.encode('utf-8', errors='surrogatepass'), digest_size=HASH_BITS // 8)
    return int.from_bytes(digest.digest(), 'little')


def simhash(tokens: Iterable[str]) -> int:
    """
    Compute a 64-bit SimHash from tokens.

    Args:
        tokens: Word tokens; repeats vote once per occurrence

    Returns:
        Hash with bit i set iff more tokens had bit i set than clear.
        An empty token stream yields 0.
    """
    weights = [0] * HASH_BITS
    for token in tokens:
        h = token_hash(token)
        for i in range(HASH_BITS):
            if (h >> i) & 1:
                weights[i] += 1
            else:
                weights[i] -= 1

    fingerprint = 0
    for i, weight in enumerate(weights):
        if weight > 0:
            fingerprint |= 1 << i
    return fingerprint


def calculate_semantic_hash(source: Any, decoder: Optional[TextDecoder] = None) -> int:
    """
    Calculate the 64-bit SimHash of a text source.

    Seekable sources are rewound first and read to the end.

    Args:
        source: Readable binary file-like object
        decoder: Callable turning raw bytes into text (default: UTF-8)

    Returns:
        SimHash of the decoded text, 0 for text without tokens

    Raises:
        ValueError: source is None
    """
    if source is None:
        raise ValueError("source is required")

    if is_seekable(source):
        source.seek(0)
    data = source.read() or b''

    text = (decoder or decode_text)(bytes(data))
    tokens = tokenize(text)
    if not tokens:
        _logger.debug("Semantic hash: no tokens found")
        return 0
    return simhash(tokens)


__all__ = [
    'TextDecoder',
    'decode_text',
    'tokenize',
    'token_hash',
    'simhash',
    'calculate_semantic_hash',
]
