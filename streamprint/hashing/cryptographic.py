"""
Cryptographic digests for exact content identity.
"""

from __future__ import annotations

import hashlib
import logging
from enum import Enum
from typing import Any, Callable, Optional, Union

from ..config import HASH_CHUNK_SIZE
from ..exceptions import UnsupportedAlgorithmError, FingerprintCancelledError
from ..utils.validators import is_seekable

_logger = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]


class HashAlgorithm(Enum):
    """
    Supported cryptographic digests.

    Values are hashlib constructor names. MD5, SHA1 and RIPEMD160 are kept
    for interoperability with external identifiers; prefer SHA-256 or wider
    for content addressing.
    """
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_256 = "sha3_256"
    SHA3_384 = "sha3_384"
    SHA3_512 = "sha3_512"
    MD5 = "md5"
    SHA1 = "sha1"
    RIPEMD160 = "ripemd160"

    @property
    def is_legacy(self) -> bool:
        """True for the 128/160-bit digests."""
        return self in _LEGACY_ALGORITHMS

    @property
    def digest_size(self) -> int:
        """Digest length in bytes."""
        return self.new().digest_size

    def new(self) -> Any:
        """
        Create a fresh hashlib object for this algorithm.

        Raises:
            UnsupportedAlgorithmError: The local OpenSSL build lacks it
        """
        try:
            return hashlib.new(self.value)
        except ValueError:
            raise UnsupportedAlgorithmError(self.value) from None

    @classmethod
    def parse(cls, value: Union['HashAlgorithm', str]) -> 'HashAlgorithm':
        """
        Resolve a member or a case-insensitive name.

        Examples:
            >>> HashAlgorithm.parse('SHA-256')
            <HashAlgorithm.SHA256: 'sha256'>
            >>> HashAlgorithm.parse('sha3-512')
            <HashAlgorithm.SHA3_512: 'sha3_512'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace('-', '')
            for member in cls:
                if normalized in (member.value, member.value.replace('_', '')):
                    return member
        raise UnsupportedAlgorithmError(value)


_LEGACY_ALGORITHMS = frozenset({HashAlgorithm.MD5, HashAlgorithm.SHA1, HashAlgorithm.RIPEMD160})


def check_cancelled(cancel_check: Optional[CancelCheck]) -> None:
    """Raise FingerprintCancelledError if the cancel check fires."""
    if cancel_check is not None and cancel_check():
        raise FingerprintCancelledError("Hashing cancelled")


def calculate_cryptographic_hash(
    source: Any,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA256,
    cancel_check: Optional[CancelCheck] = None,
) -> bytes:
    """
    Calculate the cryptographic digest of an entire binary source.

    Seekable sources are rewound first so the whole content is hashed; the
    source is left at its end.

    Args:
        source: Readable binary file-like object
        algorithm: Digest to use (default: SHA-256)
        cancel_check: Optional callable polled before and during the read

    Returns:
        Raw digest bytes

    Raises:
        ValueError: source is None
        UnsupportedAlgorithmError: Unknown or unavailable algorithm
        FingerprintCancelledError: cancel_check returned True
    """
    if source is None:
        raise ValueError("source is required")

    algorithm = HashAlgorithm.parse(algorithm)
    hasher = algorithm.new()
    if algorithm.is_legacy:
        _logger.debug(f"Using legacy digest {algorithm.value}; prefer sha256 or wider for content addressing")

    check_cancelled(cancel_check)

    if is_seekable(source):
        source.seek(0)

    for chunk in iter(lambda: source.read(HASH_CHUNK_SIZE), b''):
        hasher.update(chunk)
        check_cancelled(cancel_check)

    return hasher.digest()


__all__ = [
    'HashAlgorithm',
    'CancelCheck',
    'check_cancelled',
    'calculate_cryptographic_hash',
]
