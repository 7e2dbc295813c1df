"""
Exception types for streamprint.

Soft failures (undecodable images, unreadable headers, broken containers)
never raise; they return sentinels. The classes here cover the hard cases:
bad configuration, violated preconditions and cooperative cancellation.
"""


class StreamprintError(Exception):
    """Base class for all streamprint errors."""


class UnsupportedAlgorithmError(StreamprintError, ValueError):
    """Raised when a cryptographic digest selector is not supported."""

    def __init__(self, algorithm):
        self.algorithm = algorithm
        super().__init__(f"Unsupported hash algorithm: {algorithm!r}")


class SourceNotSeekableError(StreamprintError, ValueError):
    """Raised when a multi-pass operation receives a non-seekable source."""


class InvalidThresholdError(StreamprintError, ValueError):
    """Raised when similarity thresholds are out of range or out of order."""


class FingerprintCancelledError(StreamprintError):
    """Raised when a cancel check requests that hashing stop."""


__all__ = [
    'StreamprintError',
    'UnsupportedAlgorithmError',
    'SourceNotSeekableError',
    'InvalidThresholdError',
    'FingerprintCancelledError',
]
