"""
Magic byte signatures for MIME type sniffing.

The registry is an immutable tuple built once at import time. Entries are
matched against a bounded header prefix; when several match, the longest
pattern wins and earlier entries win ties.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

ZIP_MIME_TYPE = "application/zip"
OLE_MIME_TYPE = "application/x-ole-storage"


@dataclass(frozen=True)
class Signature:
    """
    A fixed byte pattern identifying a file format.

    Attributes:
        pattern: Bytes expected at ``offset``
        mime_type: MIME type reported on a match
        offset: Position of the pattern within the header
    """
    pattern: bytes
    mime_type: str
    offset: int = 0

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError(f"Signature offset must be non-negative, got {self.offset}")
        if not self.pattern:
            raise ValueError("Signature pattern must not be empty")

    @property
    def end(self) -> int:
        """Number of header bytes needed to test this signature."""
        return self.offset + len(self.pattern)

    def matches(self, header: bytes) -> bool:
        """Return True if the pattern appears at ``offset`` in ``header``."""
        if len(header) < self.end:
            return False
        return header[self.offset:self.end] == self.pattern


DEFAULT_SIGNATURES: tuple[Signature, ...] = (
    # Images
    Signature(b'\xFF\xD8\xFF', "image/jpeg"),
    Signature(b'\x89PNG', "image/png"),
    Signature(b'GIF8', "image/gif"),
    Signature(b'BM', "image/bmp"),
    Signature(b'II\x2A\x00', "image/tiff"),  # little endian
    Signature(b'MM\x00\x2A', "image/tiff"),  # big endian

    # Archives
    Signature(b'PK\x03\x04', ZIP_MIME_TYPE),
    Signature(b'\x1F\x8B', "application/gzip"),
    Signature(b'BZh', "application/x-bzip2"),
    Signature(b'7z\xBC\xAF\x27\x1C', "application/x-7z-compressed"),
    Signature(b'Rar!\x1A\x07', "application/vnd.rar"),

    # Documents
    Signature(b'%PDF', "application/pdf"),
    Signature(b'{\\rtf', "application/rtf"),
    Signature(b'\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1', OLE_MIME_TYPE),

    # Audio
    Signature(b'ID3', "audio/mpeg"),
    Signature(b'RIFF', "audio/wav"),
    Signature(b'fLaC', "audio/flac"),
    Signature(b'OggS', "audio/ogg"),

    # Video
    Signature(b'ftyp', "video/mp4", offset=4),
    Signature(b'\x1A\x45\xDF\xA3', "video/x-matroska"),
)

# Header bytes needed to test every registered signature
MAX_HEADER_SIZE = max(sig.end for sig in DEFAULT_SIGNATURES)


def find_signature(
    header: bytes,
    signatures: Sequence[Signature] = DEFAULT_SIGNATURES,
) -> Optional[Signature]:
    """
    Find the most specific signature matching a header.

    Args:
        header: Leading bytes of the source
        signatures: Registry to search (default: DEFAULT_SIGNATURES)

    Returns:
        The matching signature with the longest pattern, or None
    """
    best: Optional[Signature] = None
    for sig in signatures:
        if sig.matches(header) and (best is None or len(sig.pattern) > len(best.pattern)):
            best = sig
    return best


__all__ = [
    'Signature',
    'DEFAULT_SIGNATURES',
    'MAX_HEADER_SIZE',
    'ZIP_MIME_TYPE',
    'OLE_MIME_TYPE',
    'find_signature',
]
