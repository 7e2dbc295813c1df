"""
Sniffing package for streamprint.

Identifies the media type of a binary source from its leading bytes, with
optional inspection of ZIP and OLE containers for Office documents.

Public API:
- get_mime_type: Detect the MIME type of a seekable binary source
- Signature: Magic byte pattern with offset
- DEFAULT_SIGNATURES: Built-in signature registry
- find_signature: Longest-match lookup in a registry
"""

from __future__ import annotations

from .signatures import (
    Signature,
    DEFAULT_SIGNATURES,
    MAX_HEADER_SIZE,
    ZIP_MIME_TYPE,
    OLE_MIME_TYPE,
    find_signature,
)
from .containers import refine_zip_mime_type, refine_ole_mime_type
from .mime import get_mime_type, read_header

__all__ = [
    # Registry
    'Signature',
    'DEFAULT_SIGNATURES',
    'MAX_HEADER_SIZE',
    'ZIP_MIME_TYPE',
    'OLE_MIME_TYPE',
    'find_signature',
    # Detection
    'get_mime_type',
    'read_header',
    # Container refinement
    'refine_zip_mime_type',
    'refine_ole_mime_type',
]
