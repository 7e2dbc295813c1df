"""
MIME type detection from leading bytes.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import FALLBACK_MIME_TYPE, MIN_HEADER_BYTES
from ..utils.validators import is_readable, is_seekable
from .containers import refine_zip_mime_type, refine_ole_mime_type
from .signatures import MAX_HEADER_SIZE, ZIP_MIME_TYPE, OLE_MIME_TYPE, find_signature

_logger = logging.getLogger(__name__)


def read_header(source: Any, size: int = MAX_HEADER_SIZE) -> bytes:
    """
    Read up to ``size`` bytes from the current position and seek back.

    Raises:
        OSError or ValueError if the source cannot be read or repositioned
    """
    position = source.tell()
    try:
        header = source.read(size) or b''
    finally:
        source.seek(position)
    return bytes(header)


def get_mime_type(source: Any, inspect_containers: bool = False) -> str:
    """
    Determine the MIME type of a binary source from its magic bytes.

    The source position is left unchanged. Detection is best-effort and
    never raises: anything that cannot be identified, read or repositioned
    is reported as "application/octet-stream".

    Args:
        source: Readable, seekable binary file-like object
        inspect_containers: Look inside ZIP and OLE containers to report the
            specific Office document type

    Returns:
        MIME type string

    Examples:
        >>> import io
        >>> get_mime_type(io.BytesIO(b'%PDF-1.7'))
        'application/pdf'
        >>> get_mime_type(io.BytesIO(b'\\xff'))
        'application/octet-stream'
    """
    if not is_readable(source) or not is_seekable(source):
        return FALLBACK_MIME_TYPE

    try:
        header = read_header(source)
    except (OSError, ValueError) as e:
        _logger.debug(f"MIME sniffing failed to read header: {e}")
        return FALLBACK_MIME_TYPE

    if len(header) < MIN_HEADER_BYTES:
        return FALLBACK_MIME_TYPE

    match = find_signature(header)
    if match is None:
        return FALLBACK_MIME_TYPE

    if inspect_containers:
        if match.mime_type == ZIP_MIME_TYPE:
            return refine_zip_mime_type(source)
        if match.mime_type == OLE_MIME_TYPE:
            return refine_ole_mime_type(source)

    return match.mime_type


__all__ = ['get_mime_type', 'read_header']
