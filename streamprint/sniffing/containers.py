"""
Container inspection for MIME type refinement.

ZIP-based Office Open XML documents and legacy OLE compound documents share
a magic number with every other archive of their kind. These helpers look
inside the container to pick the specific office type. Both are best-effort:
any failure returns the fallback type and the source position is restored.
"""

from __future__ import annotations

import logging
import zipfile
from typing import BinaryIO, Optional

from ..config import FALLBACK_MIME_TYPE
from .signatures import ZIP_MIME_TYPE, OLE_MIME_TYPE

_logger = logging.getLogger(__name__)

# Entry name prefix -> MIME type, checked in order
OFFICE_ZIP_PREFIXES: tuple[tuple[str, str], ...] = (
    ('word/', "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ('xl/', "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
    ('ppt/', "application/vnd.openxmlformats-officedocument.presentationml.presentation"),
    ('visio/', "application/vnd.ms-visio.drawing.main+xml"),
    ('onenote/', "application/onenote"),
)

# OLE stream names -> MIME type, checked in order
OLE_STREAM_MARKERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (('WordDocument',), "application/msword"),
    (('Workbook', 'Book'), "application/vnd.ms-excel"),
    (('PowerPoint Document',), "application/vnd.ms-powerpoint"),
    (('__substg1.0',), "application/vnd.ms-outlook"),  # Outlook .msg properties
)


def _restore(source: BinaryIO, position: int) -> bool:
    try:
        source.seek(position)
        return True
    except (OSError, ValueError) as e:
        _logger.debug(f"Could not restore source position {position}: {e}")
        return False


def refine_zip_mime_type(source: BinaryIO) -> str:
    """
    Identify an Office Open XML document inside a ZIP container.

    Only the central directory is read; no entry is decompressed.

    Args:
        source: Seekable binary source positioned anywhere

    Returns:
        Specific office MIME type, "application/zip" if no office layout is
        found, or the fallback type if the archive cannot be read
    """
    try:
        position = source.tell()
    except (OSError, ValueError) as e:
        _logger.debug(f"ZIP refinement skipped, position unavailable: {e}")
        return FALLBACK_MIME_TYPE

    try:
        with zipfile.ZipFile(source) as archive:
            names = archive.namelist()
    except (zipfile.BadZipFile, OSError, ValueError, EOFError) as e:
        _logger.debug(f"ZIP refinement failed: {e}")
        _restore(source, position)
        return FALLBACK_MIME_TYPE

    if not _restore(source, position):
        return FALLBACK_MIME_TYPE

    for prefix, mime_type in OFFICE_ZIP_PREFIXES:
        if any(name.startswith(prefix) for name in names):
            return mime_type

    return ZIP_MIME_TYPE


def refine_ole_mime_type(source: BinaryIO, scan_bytes: Optional[int] = None) -> str:
    """
    Identify a legacy Office document inside an OLE compound file.

    Scans a bounded raw prefix for UTF-16LE directory entry names rather
    than parsing the sector chain.

    Args:
        source: Seekable binary source positioned at the start of the file
        scan_bytes: Prefix length to scan (default: user config ole_scan_bytes)

    Returns:
        Specific legacy office MIME type, the generic OLE type if no marker
        is found, or the fallback type if the source cannot be read

    Raises:
        ValueError: scan_bytes is given and is not a positive integer
    """
    if scan_bytes is None:
        from ..user_config import get_user_config
        scan_bytes = get_user_config().ole_scan_bytes
    elif isinstance(scan_bytes, bool) or not isinstance(scan_bytes, int) or scan_bytes <= 0:
        raise ValueError(f"scan_bytes must be a positive integer, got {scan_bytes!r}")

    try:
        position = source.tell()
        buffer = source.read(scan_bytes)
    except (OSError, ValueError) as e:
        _logger.debug(f"OLE refinement failed: {e}")
        return FALLBACK_MIME_TYPE

    if not _restore(source, position):
        return FALLBACK_MIME_TYPE

    if not buffer:
        return FALLBACK_MIME_TYPE

    for names, mime_type in OLE_STREAM_MARKERS:
        if any(name.encode('utf-16-le') in buffer for name in names):
            return mime_type

    return OLE_MIME_TYPE


__all__ = [
    'OFFICE_ZIP_PREFIXES',
    'OLE_STREAM_MARKERS',
    'refine_zip_mime_type',
    'refine_ole_mime_type',
]
