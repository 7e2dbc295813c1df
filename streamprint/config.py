"""
Configuration constants for streamprint.

This module contains all built-in settings including:
- Fallback MIME type and header sniffing limits
- Default similarity thresholds for 64-bit hash comparison
- Default cryptographic digest and read sizes
"""

import os

# Returned whenever a source cannot be sniffed
FALLBACK_MIME_TYPE = "application/octet-stream"

# Sniffing needs at least this many header bytes
MIN_HEADER_BYTES = 2

# Raw bytes scanned for OLE stream names when refining compound documents
OLE_SCAN_BYTES = 8192

# Similarity thresholds (Hamming distance over 64 bits)
# distance <= low  -> duplicate
# distance <= high -> similar
DEFAULT_THRESHOLD_LOW = 3
DEFAULT_THRESHOLD_HIGH = 10

# Number of bits in visual and semantic hashes
HASH_BITS = 64
HASH_MASK = (1 << HASH_BITS) - 1

# Cryptographic digest used when the caller does not choose one
DEFAULT_HASH_ALGORITHM = "sha256"

# Read size for streaming digests
HASH_CHUNK_SIZE = 65536

# Difference hash grid: 9 samples wide, 8 tall -> 8x8 comparisons
DHASH_WIDTH = 9
DHASH_HEIGHT = 8

# Decompression bomb limit for decoded images
MAX_IMAGE_PIXELS = 500_000_000  # 500 megapixels

# User configuration location
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.streamprint')
