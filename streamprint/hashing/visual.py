"""
Perceptual difference hash (dHash) for near-duplicate image detection.

The image is reduced to a 9x8 luminance grid and each row contributes eight
bits, one per adjacent column pair, set when the left sample is brighter.
The grid size, filter and bit order are fixed: hashes are only comparable
with other hashes computed the same way.

Bit layout: bit ``y * 8 + x`` (least significant first) holds the
comparison of column ``x`` with column ``x + 1`` in row ``y``.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..config import DHASH_WIDTH, DHASH_HEIGHT, HASH_BITS
from ..utils.validators import is_seekable, validate_hash_value
from .dependencies import Image, imagehash, np, _logger

ImageDecoder = Callable[[Any], Any]


def bits_to_int(bits: Any) -> int:
    """
    Pack a boolean array into an integer, element 0 in the lowest bit.

    Args:
        bits: Array-like of booleans (any shape, read row-major)

    Returns:
        Unsigned integer
    """
    flat = np.asarray(bits, dtype=bool).flatten()
    packed = np.packbits(flat, bitorder='little')
    return int.from_bytes(packed.tobytes(), 'little')


def int_to_bits(value: int) -> Any:
    """Unpack a 64-bit hash into an 8x8 boolean array (inverse of bits_to_int)."""
    is_valid, error = validate_hash_value(value)
    if not is_valid:
        raise ValueError(error)
    raw = np.frombuffer(value.to_bytes(HASH_BITS // 8, 'little'), dtype=np.uint8)
    return np.unpackbits(raw, bitorder='little').astype(bool).reshape(DHASH_HEIGHT, DHASH_WIDTH - 1)


def difference_hash(image: Any) -> int:
    """
    Compute the difference hash of a decoded PIL image.

    Args:
        image: PIL Image in any mode

    Returns:
        64-bit difference hash
    """
    grid = image.convert('L').resize((DHASH_WIDTH, DHASH_HEIGHT), Image.Resampling.BILINEAR)
    # Widen before comparing to stay clear of uint8 arithmetic
    pixels = np.asarray(grid, dtype=np.int16)
    return bits_to_int(pixels[:, :-1] > pixels[:, 1:])


def calculate_visual_hash(source: Any, decoder: Optional[ImageDecoder] = None) -> int:
    """
    Calculate the 64-bit difference hash of an image source.

    Seekable sources are rewound first. Animated images use their first
    frame.

    Args:
        source: Readable binary file-like object holding encoded image data
        decoder: Callable turning the source into a PIL Image
            (default: PIL.Image.open)

    Returns:
        Difference hash, or 0 if the source cannot be decoded

    Raises:
        ValueError: source is None
    """
    if source is None:
        raise ValueError("source is required")

    decode = decoder or Image.open
    try:
        if is_seekable(source):
            source.seek(0)
        with decode(source) as img:
            return difference_hash(img)
    except Exception as e:
        # Undecodable input is expected here (non-images, truncated files)
        _logger.debug(f"Visual hash calculation failed: {e}")
        return 0


def to_image_hash(value: int) -> Any:
    """
    Wrap a 64-bit difference hash in an imagehash.ImageHash.

    Lets callers use imagehash's hex codec and ``-`` distance operator.

    Examples:
        >>> to_image_hash(0b11) - to_image_hash(0)
        2
    """
    return imagehash.ImageHash(int_to_bits(value))


def from_image_hash(image_hash: Any) -> int:
    """
    Convert an 8x8 imagehash.ImageHash back into a 64-bit integer.

    Raises:
        ValueError: The hash does not hold exactly 64 bits
    """
    bits = np.asarray(image_hash.hash, dtype=bool)
    if bits.size != HASH_BITS:
        raise ValueError(f"Expected a {HASH_BITS}-bit image hash, got {bits.size} bits")
    return bits_to_int(bits)


__all__ = [
    'ImageDecoder',
    'bits_to_int',
    'int_to_bits',
    'difference_hash',
    'calculate_visual_hash',
    'to_image_hash',
    'from_image_hash',
]
