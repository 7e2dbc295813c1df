"""
Unit tests for the perceptual difference hash.
"""

import io

import imagehash
import pytest
from PIL import Image

from streamprint.comparison import hamming_distance
from streamprint.hashing import (
    calculate_visual_hash,
    difference_hash,
    to_image_hash,
    from_image_hash,
)
from streamprint.hashing.visual import bits_to_int, int_to_bits


class TestDifferenceHash:
    """Test the dHash bit layout on decoded images."""

    def test_known_grid(self, grid_image, grid_hash):
        assert difference_hash(grid_image) == grid_hash

    def test_row_major_least_significant_first(self):
        # Row 0 falls left to right, every other row rises
        img = Image.new('L', (9, 8), color=0)
        for x in range(9):
            img.putpixel((x, 0), 240 - x * 20)
            for y in range(1, 8):
                img.putpixel((x, y), x * 20)
        assert difference_hash(img) == 0xFF

    def test_flat_image_is_zero(self):
        assert difference_hash(Image.new('RGB', (64, 64), color='red')) == 0

    def test_equal_samples_do_not_set_bits(self):
        img = Image.new('L', (9, 8), color=128)
        img.putpixel((4, 3), 200)
        value = difference_hash(img)
        # Only the (4 -> 5) comparison in row 3 is "left brighter"
        assert value == 1 << (3 * 8 + 4)

    def test_color_image(self, grid_image, grid_hash):
        assert difference_hash(grid_image.convert('RGB')) == grid_hash


class TestCalculateVisualHash:
    """Test calculate_visual_hash on encoded sources."""

    def test_png_source(self, sample_images, grid_hash):
        assert calculate_visual_hash(io.BytesIO(sample_images['png'])) == grid_hash

    def test_resolution_independent(self, sample_images, grid_hash):
        assert calculate_visual_hash(io.BytesIO(sample_images['large_png'])) == grid_hash

    def test_idempotent(self, sample_images):
        source = io.BytesIO(sample_images['jpeg'])
        assert calculate_visual_hash(source) == calculate_visual_hash(source)

    def test_rewinds_seekable_source(self, sample_images, grid_hash):
        source = io.BytesIO(sample_images['png'])
        source.seek(10)
        assert calculate_visual_hash(source) == grid_hash

    def test_near_duplicate_within_low_threshold(self, sample_images):
        original = calculate_visual_hash(io.BytesIO(sample_images['png']))
        near = calculate_visual_hash(io.BytesIO(sample_images['near_duplicate_jpeg']))
        assert hamming_distance(original, near) <= 3

    def test_unrelated_image_beyond_high_threshold(self, sample_images):
        original = calculate_visual_hash(io.BytesIO(sample_images['png']))
        inverted = calculate_visual_hash(io.BytesIO(sample_images['inverted_png']))
        assert hamming_distance(original, inverted) >= 10

    def test_different_layout_beyond_high_threshold(self, sample_images):
        original = calculate_visual_hash(io.BytesIO(sample_images['png']))
        gradient = calculate_visual_hash(io.BytesIO(sample_images['gradient_png']))
        assert hamming_distance(original, gradient) >= 10

    def test_falling_gradient_sets_every_bit(self, sample_images):
        assert calculate_visual_hash(io.BytesIO(sample_images['gradient_png'])) == (1 << 64) - 1

    def test_non_image_returns_zero(self):
        assert calculate_visual_hash(io.BytesIO(b'plain text, not pixels')) == 0

    def test_corrupted_image_returns_zero(self, sample_images):
        assert calculate_visual_hash(io.BytesIO(sample_images['corrupted'])) == 0

    def test_empty_source_returns_zero(self):
        assert calculate_visual_hash(io.BytesIO(b'')) == 0

    def test_none_source(self):
        with pytest.raises(ValueError):
            calculate_visual_hash(None)

    def test_injected_decoder(self, grid_image, grid_hash):
        value = calculate_visual_hash(io.BytesIO(b'opaque'), decoder=lambda source: grid_image.copy())
        assert value == grid_hash

    def test_failing_decoder_returns_zero(self):
        def broken_decoder(source):
            raise OSError("codec unavailable")

        assert calculate_visual_hash(io.BytesIO(b'data'), decoder=broken_decoder) == 0

    def test_animated_gif_uses_first_frame(self, grid_image, grid_hash):
        inverted = grid_image.point(lambda value: 255 - value)
        buffer = io.BytesIO()
        grid_image.save(buffer, 'GIF', save_all=True, append_images=[inverted], duration=100, loop=0)
        assert calculate_visual_hash(io.BytesIO(buffer.getvalue())) == grid_hash


class TestImageHashBridge:
    """Test conversion to and from imagehash.ImageHash."""

    def test_round_trip(self, grid_hash):
        assert from_image_hash(to_image_hash(grid_hash)) == grid_hash

    def test_distance_matches_hamming(self, grid_hash):
        other = grid_hash ^ 0b1011
        assert to_image_hash(grid_hash) - to_image_hash(other) == 3
        assert hamming_distance(grid_hash, other) == 3

    def test_hex_codec_round_trip(self, grid_hash):
        restored = imagehash.hex_to_hash(str(to_image_hash(grid_hash)))
        assert from_image_hash(restored) == grid_hash

    def test_bit_layout(self):
        bits = int_to_bits(1 << 9)
        assert bits.shape == (8, 8)
        assert bits[1][1]
        assert bits.sum() == 1

    def test_bits_to_int_inverse(self):
        value = 0x0123456789ABCDEF
        assert bits_to_int(int_to_bits(value)) == value

    def test_rejects_wrong_size(self):
        wide = imagehash.phash(Image.new('L', (32, 32)), hash_size=16)
        with pytest.raises(ValueError):
            from_image_hash(wide)

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            to_image_hash(1 << 64)
