"""
Pytest configuration and shared fixtures for test suite.
"""

import io
import random
import shutil
import string
import tempfile
import zipfile
from pathlib import Path

import pytest
from PIL import Image

from streamprint.user_config import get_user_config


# Two-level rows: phase A starts dark, phase B starts bright.
# Adjacent cells always differ by 200 levels, which keeps every
# comparison well clear of filter blur and JPEG noise.
DARK, BRIGHT = 30, 230
GRID_PHASES = "AABABBAB"
GRID_COLUMNS = 9
CELL_SIZE = 20

OLE_MAGIC = b'\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1'


def _row_values(phase: str) -> list:
    first, second = (DARK, BRIGHT) if phase == 'A' else (BRIGHT, DARK)
    return [first if x % 2 == 0 else second for x in range(GRID_COLUMNS)]


def make_grid_image(phases: str = GRID_PHASES, cell: int = CELL_SIZE) -> Image.Image:
    """Build a 9x8 cell grayscale test card, one phase letter per row."""
    img = Image.new('L', (GRID_COLUMNS * cell, len(phases) * cell))
    for y, phase in enumerate(phases):
        for x, value in enumerate(_row_values(phase)):
            img.paste(value, (x * cell, y * cell, (x + 1) * cell, (y + 1) * cell))
    return img


def expected_grid_hash(phases: str = GRID_PHASES) -> int:
    """Difference hash of make_grid_image computed directly from cell values."""
    value = 0
    for y, phase in enumerate(phases):
        row = _row_values(phase)
        for x in range(GRID_COLUMNS - 1):
            if row[x] > row[x + 1]:
                value |= 1 << (y * 8 + x)
    return value


def encode_image(img: Image.Image, fmt: str = 'PNG', **params) -> bytes:
    buffer = io.BytesIO()
    img.convert('RGB').save(buffer, fmt, **params)
    return buffer.getvalue()


def make_zip(names: list) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as archive:
        for name in names:
            archive.writestr(name, b'<xml/>')
    return buffer.getvalue()


def make_ole(stream_name: str = '') -> bytes:
    """OLE header followed by a directory entry carrying ``stream_name``."""
    data = OLE_MAGIC + b'\x00' * 504
    if stream_name:
        data += stream_name.encode('utf-16-le') + b'\x00' * 64
    return data + b'\x00' * 512


def make_text(seed: int, tokens: int = 5000) -> str:
    """Generate a long text of random words, unique vocabulary per seed."""
    rng = random.Random(seed)
    words = [
        ''.join(rng.choice(string.ascii_lowercase) for _ in range(rng.randint(4, 9)))
        for _ in range(tokens)
    ]
    return ' '.join(words)


class NonSeekableReader(io.RawIOBase):
    """Readable stream that refuses to seek."""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)
        self.read_calls = 0

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, b):
        self.read_calls += 1
        chunk = self._buffer.read(len(b))
        b[:len(chunk)] = chunk
        return len(chunk)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_user_config(temp_dir, monkeypatch):
    """Point the user configuration at an empty directory for every test."""
    for var in (
        'STREAMPRINT_THRESHOLD_LOW',
        'STREAMPRINT_THRESHOLD_HIGH',
        'STREAMPRINT_HASH_ALGORITHM',
        'STREAMPRINT_OLE_SCAN_BYTES',
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('STREAMPRINT_CONFIG_DIR', str(temp_dir / 'config'))

    config = get_user_config()
    config.reload()
    yield config
    config.reload()


@pytest.fixture
def grid_image():
    """Grayscale test card with a known difference hash."""
    return make_grid_image()


@pytest.fixture
def grid_hash():
    """Expected difference hash of grid_image."""
    return expected_grid_hash()


@pytest.fixture
def sample_images(grid_image, temp_dir):
    """
    Encoded variants of the test card.

    Returns:
        dict of bytes:
        - png: lossless original
        - png_copy: same image encoded again (byte-identical)
        - large_png: same card at double resolution
        - near_duplicate_jpeg: one pixel altered, JPEG quality 85
        - jpeg: original as JPEG quality 95
        - inverted_png: negative of the card (every comparison flips)
        - gradient_png: horizontal gradient, bright to dark (unrelated layout)
        - corrupted: PNG signature followed by garbage
    """
    near = grid_image.copy()
    near.putpixel((0, 0), 254)

    inverted = grid_image.point(lambda value: 255 - value)

    gradient = Image.new('L', grid_image.size)
    width = grid_image.width
    for x in range(width):
        gradient.paste(255 - (x * 255) // (width - 1), (x, 0, x + 1, grid_image.height))

    png = encode_image(grid_image)
    return {
        'png': png,
        'png_copy': encode_image(grid_image),
        'large_png': encode_image(make_grid_image(cell=CELL_SIZE * 2)),
        'near_duplicate_jpeg': encode_image(near, 'JPEG', quality=85),
        'jpeg': encode_image(grid_image, 'JPEG', quality=95),
        'inverted_png': encode_image(inverted),
        'gradient_png': encode_image(gradient),
        'corrupted': png[:16] + b'not really an image' * 4,
    }


@pytest.fixture
def sample_texts():
    """Long texts: an original, edited variants and an unrelated text."""
    original = make_text(seed=1)
    words = original.split(' ')
    typo = list(words)
    typo[len(typo) // 2] = typo[len(typo) // 2] + 'x'

    shuffled = list(words)
    random.Random(99).shuffle(shuffled)

    return {
        'original': original,
        'typo': ' '.join(typo),
        'double_spaced': original.replace(' ', '  '),
        'shouting': original.upper(),
        'shuffled': ' '.join(shuffled),
        'punctuated': original.replace(' ', '. '),
        'unrelated': make_text(seed=2),
    }


@pytest.fixture
def office_documents():
    """ZIP and OLE containers keyed by the document kind they emulate."""
    return {
        'docx': make_zip(['[Content_Types].xml', 'word/document.xml']),
        'xlsx': make_zip(['[Content_Types].xml', 'xl/workbook.xml']),
        'pptx': make_zip(['[Content_Types].xml', 'ppt/presentation.xml']),
        'vsdx': make_zip(['[Content_Types].xml', 'visio/document.xml']),
        'onenote': make_zip(['onenote/section.one']),
        'plain_zip': make_zip(['readme.txt', 'src/main.py']),
        'broken_zip': b'PK\x03\x04' + b'\x00' * 40,
        'doc': make_ole('WordDocument'),
        'xls': make_ole('Workbook'),
        'ppt': make_ole('PowerPoint Document'),
        'msg': make_ole('__substg1.0_0037001F'),
        'ole': make_ole(),
    }


@pytest.fixture
def non_seekable():
    """Factory for non-seekable readers."""
    return NonSeekableReader
