"""
Shared fixtures for the moodboard tests.
"""
import struct
import zlib
from io import BytesIO

import pytest
from PIL import Image

from moodboard.infrastructure.file.store import FileStore
from moodboard.infrastructure.memory.store import MemoryStore


def make_image(fmt: str = "PNG") -> bytes:
    buf = BytesIO()
    Image.new("RGB", (1, 1)).save(buf, format=fmt)
    return buf.getvalue()


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def png_header(width, height):
    """A PNG signature followed by an IHDR chunk, with no pixel data."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return PNG_SIGNATURE + struct.pack(">I", len(ihdr)) + chunk + struct.pack(">I", zlib.crc32(chunk))


@pytest.fixture
def png_bytes():
    return make_image("PNG")


@pytest.fixture
def data_dir(tmp_path):
    """Directory for a file store; deliberately not created yet."""
    return tmp_path / "data"


@pytest.fixture(params=["memory", "file"])
def store(request, data_dir):
    """Run a test against both store backends."""
    if request.param == "file":
        return FileStore(str(data_dir))
    return MemoryStore()


def create_items(store, count):
    """Create ``count`` items whose images are ``b"image <n>"``."""
    return [store.create(BytesIO(f"image {i}".encode())) for i in range(count)]


def ids(items):
    return [item.id for item in items]
