import struct
import zlib
import numpy as np
import pytest
from render.pixel_buffer import PixelBuffer


def make_buffer(width: int, height: int, color=(0, 0, 0, 255)) -> PixelBuffer:
    buffer = PixelBuffer.create(width, height)
    buffer.pixels[:] = color
    return buffer


def gradient_buffer(width: int, height: int) -> PixelBuffer:
    """Every pixel different: r = x, g = y, b = x ^ y"""
    buffer = PixelBuffer.create(width, height)
    ys, xs = np.mgrid[0:height, 0:width]
    buffer.pixels[..., 0] = xs % 256
    buffer.pixels[..., 1] = ys % 256
    buffer.pixels[..., 2] = (xs ^ ys) % 256
    buffer.pixels[..., 3] = 255
    return buffer


@pytest.fixture
def gradient():
    buffer = gradient_buffer(16, 12)
    yield buffer
    buffer.destroy()


def write_oversized_png(path, width: int = 20000, height: int = 10000):
    """A PNG whose header claims width x height pixels, with no image data"""

    def chunk(kind: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body))

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IEND", b""))
    return path
