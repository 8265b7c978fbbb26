import numpy as np
import pytest
from PIL import Image
from conftest import gradient_buffer, write_oversized_png
from render.codec import decode, encode, image_format
from render.errors import AllocationError, DecodeError, UnsupportedFormat
from render.view import make_rect, make_view, sub_view


@pytest.mark.parametrize("name,fmt", [
    ("map.png", "PNG"),
    ("MAP.PNG", "PNG"),
    ("shot.bmp", "BMP"),
    ("shot.Bmp", "BMP"),
])
def test_image_format_by_extension(name, fmt):
    assert image_format(name) == fmt


@pytest.mark.parametrize("name", ["map.jpg", "map", "map.png.txt"])
def test_unsupported_extension(name):
    with pytest.raises(UnsupportedFormat):
        image_format(name)


def test_decode_always_gives_rgba(tmp_path):
    path = tmp_path / "rgb.png"
    Image.new("RGB", (5, 3), (10, 20, 30)).save(path)

    buffer = decode(path)
    assert (buffer.width, buffer.height) == (5, 3)
    assert np.all(buffer.pixels == (10, 20, 30, 255))


def test_decode_grayscale(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (2, 2), 77).save(path)
    assert np.all(decode(path).pixels == (77, 77, 77, 255))


def test_decode_missing_or_garbage(tmp_path):
    with pytest.raises(DecodeError):
        decode(tmp_path / "nope.png")

    garbage = tmp_path / "garbage.png"
    garbage.write_bytes(b"not an image")
    with pytest.raises(DecodeError):
        decode(garbage)


def test_png_keeps_every_channel(tmp_path):
    buffer = gradient_buffer(9, 7)
    buffer.pixels[2, 3, 3] = 40
    path = tmp_path / "out.png"

    encode(make_view(buffer), path)
    assert np.array_equal(decode(path).pixels, buffer.pixels)


def test_bmp_keeps_color(tmp_path):
    buffer = gradient_buffer(6, 4)
    path = tmp_path / "out.BMP"

    encode(make_view(buffer), path)
    assert np.array_equal(decode(path).pixels[..., :3], buffer.pixels[..., :3])


def test_encode_sub_view_writes_only_the_region(tmp_path):
    buffer = gradient_buffer(10, 10)
    region = sub_view(make_view(buffer), make_rect(3, 4, 5, 2))
    path = tmp_path / "region.png"

    encode(region, path)
    decoded = decode(path)
    assert (decoded.width, decoded.height) == (5, 2)
    assert np.array_equal(decoded.pixels, buffer.pixels[4:6, 3:8])


def test_encode_rejects_unknown_extension(tmp_path):
    with pytest.raises(UnsupportedFormat):
        encode(make_view(gradient_buffer(2, 2)), tmp_path / "x.gif")
    assert not (tmp_path / "x.gif").exists()


def test_decode_oversized_header_is_decode_error(tmp_path):
    with pytest.raises(DecodeError):
        decode(write_oversized_png(tmp_path / "huge.png"))


def test_decode_out_of_memory_is_allocation_error(tmp_path, monkeypatch):
    import render.codec as codec

    class NoMemory:
        @staticmethod
        def asarray(*args, **kwargs):
            raise MemoryError

    path = tmp_path / "small.png"
    Image.new("RGBA", (4, 4)).save(path)
    monkeypatch.setattr(codec, "np", NoMemory)

    with pytest.raises(AllocationError):
        decode(path)
