from pathlib import Path
import logging
import numpy as np
from PIL import Image, UnidentifiedImageError
from render.errors import AllocationError, DecodeError, EncodeError, UnsupportedFormat
from render.pixel_buffer import PixelBuffer
from render.view import View

logger = logging.getLogger(__name__)

# расширение -> формат Pillow
_FORMATS = {
    ".bmp": "BMP",
    ".png": "PNG",
}


def image_format(path: str | Path) -> str:
    """Pillow format name for the extension of path (case-insensitive)"""
    suffix = Path(path).suffix.lower()
    fmt = _FORMATS.get(suffix)
    if fmt is None:
        raise UnsupportedFormat(f"not a valid image format: {Path(path).name}")
    return fmt


def decode(path: str | Path) -> PixelBuffer:
    """Reads an image file into a new RGBA8 buffer, whatever its channel count"""
    try:
        with Image.open(path) as image:
            if image.mode != "RGBA":
                image = image.convert("RGBA")
            width, height = image.size
            data = np.asarray(image, dtype=np.uint8)
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"cannot read {path}: {e}") from e
    except MemoryError as e:
        raise AllocationError(f"OutOfMemory: decoding {path}") from e

    if width == 0 or height == 0:
        raise DecodeError(f"{path} has no pixels")

    buffer = PixelBuffer.create(width, height)
    buffer.pixels[:] = data.reshape(height, width, 4)
    return buffer


def encode(view: View, path: str | Path) -> None:
    """Writes the view to path, BMP or PNG depending on the extension"""
    fmt = image_format(path)

    # всегда 4 канала, построчно, без промежутков
    data = np.ascontiguousarray(view.pixels)
    try:
        Image.fromarray(data).save(path, format=fmt)
    except (OSError, ValueError) as e:
        raise EncodeError(f"cannot write {path}: {e}") from e

    logger.debug(f"Wrote {view.width}x{view.height} {fmt} to {path}")
