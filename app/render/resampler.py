"""
Scaling between views.

upscale_integer and downscale_integer work on exact integer ratios only
(block replication and box filter). resize_general handles any ratio by
handing the pixels to Pillow; the destination view must already have its
target size, nothing is allocated for it.
"""

import logging
import numpy as np
from PIL import Image
from render.errors import NonIntegerRatio, ResizeError
from render.view import View

logger = logging.getLogger(__name__)


def _integer_factors(big: View, small: View) -> tuple[int, int]:
    if big.width % small.width or big.height % small.height:
        raise NonIntegerRatio(
            f"{big.width}x{big.height} is not an integer multiple of {small.width}x{small.height}"
        )
    return big.width // small.width, big.height // small.height


def upscale_integer(src: View, dst: View) -> None:
    """Nearest-neighbor: every source pixel becomes a ws x hs block in dst"""
    ws, hs = _integer_factors(dst, src)

    src_pixels = src.pixels
    dst_pixels = dst.pixels
    for y in range(src.height):
        # строка источника, растянутая по горизонтали
        row = np.repeat(src_pixels[y], ws, axis=0)
        dst_pixels[y * hs:(y + 1) * hs] = row


def downscale_integer(src: View, dst: View, average_alpha: bool = True) -> None:
    """
    Box filter: every dst pixel is the truncated mean of its ws x hs source block.

    With average_alpha=False only red, green and blue are written and the
    destination alpha is left as it was.
    """
    ws, hs = _integer_factors(src, dst)

    blocks = src.pixels.reshape(dst.height, hs, dst.width, ws, 4)
    sums = blocks.sum(axis=(1, 3), dtype=np.uint32)
    means = (sums // (ws * hs)).astype(np.uint8)

    channels = 4 if average_alpha else 3
    dst.pixels[..., :channels] = means[..., :channels]


def resize_general(src: View, dst: View, resample: Image.Resampling = Image.Resampling.BILINEAR) -> None:
    """Arbitrary-ratio resize of src into the already sized dst"""
    try:
        # Pillow ждёт непрерывные строки: stride = width * 4 байта
        src_bytes = np.ascontiguousarray(src.pixels)
        image = Image.frombuffer("RGBA", (src.width, src.height), src_bytes, "raw", "RGBA", 0, 1)
        resized = image.resize((dst.width, dst.height), resample)
        dst.pixels[:] = np.asarray(resized, dtype=np.uint8).reshape(dst.height, dst.width, 4)
    except (ValueError, OSError, MemoryError) as e:
        logger.error(f"Resize {src.width}x{src.height} -> {dst.width}x{dst.height} failed: {e}")
        raise ResizeError(str(e)) from e
