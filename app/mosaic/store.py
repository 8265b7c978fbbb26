from pathlib import Path
import logging
from models.config import MosaicConfig
from render.codec import decode, encode
from render.compositor import fill
from render.errors import DecodeError, MosaicSizeMismatch
from render.pixel_buffer import PixelBuffer
from render.view import make_view
from utils.colors import hex_to_rgba

logger = logging.getLogger(__name__)


def read_mosaic(path: str | Path, width: int, height: int) -> PixelBuffer:
    """Decodes a saved mosaic, it must be exactly width x height"""
    buffer = decode(path)
    if buffer.width != width or buffer.height != height:
        actual = (buffer.width, buffer.height)
        buffer.destroy()
        raise MosaicSizeMismatch((width, height), actual)
    return buffer


def create_mosaic(cfg: MosaicConfig) -> PixelBuffer:
    buffer = PixelBuffer.create(cfg.width, cfg.height)
    fill(make_view(buffer), hex_to_rgba(cfg.background))
    return buffer


def load_mosaic(path: str | Path, cfg: MosaicConfig) -> PixelBuffer:
    """
    Loads the persisted mosaic or falls back to a blank one.

    Unreadable files and files with the wrong size are discarded. Allocation
    failures propagate.
    """
    path = Path(path)
    if path.exists():
        try:
            buffer = read_mosaic(path, cfg.width, cfg.height)
            logger.info(f"Loaded map {path} ({buffer.width}x{buffer.height})")
            return buffer
        except MosaicSizeMismatch as e:
            logger.warning(f"Discarding {path}: {e}")
        except DecodeError as e:
            logger.warning(f"Could not load map: {e}")

    logger.info(f"Creating blank {cfg.width}x{cfg.height} map")
    return create_mosaic(cfg)


def save_mosaic(buffer: PixelBuffer, path: str | Path) -> None:
    encode(make_view(buffer), path)
    logger.info(f"Map saved to {path}")
