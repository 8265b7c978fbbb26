import logging
from models.config import DisplayConfig
from render.pixel_buffer import PixelBuffer
from render.resampler import downscale_integer, resize_general
from render.view import View, make_view

logger = logging.getLogger(__name__)


def scaled_size(width: int, height: int, scale: float) -> tuple[int, int]:
    return max(1, int(width * scale + 0.5)), max(1, int(height * scale + 0.5))


class DisplayManager:
    """
    Holds the scaled-down copy of the map shown in the window.
    Integer ratios go through the box filter, everything else through the
    general resizer.
    """

    def __init__(self, cfg: DisplayConfig, map_width: int, map_height: int):
        self.cfg = cfg
        self.width, self.height = scaled_size(map_width, map_height, cfg.scale)
        # ошибка выделения здесь фатальна для запуска
        self.buffer = PixelBuffer.create(self.width, self.height)
        self.view = make_view(self.buffer)
        logger.info(f"Display surface {self.width}x{self.height} (scale {cfg.scale})")

    def is_integer_ratio(self, src: View) -> bool:
        return src.width % self.width == 0 and src.height % self.height == 0

    def refresh(self, mosaic: View) -> View:
        """Re-derives the display image from the mosaic"""
        if self.is_integer_ratio(mosaic):
            downscale_integer(mosaic, self.view, average_alpha=self.cfg.average_alpha)
        else:
            resize_general(mosaic, self.view)
        return self.view

    def destroy(self) -> None:
        self.buffer.destroy()
