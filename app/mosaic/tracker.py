"""
Marker detection and tile placement.

A captured frame carries a mini-map in a fixed corner; the player's cursor
on it is drawn in a known color. Finding that pixel tells which tile of the
world the frame shows, and the playfield part of the frame is then copied
into that tile of the mosaic.
"""

from dataclasses import dataclass
import logging
import numpy as np
from models.config import GlobalConfig, MarkerConfig, ExactMarkerConfig, PlayfieldConfig
from render.compositor import copy
from render.errors import InvalidGeometry
from render.view import Rect, View, make_rect, sub_view
from utils.colors import hex_to_rgba

logger = logging.getLogger(__name__)

_CHANNEL_INDEX = {"red": 0, "green": 1, "blue": 2, "alpha": 3}


class MarkerRule:
    """Predicate deciding which pixels count as the marker"""

    def mask(self, pixels: np.ndarray) -> np.ndarray:
        """Boolean (h, w) mask for an (h, w, 4) pixel array"""
        raise NotImplementedError

    def matches(self, pixel) -> bool:
        return bool(self.mask(np.asarray(pixel, dtype=np.uint8).reshape(1, 1, 4))[0, 0])


class ExactColorRule(MarkerRule):
    """Red, green and blue equal to the marker color, alpha ignored"""

    def __init__(self, color: tuple[int, int, int] | tuple[int, int, int, int]):
        self.rgb = np.array(color[:3], dtype=np.uint8)

    def mask(self, pixels: np.ndarray) -> np.ndarray:
        return np.all(pixels[..., :3] == self.rgb, axis=-1)

    def __repr__(self) -> str:
        return f"ExactColorRule({tuple(int(c) for c in self.rgb)})"


class ThresholdRule(MarkerRule):
    """One channel strictly above a threshold"""

    def __init__(self, channel: str = "green", threshold: int = 200):
        self.channel = channel
        self.index = _CHANNEL_INDEX[channel]
        self.threshold = threshold

    def mask(self, pixels: np.ndarray) -> np.ndarray:
        return pixels[..., self.index] > self.threshold

    def __repr__(self) -> str:
        return f"ThresholdRule({self.channel} > {self.threshold})"


def marker_rule(cfg: MarkerConfig) -> MarkerRule:
    if isinstance(cfg, ExactMarkerConfig):
        return ExactColorRule(hex_to_rgba(cfg.color))
    return ThresholdRule(cfg.channel, cfg.threshold)


def locate_marker(frame: View, scan_rect: Rect, rule: MarkerRule) -> tuple[int, int] | None:
    """
    First marker pixel inside scan_rect, scanning rows top to bottom and each
    row left to right. Coordinates are local to scan_rect.
    """
    scan = sub_view(frame, scan_rect)
    mask = rule.mask(scan.pixels)

    if not mask.any():
        return None

    # argmax по развёрнутой маске = первый True в построчном порядке
    index = int(np.argmax(mask.reshape(-1)))
    y, x = divmod(index, scan.width)
    return x, y


def marker_to_tile(x: int, y: int, samples_per_tile_x: int, samples_per_tile_y: int) -> tuple[int, int]:
    # -1: the cursor is drawn one sample right of the tile's left edge
    if x < 1:
        raise InvalidGeometry(f"marker column {x} is left of the first tile")
    return (x - 1) // samples_per_tile_x, y // samples_per_tile_y


def tile_rect(tile_x: int, tile_y: int, tile_width: int, tile_height: int) -> Rect:
    return make_rect(tile_x * tile_width, tile_y * tile_height, tile_width, tile_height)


def stitch(
    frame: View,
    mosaic: View,
    tile_x: int | None,
    tile_y: int | None,
    tile_width: int,
    tile_height: int,
    source_rect: Rect,
) -> bool:
    """
    Copies source_rect of the frame into tile (tile_x, tile_y) of the mosaic.

    A missing tile (no marker found) is a no-op and returns False. Tiles or
    source rects outside their views raise InvalidGeometry before anything is
    written.
    """
    if tile_x is None or tile_y is None:
        return False

    dst = sub_view(mosaic, tile_rect(tile_x, tile_y, tile_width, tile_height))
    src = sub_view(frame, source_rect)

    copy(src, dst)
    return True


@dataclass
class TrackerProfile:
    """Everything that differs between capture setups"""
    rule: MarkerRule
    scan_rect: Rect
    playfield: PlayfieldConfig
    samples_per_tile_x: int
    samples_per_tile_y: int
    tile_width: int
    tile_height: int

    @classmethod
    def from_config(cls, cfg: GlobalConfig) -> "TrackerProfile":
        tracker = cfg.tracker
        scan = tracker.scan_rect
        return cls(
            rule=marker_rule(tracker.marker),
            scan_rect=make_rect(scan.x, scan.y, scan.width, scan.height),
            playfield=tracker.playfield,
            samples_per_tile_x=tracker.samples_per_tile_x,
            samples_per_tile_y=tracker.samples_per_tile_y,
            tile_width=cfg.mosaic.tile_width,
            tile_height=cfg.mosaic.tile_height,
        )

    def source_rect(self, frame: View) -> Rect:
        """Playfield rectangle resolved against the frame size"""
        p = self.playfield
        y = p.y
        if p.anchor == "bottom":
            y = frame.height - p.height - p.y
            if y < 0:
                raise InvalidGeometry(f"frame height {frame.height} is smaller than the playfield")
        return make_rect(p.x, y, p.width, p.height)


def track_frame(frame: View, mosaic: View, profile: TrackerProfile) -> bool:
    """Finds the marker in a frame and stitches it into the mosaic"""
    found = locate_marker(frame, profile.scan_rect, profile.rule)
    if found is None:
        logger.debug("No marker in frame")
        return False

    tile_x, tile_y = marker_to_tile(*found, profile.samples_per_tile_x, profile.samples_per_tile_y)
    logger.debug(f"Marker at {found} -> tile ({tile_x}, {tile_y})")

    return stitch(
        frame,
        mosaic,
        tile_x,
        tile_y,
        profile.tile_width,
        profile.tile_height,
        profile.source_rect(frame),
    )
