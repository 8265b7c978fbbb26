# тут модели для config.yaml

from pathlib import Path
from typing import Literal, Union
from pydantic import BaseModel, Field, field_validator, model_validator
from utils.colors import hex_to_rgba
import logging

logger = logging.getLogger(__name__)


class SystemConfig(BaseModel):
    target_fps: int = Field(default=60, gt=0)
    watch_dir: Path = Path("./")
    map_save_dir: Path = Path("./")
    map_file_name: str = "zelda_map.png"
    watch_extension: str = ".png"
    poll_interval: float = Field(default=0.2, gt=0)
    process_existing: bool = False
    save_on_exit: bool = True

    @field_validator("watch_dir")
    @classmethod
    def _watch_dir_exists(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"screenshot directory not found: {value}")
        return value

    @field_validator("map_save_dir")
    @classmethod
    def _save_dir_or_cwd(cls, value: Path) -> Path:
        if not value.is_dir():
            logger.warning(f"Save directory {value} not found, saving to ./")
            return Path("./")
        return value

    @field_validator("watch_extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        value = value.lower()
        return value if value.startswith(".") else f".{value}"

    @property
    def map_save_path(self) -> Path:
        return self.map_save_dir / self.map_file_name


class MosaicConfig(BaseModel):
    tiles_x: int = Field(default=16, gt=0)
    tiles_y: int = Field(default=8, gt=0)
    tile_width: int = Field(default=256, gt=0)
    tile_height: int = Field(default=168, gt=0)
    background: str = "#000000"

    @field_validator("background")
    @classmethod
    def _valid_color(cls, value: str) -> str:
        hex_to_rgba(value)
        return value

    @property
    def width(self) -> int:
        return self.tiles_x * self.tile_width

    @property
    def height(self) -> int:
        return self.tiles_y * self.tile_height


class RectConfig(BaseModel):
    x: int = Field(default=0, ge=0)
    y: int = Field(default=0, ge=0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class PlayfieldConfig(RectConfig):
    # bottom: y отсчитывается от нижнего края кадра
    anchor: Literal["top", "bottom"] = "top"


class ExactMarkerConfig(BaseModel):
    kind: Literal["exact"] = "exact"
    color: str = "#80D010"

    @field_validator("color")
    @classmethod
    def _valid_color(cls, value: str) -> str:
        hex_to_rgba(value)
        return value


class ThresholdMarkerConfig(BaseModel):
    kind: Literal["threshold"]
    channel: Literal["red", "green", "blue", "alpha"] = "green"
    threshold: int = Field(default=200, ge=0, le=255)


MarkerConfig = Union[ExactMarkerConfig, ThresholdMarkerConfig]


class TrackerConfig(BaseModel):
    marker: MarkerConfig = Field(default_factory=ExactMarkerConfig, discriminator="kind")
    scan_rect: RectConfig = Field(default_factory=lambda: RectConfig(x=16, y=16, width=64, height=32))
    playfield: PlayfieldConfig = Field(
        default_factory=lambda: PlayfieldConfig(x=0, y=0, width=256, height=168, anchor="bottom")
    )
    samples_per_tile_x: int = Field(default=4, gt=0)
    samples_per_tile_y: int = Field(default=4, gt=0)


class DisplayConfig(BaseModel):
    enabled: bool = True
    title: str = "Zelda Map"
    scale: float = Field(default=0.4, gt=0, le=1)
    average_alpha: bool = True


class GlobalConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    mosaic: MosaicConfig = Field(default_factory=MosaicConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @model_validator(mode="after")
    def _playfield_fits_tile(self) -> "GlobalConfig":
        playfield = self.tracker.playfield
        if playfield.width != self.mosaic.tile_width or playfield.height != self.mosaic.tile_height:
            raise ValueError(
                f"playfield {playfield.width}x{playfield.height} must match tile "
                f"{self.mosaic.tile_width}x{self.mosaic.tile_height}"
            )
        return self
