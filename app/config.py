from pathlib import Path
import logging
import yaml
from models.config import GlobalConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """\
system:
  # directory where screenshots are stored
  watch_dir: ./
  # directory where to save the generated map
  map_save_dir: ./
  map_file_name: zelda_map.png
  watch_extension: .png
  target_fps: 60

mosaic:
  tiles_x: 16
  tiles_y: 8
  tile_width: 256
  tile_height: 168

tracker:
  # mini-map cursor color
  marker:
    kind: exact
    color: "#80D010"
  scan_rect: {x: 16, y: 16, width: 64, height: 32}
  playfield: {x: 0, y: 0, width: 256, height: 168, anchor: bottom}
  samples_per_tile_x: 4
  samples_per_tile_y: 4

display:
  enabled: true
  scale: 0.4
"""


class Config:
    def __init__(self, path: str | Path = "config.yaml"):
        self.path = Path(path)
        self.model: GlobalConfig | None = None

    def load(self) -> GlobalConfig:
        if not self.path.exists():
            logger.info(f"No config at {self.path}, writing defaults")
            self.write_default()

        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        self.model = GlobalConfig(**data)
        return self.model

    def get(self) -> GlobalConfig:
        if self.model is None:
            return self.load()
        return self.model

    def write_default(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG)
