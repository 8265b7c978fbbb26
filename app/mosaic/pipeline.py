from pathlib import Path
import logging
from mosaic.tracker import TrackerProfile, track_frame
from render.codec import decode
from render.errors import MosaicError
from render.view import View, make_view
from watch.file_list import FileList

logger = logging.getLogger(__name__)


def process_frame(path: Path, mosaic: View, profile: TrackerProfile) -> bool:
    """Decodes one screenshot and stitches it into the mosaic"""
    with decode(path) as frame:
        return track_frame(make_view(frame), mosaic, profile)


def update_map(file_list: FileList, mosaic: View, profile: TrackerProfile, map_file_name: str) -> bool:
    """
    Processes every NEW file once. Returns True if at least one tile changed.

    Per-file failures are logged and skipped so one bad screenshot never
    stops the loop.
    """
    updated = False
    for path in file_list.take_new():
        # сама карта тоже может лежать в наблюдаемой папке
        if path.name == map_file_name:
            continue

        try:
            stitched = process_frame(path, mosaic, profile)
        except MosaicError as e:
            logger.warning(f"Skipping {path.name}: {e}")
            continue

        if stitched:
            logger.info(f"Stitched {path.name}")
        updated |= stitched

    return updated
