from dataclasses import dataclass, field
from enum import Enum
import threading
from models.config import GlobalConfig
from mosaic.tracker import TrackerProfile
from render.pixel_buffer import PixelBuffer
from render.view import View, make_view
from watch.file_list import FileList


class RunState(Enum):
    START = 0
    RUNNING = 1
    END = 2


class ScreenAction(Enum):
    QUIT = "quit"
    SAVE = "save"
    TOGGLE_FULLSCREEN = "toggle_fullscreen"


@dataclass
class AppContext:
    """State shared by the update loop, the watcher and the window"""
    config: GlobalConfig
    mosaic: PixelBuffer
    profile: TrackerProfile
    file_list: FileList = field(default_factory=FileList)
    run_state: RunState = RunState.START
    # выставляется при завершении, на нём ждёт поток наблюдателя
    stop_event: threading.Event = field(default_factory=threading.Event)
    _mosaic_view: View | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_config(cls, config: GlobalConfig, mosaic: PixelBuffer) -> "AppContext":
        return cls(config=config, mosaic=mosaic, profile=TrackerProfile.from_config(config))

    @property
    def mosaic_view(self) -> View:
        if self._mosaic_view is None:
            self._mosaic_view = make_view(self.mosaic)
        return self._mosaic_view

    def is_running(self) -> bool:
        return self.run_state is RunState.RUNNING

    def start(self) -> None:
        self.run_state = RunState.RUNNING

    def end_program(self) -> None:
        self.run_state = RunState.END
        self.stop_event.set()
