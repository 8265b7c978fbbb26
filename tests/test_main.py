import numpy as np
from app_context import AppContext, RunState, ScreenAction
from conftest import make_buffer
from display_manager import DisplayManager
from main import main_loop
from models.config import GlobalConfig
from render.codec import decode, encode
from render.view import make_view
from watch.file_list import FileStatus


class FakeScreen:
    """Returns scripted actions, one list per frame"""

    def __init__(self, frames):
        self.frames = list(frames)
        self.presented = 0
        self.fullscreen_toggles = 0

    def poll_actions(self):
        return self.frames.pop(0) if self.frames else [ScreenAction.QUIT]

    def present(self, view):
        self.presented += 1

    def toggle_fullscreen(self):
        self.fullscreen_toggles += 1


def make_context(tmp_path):
    cfg = GlobalConfig(
        system={"watch_dir": str(tmp_path), "map_save_dir": str(tmp_path), "target_fps": 1000},
        mosaic={"tiles_x": 2, "tiles_y": 2},
        display={"scale": 0.5},
    )
    mosaic = make_buffer(cfg.mosaic.width, cfg.mosaic.height, (0, 0, 0, 255))
    return AppContext.from_config(cfg, mosaic)


def test_loop_stitches_saves_and_quits(tmp_path):
    ctx = make_context(tmp_path)
    display = DisplayManager(ctx.config.display, ctx.mosaic.width, ctx.mosaic.height)

    frame = make_buffer(256, 240, (0, 0, 0, 255))
    frame.pixels[72:] = (200, 100, 50, 255)
    frame.pixels[16 + 2, 16 + 5] = (128, 208, 16, 255)
    shot = tmp_path / "shot.png"
    encode(make_view(frame), shot)
    ctx.file_list.mark(shot, FileStatus.NEW)

    screen = FakeScreen([[], [ScreenAction.TOGGLE_FULLSCREEN], [ScreenAction.SAVE], [ScreenAction.QUIT]])
    ctx.start()
    main_loop(ctx, display, screen)

    assert ctx.run_state is RunState.END
    assert ctx.stop_event.is_set()
    assert screen.fullscreen_toggles == 1
    assert screen.presented == 4

    # тайл (1, 0) в карте и в уменьшенной копии
    assert np.all(ctx.mosaic.pixels[0:168, 256:512, :3] == (200, 100, 50))
    assert tuple(display.buffer.pixels[0, 128]) == (200, 100, 50, 255)

    saved = decode(ctx.config.system.map_save_path)
    assert np.array_equal(saved.pixels, ctx.mosaic.pixels)


def test_loop_survives_errors(tmp_path, monkeypatch):
    import main

    ctx = make_context(tmp_path)
    calls = []

    def broken_update(*args):
        calls.append(1)
        raise RuntimeError("boom")

    monkeypatch.setattr(main, "update_map", broken_update)
    screen = FakeScreen([[], []])
    ctx.start()
    main_loop(ctx, None, screen)

    assert len(calls) == 3
    assert ctx.run_state is RunState.END
