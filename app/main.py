"""
Builds a world map from game screenshots.

Watches a screenshot directory, finds the mini-map cursor in every new
screenshot and copies the playfield into the matching tile of a large map
image. The map is shown scaled down in a window and saved on exit.
"""

from pathlib import Path
from time import perf_counter, sleep
import argparse
import logging
import logging.config
import sys
import yaml
from pydantic import ValidationError
from app_context import AppContext, ScreenAction
from config import Config
from display_manager import DisplayManager
from mosaic.pipeline import update_map
from mosaic.store import load_mosaic, save_mosaic
from render.errors import AllocationError, EncodeError, ResizeError
from watch.directory import DirectoryFrameSource

logger = logging.getLogger(__name__)

FRAMERATE_FUDGE = 0.9


def setup_logging(path: str = "log_conf.yaml") -> None:
    conf = Path(path)
    if conf.exists():
        with open(conf, "r", encoding="utf-8") as f:
            logging.config.dictConfig(yaml.safe_load(f))
    else:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def cap_framerate(frame_start: float, target_seconds: float) -> float:
    """Sleeps out the rest of the frame, returns the next frame start"""
    sleep_time = target_seconds - (perf_counter() - frame_start)
    if sleep_time > 0:
        sleep(sleep_time * FRAMERATE_FUDGE)
    return perf_counter()


def save_map(ctx: AppContext) -> None:
    try:
        save_mosaic(ctx.mosaic, ctx.config.system.map_save_path)
    except EncodeError as e:
        logger.error(f"Could not save map: {e}")


def refresh_display(display: DisplayManager | None, ctx: AppContext) -> None:
    if display is None:
        return
    try:
        display.refresh(ctx.mosaic_view)
    except ResizeError as e:
        logger.warning(f"Display not refreshed: {e}")


def main_loop(ctx: AppContext, display: DisplayManager | None, screen=None) -> None:
    system = ctx.config.system
    frame_time = 1.0 / system.target_fps
    frame_start = perf_counter()

    while ctx.is_running():
        try:
            if screen is not None:
                handle_actions(ctx, screen)

            if update_map(ctx.file_list, ctx.mosaic_view, ctx.profile, system.map_file_name):
                refresh_display(display, ctx)

            if screen is not None and display is not None:
                screen.present(display.view)
        except Exception as e:
            logger.error(f"Error in main loop: {e}", exc_info=True)

        frame_start = cap_framerate(frame_start, frame_time)


def handle_actions(ctx: AppContext, screen) -> None:
    for action in screen.poll_actions():
        if action is ScreenAction.QUIT:
            ctx.end_program()
        elif action is ScreenAction.SAVE:
            save_map(ctx)
        elif action is ScreenAction.TOGGLE_FULLSCREEN:
            screen.toggle_fullscreen()


def run(config_path: str, headless: bool = False) -> int:
    try:
        cfg = Config(config_path).load()
    except (ValidationError, yaml.YAMLError) as e:
        logger.error(f"Invalid config {config_path}: {e}")
        return 1

    try:
        mosaic = load_mosaic(cfg.system.map_save_path, cfg.mosaic)
    except AllocationError as e:
        logger.error(f"Could not create map image: {e}")
        return 1

    ctx = AppContext.from_config(cfg, mosaic)
    logger.info(f"Marker rule: {ctx.profile.rule}")

    source = DirectoryFrameSource(
        cfg.system.watch_dir,
        cfg.system.watch_extension,
        ctx.file_list,
        ctx.stop_event,
        poll_interval=cfg.system.poll_interval,
        process_existing=cfg.system.process_existing,
    )

    try:
        source.start()
    except FileNotFoundError as e:
        logger.error(str(e))
        mosaic.destroy()
        return 1

    display = None
    screen = None
    ctx.start()
    try:
        if cfg.display.enabled and not headless:
            from screen import Screen

            # ошибка выделения поверхности окна фатальна
            display = DisplayManager(cfg.display, mosaic.width, mosaic.height)
            refresh_display(display, ctx)
            screen = Screen(cfg.display.title, display.width, display.height)
            screen.create()

        main_loop(ctx, display, screen)
    except AllocationError as e:
        logger.error(f"Error creating window surface: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        ctx.end_program()
        source.stop()
        if cfg.system.save_on_exit:
            save_map(ctx)
        if screen is not None:
            screen.destroy()
        if display is not None:
            display.destroy()
        mosaic.destroy()

    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Stitch game screenshots into a world map.")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml (created if missing).")
    parser.add_argument("--log-config", default="log_conf.yaml", help="logging dictConfig YAML.")
    parser.add_argument("--headless", action="store_true", help="Run without a window until interrupted.")
    args = parser.parse_args(argv)

    setup_logging(args.log_config)
    return run(args.config, headless=args.headless)


if __name__ == "__main__":
    sys.exit(main())
