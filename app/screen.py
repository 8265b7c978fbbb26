import logging
import numpy as np
import pygame
from app_context import ScreenAction
from render.view import View

logger = logging.getLogger(__name__)


class Screen:
    """Окно для показа уменьшенной карты"""

    def __init__(self, title: str, width: int, height: int):
        self.title = title
        self.width = width
        self.height = height
        self.surface: pygame.Surface | None = None

    def create(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.title)
        self.surface = pygame.display.set_mode((self.width, self.height))
        logger.info(f"Window {self.width}x{self.height} created")

    def present(self, view: View) -> None:
        if self.surface is None:
            return
        data = np.ascontiguousarray(view.pixels).tobytes()
        image = pygame.image.frombuffer(data, (view.width, view.height), "RGBA")
        self.surface.blit(image, (0, 0))
        pygame.display.flip()

    def poll_actions(self) -> list[ScreenAction]:
        actions = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Window closed")
                actions.append(ScreenAction.QUIT)
            elif event.type == pygame.KEYDOWN:
                action = self._key_action(event.key, event.mod)
                if action is not None:
                    actions.append(action)
        return actions

    def _key_action(self, key: int, mod: int) -> ScreenAction | None:
        alt = mod & pygame.KMOD_ALT
        if alt and key == pygame.K_F4:
            return ScreenAction.QUIT
        if (alt and key in (pygame.K_RETURN, pygame.K_KP_ENTER)) or key == pygame.K_F11:
            return ScreenAction.TOGGLE_FULLSCREEN
        if key == pygame.K_s:
            return ScreenAction.SAVE
        if key == pygame.K_ESCAPE:
            return ScreenAction.QUIT
        return None

    def toggle_fullscreen(self) -> None:
        pygame.display.toggle_fullscreen()

    def destroy(self) -> None:
        if self.surface is not None:
            pygame.quit()
            self.surface = None
