import logging
from typing import Optional

import pygame

from config.settings import DrillConfig, WindowConfig
from data.models import SessionResult
from drill.input import (
    ACTION_DOWN,
    ACTION_MENU,
    ACTION_PAGE_DOWN,
    ACTION_PAGE_UP,
    ACTION_RETRY,
    ACTION_START,
    ACTION_SUBMIT,
    ACTION_UP,
    InputManager,
)
from drill.renderer import Renderer
from drill.review import clamp_page, summarize
from drill.scene import DrillScene


logger = logging.getLogger(__name__)

SCREEN_MENU = "MENU"
SCREEN_DRILL = "DRILL"
SCREEN_REVIEW = "REVIEW"


class DrillApp:
    def __init__(self, window: WindowConfig, drill: DrillConfig) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        self.clock = pygame.time.Clock()
        self.window = window
        self.renderer = Renderer(self.screen)
        self.input_manager = InputManager()

        # базовые настройки следующей сессии; Up/Down в меню меняют только их
        self.drill_config = drill
        self.scene: Optional[DrillScene] = None
        self.last_result: Optional[SessionResult] = None
        self.review_page: int = 0
        self.screen_name = SCREEN_MENU
        self.running = True

    def run(self) -> None:
        try:
            while self.running:
                self.clock.tick(self.window.fps)
                now_ms = pygame.time.get_ticks()

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self.running = False
                    else:
                        self.input_manager.process_pygame_event(event)

                if self.screen_name == SCREEN_DRILL and self.scene is not None:
                    self.scene.update(now_ms)
                else:
                    self._handle_menu_actions(now_ms)

                self._render()
        finally:
            if self.scene is not None:
                self.scene.teardown()
            pygame.quit()

    def _handle_menu_actions(self, now_ms: int) -> None:
        for action, _ in self.input_manager.poll_actions():
            if self.screen_name == SCREEN_MENU:
                if action == ACTION_UP:
                    self._change_seconds(+1)
                elif action == ACTION_DOWN:
                    self._change_seconds(-1)
                elif action in (ACTION_START, ACTION_SUBMIT):
                    self._start_drill(now_ms)
                    return
            elif self.screen_name == SCREEN_REVIEW:
                # секунды меняются и между сессиями, прямо с экрана результатов
                if action == ACTION_UP:
                    self._change_seconds(+1)
                elif action == ACTION_DOWN:
                    self._change_seconds(-1)
                elif action == ACTION_PAGE_DOWN:
                    self._turn_review_page(+1)
                elif action == ACTION_PAGE_UP:
                    self._turn_review_page(-1)
                elif action == ACTION_MENU:
                    self.screen_name = SCREEN_MENU
                elif action in (ACTION_RETRY, ACTION_SUBMIT):
                    self._start_drill(now_ms)
                    return

    def _turn_review_page(self, delta: int) -> None:
        if self.last_result is None:
            return
        self.review_page = clamp_page(
            self.review_page + delta,
            len(self.last_result.results),
            self.renderer.review_page_size(),
        )

    def _change_seconds(self, delta: int) -> None:
        self.drill_config = self.drill_config.with_seconds(self.drill_config.seconds_per_question + delta)
        logger.debug("Seconds per question set to %d", self.drill_config.seconds_per_question)

    def _start_drill(self, now_ms: int) -> None:
        if self.scene is None:
            self.scene = DrillScene(self.input_manager, self.drill_config, on_finish=self._handle_finish)
        else:
            self.scene.config = self.drill_config
        self.last_result = None
        self.scene.start(now_ms)
        self.screen_name = SCREEN_DRILL

    def _handle_finish(self, result: SessionResult) -> None:
        self.last_result = result
        self.review_page = 0
        self.screen_name = SCREEN_REVIEW
        self.input_manager.reset()
        logger.info("Session summary: %s", summarize(result))

    def _render(self) -> None:
        self.renderer.clear()
        if self.screen_name == SCREEN_DRILL and self.scene is not None and self.scene.session is not None:
            self.renderer.draw_drill(self.scene.session.render_model())
        elif self.screen_name == SCREEN_REVIEW and self.last_result is not None:
            self.renderer.draw_review(
                self.last_result,
                self.drill_config.seconds_per_question,
                self.review_page,
            )
        else:
            self.renderer.draw_menu(self.drill_config.seconds_per_question, self.drill_config.question_count)
        self.renderer.present()
