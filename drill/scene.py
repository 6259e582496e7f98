import logging
import random
from typing import Callable, Optional

from config.settings import DrillConfig
from data.models import SessionResult
from drill.input import ACTION_BACKSPACE, ACTION_DIGIT, ACTION_SUBMIT, InputManager
from drill.session import DrillSession, start_session
from drill.timer import TickScheduler


logger = logging.getLogger(__name__)


class DrillScene:
    """
    DrillScene = "один прогон из N вопросов" на экране.

    Она объединяет:
    - генерацию вопросов и сессию (drill.session)
    - таймер (TickScheduler, его крутит главный цикл через update())
    - ввод (InputManager)

    Рисование делает app через Renderer по render_model() сессии.
    """

    def __init__(
        self,
        input_manager: InputManager,
        config: DrillConfig,
        on_finish: Optional[Callable[[SessionResult], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.input = input_manager
        self.config = config
        self.on_finish = on_finish
        # один rng на все повторы: с seed-ом каждая попытка всё равно новая
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.scheduler = TickScheduler()
        self.session: Optional[DrillSession] = None

    def start(self, now_ms: int) -> None:
        """
        Запуск сессии:
        - генерируем вопросы
        - запускаем таймер первого вопроса
        Ошибки конфигурации летят наружу до того, как что-то запустится.
        """
        if self.session is not None:
            self.session.teardown()
        self.input.reset()
        self.session = start_session(
            self.config,
            self.scheduler,
            now_ms,
            on_finish=self._handle_finish,
            rng=self.rng,
        )

    def update(self, now_ms: int) -> None:
        """
        Вызывается каждый кадр: сначала ввод игрока, потом таймер.
        """
        if self.session is None or not self.session.is_active:
            return

        for action, value in self.input.poll_actions():
            if action == ACTION_DIGIT and value is not None:
                self.session.type_text(value)
            elif action == ACTION_BACKSPACE:
                self.session.backspace()
            elif action == ACTION_SUBMIT:
                self.session.submit(now_ms)
            if not self.session.is_active:
                break

        self.scheduler.pump(now_ms)

    def teardown(self) -> None:
        if self.session is not None:
            self.session.teardown()
        self.scheduler.cancel_all()

    def is_finished(self) -> bool:
        return self.session is not None and self.session.is_finished

    def _handle_finish(self, result: SessionResult) -> None:
        if self.on_finish is not None:
            self.on_finish(result)
