import logging
import random
from typing import Callable, Optional, Sequence

from config.settings import DrillConfig, DrillConfigError
from data.models import AnswerRecord, Question, RenderModel, SessionResult
from drill.question_generator import generate
from drill.state_machine import (
    ArmCountdown,
    DrillState,
    Event,
    Finished,
    InputChanged,
    Recorded,
    StopCountdown,
    Submit,
    Tick,
    initial_state,
    transition,
)
from drill.timer import TickScheduler, TimerHandle


logger = logging.getLogger(__name__)


class DrillSession:
    """
    DrillSession = одна сессия из N вопросов с таймером на каждый вопрос.

    Она объединяет:
    - чистую машину состояний (drill.state_machine)
    - таймер обратного отсчёта (TimerHandle из TickScheduler)
    - callback on_finish, который вызывается ровно один раз

    Сессия держит не больше одного живого TimerHandle и гасит его
    при переходе к следующему вопросу, при завершении и в teardown().
    """

    def __init__(
        self,
        questions: Sequence[Question],
        seconds_per_question: int,
        scheduler: TickScheduler,
        on_finish: Optional[Callable[[SessionResult], None]] = None,
        tick_ms: int = 1000,
    ) -> None:
        if len(questions) == 0:
            raise DrillConfigError("a drill session needs at least one question")
        if seconds_per_question < 1:
            raise DrillConfigError(f"seconds_per_question must be >= 1, got {seconds_per_question}")

        self.scheduler = scheduler
        self.on_finish = on_finish
        self.tick_ms = tick_ms

        # базовое время копируется при создании; конфиг снаружи сессию не меняет
        self.state: DrillState = initial_state(questions, seconds_per_question)
        self.result: Optional[SessionResult] = None

        self._timer: Optional[TimerHandle] = None
        self._started: bool = False
        self._torn_down: bool = False

    # -----------------------
    # Жизненный цикл
    # -----------------------

    def start(self, now_ms: int) -> None:
        if self._started:
            return
        self._started = True
        logger.info(
            "Drill started: %d questions, %ds per question",
            self.state.total,
            self.state.seconds_per_question,
        )
        self._arm(self.state.index, now_ms)

    def teardown(self) -> None:
        """Закрыть сессию посреди игры (выход, новый старт и т.п.)."""
        if self._torn_down:
            return
        self._torn_down = True
        self._disarm()
        if not self.state.completed:
            logger.info("Drill torn down at question %d/%d", self.state.index + 1, self.state.total)

    # -----------------------
    # Ввод
    # -----------------------

    def set_input(self, text: str) -> None:
        self._dispatch(InputChanged(text), now_ms=None)

    def type_text(self, chars: str) -> None:
        self.set_input(self.state.input_text + chars)

    def backspace(self) -> None:
        self.set_input(self.state.input_text[:-1])

    def submit(self, now_ms: int, index: Optional[int] = None) -> None:
        """
        index - номер вопроса, который был на экране в момент нажатия.
        Если вопрос уже закрыт (например, таймаутом в этом же кадре) - no-op.
        """
        self._dispatch(Submit(self.state.index if index is None else index), now_ms)

    # -----------------------
    # Состояние для рендера
    # -----------------------

    @property
    def is_finished(self) -> bool:
        return self.state.completed

    @property
    def is_active(self) -> bool:
        return self._started and not self._torn_down and not self.state.completed

    @property
    def records(self) -> tuple:
        return self.state.results

    def render_model(self) -> RenderModel:
        state = self.state
        total = state.total
        idx = min(state.index + (1 if state.completed else 0), total)
        current = state.current
        return RenderModel(
            question_number=min(state.index + 1, total),
            total=total,
            seconds_remaining=state.remaining,
            input_text=state.input_text,
            progress=idx / total,
            prompt=current.prompt if current is not None else "",
        )

    # -----------------------
    # Внутреннее
    # -----------------------

    def _on_tick(self, index: int, now_ms: int) -> None:
        self._dispatch(Tick(index), now_ms)

    def _dispatch(self, event: Event, now_ms: Optional[int]) -> None:
        if self._torn_down or (not self._started and not isinstance(event, InputChanged)):
            return

        state, effects = transition(self.state, event)
        if now_ms is None and any(isinstance(e, ArmCountdown) for e in effects):
            raise ValueError(f"{type(event).__name__} moves to the next question, now_ms is required")
        self.state = state

        for effect in effects:
            if isinstance(effect, Recorded):
                self._log_record(effect.record)
            elif isinstance(effect, ArmCountdown):
                self._arm(effect.index, now_ms)
            elif isinstance(effect, StopCountdown):
                self._disarm()
            elif isinstance(effect, Finished):
                self._finish(effect.result)

    def _arm(self, index: int, now_ms: int) -> None:
        # отсчёт для нового вопроса всегда начинается заново от момента перехода
        self._disarm()
        self._timer = self.scheduler.every(
            self.tick_ms,
            lambda fired_ms, i=index: self._on_tick(i, fired_ms),
            now_ms,
        )

    def _disarm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _finish(self, result: SessionResult) -> None:
        if self.result is not None:
            return
        self.result = result
        logger.info("Drill finished: score %d/%d", result.score, result.total)
        if self.on_finish is not None:
            self.on_finish(result)

    @staticmethod
    def _log_record(record: AnswerRecord) -> None:
        if record.timed_out:
            logger.info("Time is up for %r, input %r", record.prompt, record.user_input)
        logger.debug(
            "Answer recorded: %r user=%r expected=%r correct=%s",
            record.prompt,
            record.user_input,
            record.correct_answer,
            record.correct,
        )


def start_session(
    config: DrillConfig,
    scheduler: TickScheduler,
    now_ms: int,
    on_finish: Optional[Callable[[SessionResult], None]] = None,
    rng: Optional[random.Random] = None,
) -> DrillSession:
    """
    Собрать и запустить сессию по конфигу.

    Ошибки конфигурации (DrillConfigError) поднимаются до старта таймера.
    """
    config.validate()
    if rng is None:
        rng = random.Random(config.seed)
    questions = generate(config.question_count, rng)
    session = DrillSession(
        questions,
        seconds_per_question=config.seconds_per_question,
        scheduler=scheduler,
        on_finish=on_finish,
        tick_ms=config.tick_ms,
    )
    session.start(now_ms)
    return session
