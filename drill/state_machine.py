from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from data.models import AnswerRecord, Question, SessionResult


MAX_INPUT_LEN = 6


# -------------------------------------------------
# События (что может прийти в машину состояний)
# -------------------------------------------------

@dataclass(frozen=True)
class InputChanged:
    text: str


@dataclass(frozen=True)
class Submit:
    # None = "текущий вопрос"; иначе номер вопроса, на который был дан ответ
    index: Optional[int] = None


@dataclass(frozen=True)
class Tick:
    # номер вопроса, для которого был запущен таймер
    index: int


Event = Union[InputChanged, Submit, Tick]


# -------------------------------------------------
# Эффекты (что сессия должна сделать после перехода)
# -------------------------------------------------

@dataclass(frozen=True)
class ArmCountdown:
    index: int


@dataclass(frozen=True)
class StopCountdown:
    pass


@dataclass(frozen=True)
class Recorded:
    record: AnswerRecord


@dataclass(frozen=True)
class Finished:
    result: SessionResult


Effect = Union[ArmCountdown, StopCountdown, Recorded, Finished]


@dataclass(frozen=True)
class DrillState:
    """
    Состояние одной сессии.

    - completed=False: ждём ответ на вопрос questions[index]
    - completed=True: все вопросы отвечены, results заполнен целиком
    """

    questions: Tuple[Question, ...]
    seconds_per_question: int
    index: int = 0
    remaining: int = 0
    input_text: str = ""
    results: Tuple[AnswerRecord, ...] = ()
    completed: bool = False

    @property
    def current(self) -> Optional[Question]:
        if self.completed:
            return None
        return self.questions[self.index]

    @property
    def total(self) -> int:
        return len(self.questions)


def sanitize_input(text: str) -> str:
    """Оставляем только цифры (как в поле ввода), не длиннее MAX_INPUT_LEN."""
    digits = "".join(ch for ch in (text or "") if ch.isdigit() and ch.isascii())
    return digits[:MAX_INPUT_LEN]


def evaluate(question: Question, user_input: str, timed_out: bool = False) -> AnswerRecord:
    """
    Проверка ответа: строгое сравнение строк после strip().

    "07" != "7" - это осознанно, сравниваем именно запись числа.
    """
    answer = str(user_input if user_input is not None else "").strip()
    correct = answer == question.answer
    return AnswerRecord(
        id=question.id,
        prompt=question.prompt,
        correct_answer=question.answer,
        user_input=answer,
        correct=correct,
        earned=1 if correct else 0,
        timed_out=timed_out,
    )


def build_result(results: Tuple[AnswerRecord, ...]) -> SessionResult:
    return SessionResult(
        results=results,
        score=sum(r.earned for r in results),
        total=len(results),
    )


def initial_state(questions, seconds_per_question: int) -> DrillState:
    questions = tuple(questions)
    return DrillState(
        questions=questions,
        seconds_per_question=seconds_per_question,
        index=0,
        remaining=seconds_per_question,
        completed=len(questions) == 0,
    )


def _resolve(state: DrillState, timed_out: bool) -> Tuple[DrillState, Tuple[Effect, ...]]:
    record = evaluate(state.questions[state.index], state.input_text, timed_out=timed_out)
    results = state.results + (record,)
    next_index = state.index + 1

    if next_index < state.total:
        new_state = replace(
            state,
            index=next_index,
            remaining=state.seconds_per_question,
            input_text="",
            results=results,
        )
        return new_state, (Recorded(record), ArmCountdown(next_index))

    new_state = replace(state, remaining=0, input_text="", results=results, completed=True)
    return new_state, (Recorded(record), StopCountdown(), Finished(build_result(results)))


def transition(state: DrillState, event: Event) -> Tuple[DrillState, Tuple[Effect, ...]]:
    """
    Чистая функция перехода: (состояние, событие) -> (новое состояние, эффекты).

    Ничего не знает про pygame и таймеры: таймер живёт в DrillSession,
    сюда приходят только Tick-и.
    """
    if not isinstance(event, (InputChanged, Submit, Tick)):
        raise TypeError(f"Unknown event: {event!r}")

    # Completed - терминальное состояние, любые события игнорируем
    if state.completed:
        return state, ()

    if isinstance(event, InputChanged):
        return replace(state, input_text=sanitize_input(event.text)), ()

    if isinstance(event, Submit):
        if event.index is not None and event.index != state.index:
            return state, ()
        return _resolve(state, timed_out=False)

    # Tick от таймера чужого (уже закрытого) вопроса - no-op
    if event.index != state.index:
        return state, ()

    remaining = max(0, state.remaining - 1)
    if remaining > 0:
        return replace(state, remaining=remaining), ()

    return _resolve(replace(state, remaining=0), timed_out=True)
