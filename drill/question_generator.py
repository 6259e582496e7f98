import random
import uuid
from typing import Optional

from config.settings import DrillConfigError
from data.models import Question


OP_ADD = "+"
OP_SUB = "−"  # U+2212, not a hyphen

MIN_OPERAND = 10
MAX_RESULT = 99


def _question_id(rng: random.Random) -> str:
    # drawn from rng so a seeded batch is fully reproducible
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex


def make_addition(rng: random.Random) -> Question:
    a = rng.randint(MIN_OPERAND, MAX_RESULT)
    b = rng.randint(0, MAX_RESULT - a)
    return Question(id=_question_id(rng), prompt=f"{a} {OP_ADD} {b} = ?", answer=str(a + b))


def make_subtraction(rng: random.Random) -> Question:
    a = rng.randint(MIN_OPERAND, MAX_RESULT)
    b = rng.randint(0, a)
    return Question(id=_question_id(rng), prompt=f"{a} {OP_SUB} {b} = ?", answer=str(a - b))


def generate(count: int, rng: Optional[random.Random] = None) -> list[Question]:
    """
    Генерирует список Question на одну сессию.

    - длина = count (0 допустим, отрицательное значение - ошибка конфигурации)
    - оператор выбирается на каждый вопрос независимо, 50/50
    - rng можно передать снаружи, чтобы тесты были детерминированными
    """
    if count < 0:
        raise DrillConfigError(f"question count must be >= 0, got {count}")
    if rng is None:
        rng = random.Random()

    questions: list[Question] = []
    for _ in range(count):
        if rng.random() < 0.5:
            questions.append(make_addition(rng))
        else:
            questions.append(make_subtraction(rng))
    return questions
