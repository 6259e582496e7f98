from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Question:
    """
    One arithmetic question of a drill.
    """
    id: str
    prompt: str      # "42 + 7 = ?" or "42 − 7 = ?"
    answer: str      # decimal string of the result, e.g. "49"


@dataclass(frozen=True)
class AnswerRecord:
    """
    What happened with one question: created once, on submit or timeout.
    """
    id: str
    prompt: str
    correct_answer: str
    user_input: str          # trimmed, may be ""
    correct: bool
    earned: int              # 1 or 0
    timed_out: bool = False


@dataclass(frozen=True)
class SessionResult:
    results: Tuple[AnswerRecord, ...]
    score: int
    total: int

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return 0.0
        return self.score / self.total


@dataclass(frozen=True)
class RenderModel:
    """
    Snapshot of a running drill for the presentation layer.
    """
    question_number: int     # 1-based
    total: int
    seconds_remaining: int
    input_text: str
    progress: float          # idx / total
    prompt: str
