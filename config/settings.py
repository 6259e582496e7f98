import os
from dataclasses import dataclass, replace
from typing import Optional


MIN_SECONDS = 1
MAX_SECONDS = 120


class DrillConfigError(ValueError):
    """Raised when a drill cannot be built from the given settings."""


def clamp_seconds(value: int) -> int:
    return max(MIN_SECONDS, min(MAX_SECONDS, int(value)))


@dataclass(frozen=True)
class WindowConfig:
    width: int = 1000
    height: int = 720
    fps: int = 60
    title: str = "Math Drill"


@dataclass(frozen=True)
class DrillConfig:
    question_count: int = 10
    seconds_per_question: int = 10
    tick_ms: int = 1000
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to store the clamped value
        object.__setattr__(self, "seconds_per_question", clamp_seconds(self.seconds_per_question))

    def with_seconds(self, seconds: int) -> "DrillConfig":
        return replace(self, seconds_per_question=seconds)

    def validate(self) -> None:
        if self.question_count < 1:
            raise DrillConfigError(f"question_count must be >= 1, got {self.question_count}")
        if self.tick_ms < 1:
            raise DrillConfigError(f"tick_ms must be >= 1, got {self.tick_ms}")


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise DrillConfigError(f"{name} must be an integer, got {raw!r}") from exc


def load_drill_config() -> DrillConfig:
    cfg = DrillConfig()
    count = _env_int("MATH_DRILL_QUESTIONS")
    seconds = _env_int("MATH_DRILL_SECONDS")
    seed = _env_int("MATH_DRILL_SEED")
    if count is not None:
        cfg = replace(cfg, question_count=count)
    if seconds is not None:
        cfg = cfg.with_seconds(seconds)
    if seed is not None:
        cfg = replace(cfg, seed=seed)
    return cfg
