from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GoalStatus(Enum):
    DONE = "done"
    ACTIVE = "active"
    INACTIVE = "inactive"


def count_words(text: str) -> int:
    return len(text.split())


def word_goal_met(text: str, word_goal: Optional[int]) -> bool:
    if word_goal is None:
        return True
    return count_words(text) >= word_goal


def time_goal_met(elapsed_seconds: float, time_goal: Optional[int]) -> bool:
    if time_goal is None:
        return True
    return int(elapsed_seconds) >= time_goal


def goals_met(
    text: str,
    elapsed_seconds: float,
    word_goal: Optional[int],
    time_goal: Optional[int],
) -> bool:
    """Unset goals count as met, so with no goals this is always true."""
    return word_goal_met(text, word_goal) and time_goal_met(elapsed_seconds, time_goal)


def _status(goal: Optional[int], met: bool) -> GoalStatus:
    if goal is None:
        return GoalStatus.INACTIVE
    return GoalStatus.DONE if met else GoalStatus.ACTIVE


def word_goal_status(text: str, word_goal: Optional[int]) -> GoalStatus:
    return _status(word_goal, word_goal_met(text, word_goal))


def time_goal_status(elapsed_seconds: float, time_goal: Optional[int]) -> GoalStatus:
    return _status(time_goal, time_goal_met(elapsed_seconds, time_goal))


def word_count_label(words: int, word_goal: Optional[int]) -> str:
    if word_goal is None:
        return f"{words}"
    return f"{words}/{word_goal}"


def time_label(elapsed_seconds: float, time_goal: Optional[int]) -> str:
    seconds = int(elapsed_seconds)
    if time_goal is None:
        return f"{seconds} s"
    return f"{seconds} s/{time_goal} s"


@dataclass(frozen=True)
class GoalProgress:
    words: int
    elapsed_seconds: float
    word_status: GoalStatus
    time_status: GoalStatus
    word_label: str
    time_label: str
    achieved: bool

    @classmethod
    def measure(
        cls,
        text: str,
        elapsed_seconds: float,
        word_goal: Optional[int],
        time_goal: Optional[int],
    ) -> "GoalProgress":
        words = count_words(text)
        return cls(
            words=words,
            elapsed_seconds=elapsed_seconds,
            word_status=word_goal_status(text, word_goal),
            time_status=time_goal_status(elapsed_seconds, time_goal),
            word_label=word_count_label(words, word_goal),
            time_label=time_label(elapsed_seconds, time_goal),
            achieved=goals_met(text, elapsed_seconds, word_goal, time_goal),
        )
