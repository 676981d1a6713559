from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from writingbuddy.writing.goals import GoalProgress, goals_met
from writingbuddy.writing.idle import Clock, Stopwatch, Urgency, idle_expired, urgency

logger = logging.getLogger(__name__)


class Mode(Enum):
    TITLE_ENTRY = "title"
    WRITING = "writing"


class KeyKind(Enum):
    CHARACTER = "character"
    ENTER = "enter"
    BACKSPACE = "backspace"
    ESCAPE = "escape"
    OTHER = "other"


class Outcome(Enum):
    ACCEPTED = "accepted"
    IGNORED = "ignored"
    BLOCKED = "blocked"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        return cls(kind=KeyKind.CHARACTER, char=char)


ENTER = KeyEvent(KeyKind.ENTER)
BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
ESCAPE = KeyEvent(KeyKind.ESCAPE)
OTHER = KeyEvent(KeyKind.OTHER)


def _optional_positive(name: str, value: Optional[int]) -> Optional[int]:
    if value is None or value == 0:
        return None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class SessionSettings:
    time_goal: Optional[int] = None
    word_goal: Optional[int] = None
    strict_mode: bool = True
    backspace_enabled: bool = True
    keystroke_timeout: Optional[int] = None

    def __post_init__(self) -> None:
        # 0 means "no goal" / "no timeout"
        object.__setattr__(self, "time_goal", _optional_positive("time_goal", self.time_goal))
        object.__setattr__(self, "word_goal", _optional_positive("word_goal", self.word_goal))
        object.__setattr__(
            self, "keystroke_timeout", _optional_positive("keystroke_timeout", self.keystroke_timeout)
        )


class WritingSession:
    """The single writing session of a run and the only code that mutates it.

    ``handle`` applies one key event according to the current mode and reports
    how it was treated; it never raises. ``check_idle`` is called on every
    polling tick and wipes the body once the writer has been silent for longer
    than the keystroke timeout.
    """

    def __init__(
        self,
        title: str = "",
        settings: Optional[SessionSettings] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.title = title
        self.body = ""
        self.mode = Mode.TITLE_ENTRY
        self.settings = settings or SessionSettings()
        self.clock = clock
        self.stopwatch = Stopwatch(clock)
        self.last_keystroke_at: Optional[float] = None

    @property
    def timer_running(self) -> bool:
        return self.stopwatch.running

    def elapsed_seconds(self) -> float:
        return self.stopwatch.elapsed()

    def has_text(self) -> bool:
        return bool(self.body)

    def achieved_goals(self) -> bool:
        return goals_met(self.body, self.elapsed_seconds(), self.settings.word_goal, self.settings.time_goal)

    def progress(self) -> GoalProgress:
        return GoalProgress.measure(
            self.body, self.elapsed_seconds(), self.settings.word_goal, self.settings.time_goal
        )

    def urgency(self) -> Urgency:
        if self.mode is not Mode.WRITING:
            return Urgency.CALM
        return urgency(self.clock(), self.last_keystroke_at, self.settings.keystroke_timeout)

    def handle(self, event: KeyEvent) -> Outcome:
        if self.mode is Mode.TITLE_ENTRY:
            return self._handle_title(event)
        return self._handle_writing(event)

    def _handle_title(self, event: KeyEvent) -> Outcome:
        if event.kind is KeyKind.ENTER:
            # the timer starts with the first character typed in writing mode
            self.mode = Mode.WRITING
            return Outcome.ACCEPTED
        if event.kind is KeyKind.CHARACTER:
            self.title += event.char
            return Outcome.ACCEPTED
        if event.kind is KeyKind.BACKSPACE:
            if not self.title:
                return Outcome.IGNORED
            self.title = self.title[:-1]
            return Outcome.ACCEPTED
        if event.kind is KeyKind.ESCAPE:
            return Outcome.QUIT
        return Outcome.IGNORED

    def _handle_writing(self, event: KeyEvent) -> Outcome:
        if event.kind is KeyKind.ENTER:
            self.body += "\n"
            return Outcome.ACCEPTED
        if event.kind is KeyKind.CHARACTER:
            self.last_keystroke_at = self.clock()
            self.stopwatch.start()
            self.body += event.char
            return Outcome.ACCEPTED
        if event.kind is KeyKind.BACKSPACE:
            if not self.settings.backspace_enabled or not self.body:
                return Outcome.IGNORED
            self.body = self.body[:-1]
            return Outcome.ACCEPTED
        if event.kind is KeyKind.ESCAPE:
            if self.settings.strict_mode and not self.achieved_goals():
                logger.debug("Leaving writing mode blocked until goals are met")
                return Outcome.BLOCKED
            self.stopwatch.stop()
            self.last_keystroke_at = None
            self.mode = Mode.TITLE_ENTRY
            return Outcome.ACCEPTED
        return Outcome.IGNORED

    def check_idle(self) -> bool:
        """Reset the session if the keystroke timeout has expired. Returns True when it did."""
        if self.mode is not Mode.WRITING:
            return False
        if not idle_expired(self.clock(), self.last_keystroke_at, self.settings.keystroke_timeout):
            return False
        logger.info(
            "No keystroke for more than %s s, discarding %d characters",
            self.settings.keystroke_timeout,
            len(self.body),
        )
        self.last_keystroke_at = None
        self.stopwatch.reset()
        self.body = ""
        return True
