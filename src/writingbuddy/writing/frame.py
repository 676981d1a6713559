"""Read-only snapshot of a session, laid out for one viewport.

Nothing here touches pygame, so everything shown on screen can be checked
without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from writingbuddy.messages import Messages
from writingbuddy.writing.goals import GoalStatus
from writingbuddy.writing.idle import Urgency
from writingbuddy.writing.session import Mode, WritingSession
from writingbuddy.writing.wrap import Projection, project


class Tone(Enum):
    ACTIVE = "active"
    DONE = "done"
    WARNING = "warning"
    DANGER = "danger"
    PASSIVE = "passive"


_GOAL_TONES = {
    GoalStatus.DONE: Tone.DONE,
    GoalStatus.ACTIVE: Tone.ACTIVE,
    GoalStatus.INACTIVE: Tone.PASSIVE,
}

_URGENCY_TONES = {
    Urgency.CALM: Tone.ACTIVE,
    Urgency.WARNING: Tone.WARNING,
    Urgency.DANGER: Tone.DANGER,
}


@dataclass(frozen=True)
class Viewport:
    columns: int
    rows: int


@dataclass(frozen=True)
class Frame:
    mode: Mode
    instructions: str
    title: str
    body: Projection
    cursor_in_title: bool
    cursor: Tuple[int, int]
    title_tone: Tone
    body_tone: Tone
    word_label: str
    word_tone: Tone
    time_label: str
    time_tone: Tone


def instructions(session: WritingSession, messages: Messages) -> str:
    if session.mode is Mode.TITLE_ENTRY:
        exit_key = "exit-save" if session.has_text() else "exit-no-save"
        return messages.get(exit_key) + messages.get("start-writing")
    if session.settings.strict_mode and not session.achieved_goals():
        return messages.get("keep-writing")
    return messages.get("stop-writing")


def build_frame(session: WritingSession, viewport: Viewport, messages: Messages) -> Frame:
    body = project(session.body, viewport.columns, viewport.rows)
    progress = session.progress()
    if session.mode is Mode.TITLE_ENTRY:
        title_tone, body_tone = Tone.ACTIVE, Tone.PASSIVE
        cursor = (len(session.title), 1)
    else:
        title_tone, body_tone = Tone.PASSIVE, _URGENCY_TONES[session.urgency()]
        cursor = (body.column, body.row)
    return Frame(
        mode=session.mode,
        instructions=instructions(session, messages),
        title=session.title,
        body=body,
        cursor_in_title=session.mode is Mode.TITLE_ENTRY,
        cursor=cursor,
        title_tone=title_tone,
        body_tone=body_tone,
        word_label=progress.word_label,
        word_tone=_GOAL_TONES[progress.word_status],
        time_label=progress.time_label,
        time_tone=_GOAL_TONES[progress.time_status],
    )
