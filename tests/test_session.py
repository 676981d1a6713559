import pytest

from writingbuddy.writing.idle import Urgency
from writingbuddy.writing.session import (
    BACKSPACE,
    ENTER,
    ESCAPE,
    OTHER,
    KeyEvent,
    Mode,
    Outcome,
    SessionSettings,
    WritingSession,
)


def _type(session, text):
    for char in text:
        session.handle(KeyEvent.character(char))


def _writing_session(clock, body="", **settings):
    session = WritingSession(title="## 2026-10-19", settings=SessionSettings(**settings), clock=clock)
    session.handle(ENTER)
    _type(session, body)
    return session


def test_settings_normalize_zero_to_unset():
    settings = SessionSettings(time_goal=0, word_goal=0, keystroke_timeout=0)
    assert settings.time_goal is None
    assert settings.word_goal is None
    assert settings.keystroke_timeout is None


def test_settings_reject_negative_values():
    with pytest.raises(ValueError):
        SessionSettings(word_goal=-1)


def test_title_mode_edits_title(clock):
    session = WritingSession(title="Draft", clock=clock)
    assert session.mode is Mode.TITLE_ENTRY
    _type(session, "!")
    assert session.title == "Draft!"
    assert session.handle(BACKSPACE) is Outcome.ACCEPTED
    assert session.handle(BACKSPACE) is Outcome.ACCEPTED
    assert session.title == "Dra"
    assert session.body == ""


def test_title_backspace_on_empty_title_is_ignored(clock):
    session = WritingSession(title="", clock=clock)
    assert session.handle(BACKSPACE) is Outcome.IGNORED
    assert session.title == ""


def test_escape_in_title_mode_quits(clock):
    session = WritingSession(clock=clock)
    assert session.handle(ESCAPE) is Outcome.QUIT


def test_other_events_are_ignored_in_both_modes(clock):
    session = WritingSession(title="t", clock=clock)
    assert session.handle(OTHER) is Outcome.IGNORED
    session.handle(ENTER)
    assert session.handle(OTHER) is Outcome.IGNORED
    assert session.title == "t"
    assert session.body == ""


def test_enter_starts_writing_but_not_the_timer(clock):
    session = WritingSession(clock=clock)
    session.handle(ENTER)
    assert session.mode is Mode.WRITING
    assert not session.timer_running
    assert session.last_keystroke_at is None

    clock.advance(30)
    _type(session, "a")
    assert session.timer_running
    assert session.last_keystroke_at == clock.now
    clock.advance(4)
    assert session.elapsed_seconds() == 4


def test_enter_in_writing_inserts_newline(clock):
    session = _writing_session(clock, "abc")
    session.handle(ENTER)
    assert session.body == "abc\n"


def test_backspace_removes_last_character(clock):
    session = _writing_session(clock, "abc")
    assert session.handle(BACKSPACE) is Outcome.ACCEPTED
    assert session.body == "ab"


def test_backspace_disabled_keeps_body(clock):
    session = _writing_session(clock, "abc", backspace_enabled=False)
    assert session.handle(BACKSPACE) is Outcome.IGNORED
    assert session.body == "abc"


def test_backspace_on_empty_body_is_ignored(clock):
    session = _writing_session(clock)
    assert session.handle(BACKSPACE) is Outcome.IGNORED
    assert session.body == ""


def test_no_goals_are_always_achieved(clock):
    session = _writing_session(clock)
    assert session.achieved_goals()
    _type(session, "some words here")
    assert session.achieved_goals()


def test_strict_mode_blocks_escape_until_word_goal_is_met(clock):
    session = _writing_session(clock, "a b", word_goal=3, strict_mode=True)
    assert not session.achieved_goals()
    assert session.handle(ESCAPE) is Outcome.BLOCKED
    assert session.mode is Mode.WRITING
    assert session.body == "a b"

    _type(session, " c")
    assert session.body == "a b c"
    assert session.achieved_goals()
    assert session.handle(ESCAPE) is Outcome.ACCEPTED
    assert session.mode is Mode.TITLE_ENTRY
    assert not session.timer_running
    assert session.last_keystroke_at is None


def test_strict_mode_blocks_escape_until_time_goal_is_met(clock):
    session = _writing_session(clock, "a", time_goal=60)
    clock.advance(59)
    assert session.handle(ESCAPE) is Outcome.BLOCKED
    clock.advance(1)
    assert session.handle(ESCAPE) is Outcome.ACCEPTED


def test_non_strict_mode_allows_escape_with_unmet_goals(clock):
    session = _writing_session(clock, "a b", word_goal=3, strict_mode=False)
    assert not session.achieved_goals()
    assert session.handle(ESCAPE) is Outcome.ACCEPTED
    assert session.mode is Mode.TITLE_ENTRY


def test_timer_pauses_while_editing_title(clock):
    session = _writing_session(clock, "a")
    clock.advance(10)
    session.handle(ESCAPE)
    clock.advance(100)
    assert session.elapsed_seconds() == 10

    session.handle(ENTER)
    clock.advance(100)
    assert session.elapsed_seconds() == 10
    _type(session, "b")
    clock.advance(5)
    assert session.elapsed_seconds() == 15


def test_idle_timeout_wipes_body_but_stays_in_writing(clock):
    session = _writing_session(clock, "precious words", keystroke_timeout=5)
    clock.advance(6)
    assert session.check_idle()
    assert session.body == ""
    assert session.elapsed_seconds() == 0
    assert not session.timer_running
    assert session.last_keystroke_at is None
    assert session.mode is Mode.WRITING


def test_idle_check_waits_for_the_timeout(clock):
    session = _writing_session(clock, "abc", keystroke_timeout=5)
    clock.advance(5)
    assert not session.check_idle()
    _type(session, "d")
    clock.advance(4)
    assert not session.check_idle()
    assert session.body == "abcd"


def test_idle_check_needs_a_keystroke_and_a_timeout(clock):
    waiting = _writing_session(clock, keystroke_timeout=5)
    untimed = _writing_session(clock, "abc")
    clock.advance(600)
    assert not waiting.check_idle()
    assert not untimed.check_idle()
    assert untimed.body == "abc"


def test_idle_check_is_off_in_title_mode(clock):
    session = _writing_session(clock, "abc", keystroke_timeout=5)
    session.handle(ESCAPE)
    clock.advance(60)
    assert not session.check_idle()
    assert session.body == "abc"


def test_newline_does_not_refresh_the_idle_timer(clock):
    session = _writing_session(clock, "abc", keystroke_timeout=5)
    clock.advance(4)
    session.handle(ENTER)
    clock.advance(2)
    assert session.check_idle()


def test_urgency_follows_silence(clock):
    session = _writing_session(clock, "abc", keystroke_timeout=10)
    assert session.urgency() is Urgency.CALM
    clock.advance(6)
    assert session.urgency() is Urgency.WARNING
    clock.advance(3)
    assert session.urgency() is Urgency.DANGER
    session.handle(ESCAPE)
    assert session.urgency() is Urgency.CALM
