from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pygame

from writingbuddy.config import (
    ConfigError,
    ConfigNotFoundError,
    display_font_size,
    load_config,
    settings_from_config,
)
from writingbuddy.messages import Messages
from writingbuddy.paths import ensure_parent, get_log_path, get_output_path
from writingbuddy.ui.common import (
    BACKGROUND,
    Color,
    create_caption_font,
    create_fullscreen_window,
    create_monospace_font,
    draw_cursor,
    draw_panel,
    draw_text_block,
    panel_inner_rect,
)
from writingbuddy.writing.frame import Frame, Tone, Viewport, build_frame
from writingbuddy.writing.session import BACKSPACE, ENTER, ESCAPE, OTHER, KeyEvent, Outcome, WritingSession
from writingbuddy.writing.store import append_session

logger = logging.getLogger(__name__)

# --- Tuning constants ---
POLL_MS = 200
MARGIN = 24
PADDING = 14
PANEL_GAP = 16

PALETTE: Dict[Tone, Color] = {
    Tone.ACTIVE: (0, 150, 170),
    Tone.DONE: (40, 160, 70),
    Tone.WARNING: (220, 160, 0),
    Tone.DANGER: (200, 40, 40),
    Tone.PASSIVE: (140, 140, 140),
}

_BLOCKING_MODS = pygame.KMOD_CTRL | pygame.KMOD_LALT | pygame.KMOD_META | pygame.KMOD_GUI


def key_event_from_pygame(event: pygame.event.Event) -> KeyEvent:
    if event.type != pygame.KEYDOWN:
        return OTHER
    if event.key in {pygame.K_RETURN, pygame.K_KP_ENTER}:
        return ENTER
    if event.key == pygame.K_BACKSPACE:
        return BACKSPACE
    if event.key == pygame.K_ESCAPE:
        return ESCAPE
    if event.mod & _BLOCKING_MODS:
        return OTHER
    if event.unicode and event.unicode.isprintable():
        return KeyEvent.character(event.unicode)
    return OTHER


def layout_panels(screen_rect: pygame.Rect, line_height: int) -> Dict[str, pygame.Rect]:
    """Instructions, title, body and the two stats panels, top to bottom."""
    area = screen_rect.inflate(-2 * MARGIN, -2 * MARGIN)
    single = line_height + 2 * PADDING
    instructions = pygame.Rect(area.left, area.top, area.width, single)
    title = pygame.Rect(area.left, instructions.bottom + PANEL_GAP, area.width, single)
    stats_top = area.bottom - single
    body_height = max(single, stats_top - PANEL_GAP - (title.bottom + PANEL_GAP))
    body = pygame.Rect(area.left, title.bottom + PANEL_GAP, area.width, body_height)
    half = (area.width - PANEL_GAP) // 2
    words = pygame.Rect(area.left, stats_top, half, single)
    time_panel = pygame.Rect(area.right - half, stats_top, half, single)
    return {
        "instructions": instructions,
        "title": title,
        "body": body,
        "words": words,
        "time": time_panel,
    }


class WritingApp:
    def __init__(self, session: WritingSession, messages: Messages, *, font_size: int = 22) -> None:
        self.session = session
        self.messages = messages

        self.screen, self.screen_rect = create_fullscreen_window()
        self.font = create_monospace_font(font_size)
        self.caption_font = create_caption_font(max(12, font_size * 2 // 3))
        self.cell_width = max(1, self.font.size(" ")[0])
        self.line_height = max(1, self.font.get_linesize())
        self.panels = layout_panels(self.screen_rect, self.line_height)

    def _inner(self, name: str) -> pygame.Rect:
        return panel_inner_rect(self.panels[name], PADDING)

    def viewport(self) -> Viewport:
        body = self._inner("body")
        return Viewport(columns=body.width // self.cell_width, rows=body.height // self.line_height)

    def _draw_single_line(self, name: str, caption_key: str, text: str, tone: Tone) -> None:
        color = PALETTE[tone]
        draw_panel(
            self.screen,
            self.panels[name],
            color,
            caption=self.messages.get(caption_key),
            caption_font=self.caption_font,
        )
        draw_text_block(self.screen, self._inner(name), text, self.font, color, self.line_height)

    def _render(self, frame: Frame) -> None:
        self.screen.fill(BACKGROUND)

        self._draw_single_line("instructions", "instructions", frame.instructions, Tone.PASSIVE)
        self._draw_single_line("title", "title", frame.title, frame.title_tone)
        self._draw_single_line("body", "text", frame.body.text, frame.body_tone)
        self._draw_single_line("words", "word-count", frame.word_label, frame.word_tone)
        self._draw_single_line("time", "time", frame.time_label, frame.time_tone)

        column, row = frame.cursor
        if frame.cursor_in_title:
            rect, text, tone = self._inner("title"), frame.title, frame.title_tone
        else:
            rect, text, tone = self._inner("body"), frame.body.text, frame.body_tone
        draw_cursor(self.screen, rect, text, column, row, self.font, PALETTE[tone], self.line_height)

        pygame.display.flip()

    def run(self) -> None:
        logger.info("Writing session started, viewport %s", self.viewport())
        while True:
            self._render(build_frame(self.session, self.viewport(), self.messages))
            event = pygame.event.wait(POLL_MS)
            if event.type != pygame.NOEVENT:
                outcome = self.session.handle(key_event_from_pygame(event))
                if outcome is Outcome.QUIT:
                    break
            self.session.check_idle()
        logger.info("Writing session ended with %d characters", len(self.session.body))


def setup_logging() -> None:
    """Log to a file; the full-screen window owns the terminal."""
    log_file = ensure_parent(get_log_path())
    level = os.environ.get("WRITINGBUDDY_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, mode="a", encoding="utf-8"),
        ],
    )
    logging.info("writingbuddy starting, logging to %s", log_file)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="writingbuddy",
        description="writingbuddy - write without distractions",
    )
    parser.add_argument(
        "-c",
        "--config-file",
        type=Path,
        help="Path to a YAML config file (default: search ./writingbuddy.yaml, then the user config directory)",
    )
    parser.add_argument(
        "-i",
        "--initialize-config",
        action="store_true",
        help="Write a default config file if none is found",
    )
    return parser.parse_args(argv)


def _store_session(session: WritingSession, output_path: Path, messages: Messages) -> bool:
    """Append the session text; returns False if the file could not be written."""
    if not session.has_text():
        return True
    print(f"{messages.get('storing-text')}{output_path}")
    try:
        append_session(output_path, session.title, session.body)
    except OSError as exc:
        logger.exception("Could not store session in %s", output_path)
        print(f"{messages.get('store-failed')}{exc}", file=sys.stderr)
        return False
    return True


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()
    messages = Messages.for_config()
    if args.config_file is not None:
        print(f"{messages.get('read-specified-config')}{args.config_file}")

    try:
        config = load_config(args.config_file, initialize=args.initialize_config)
        settings = settings_from_config(config)
        font_size = display_font_size(config)
    except ConfigNotFoundError as exc:
        print(f"{messages.get('config-not-found')}{exc.path}", file=sys.stderr)
        return 1
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        print(f"{messages.get('invalid-config')}{exc}", file=sys.stderr)
        return 1

    messages = Messages.for_config(config.get("language"))
    now = datetime.now()
    title = now.strftime(config["title_format"])
    output_path = get_output_path(config, now)
    logger.info("Settings: %s, output file %s", settings, output_path)

    session = WritingSession(title=title, settings=settings)
    try:
        WritingApp(session, messages, font_size=font_size).run()
    except Exception:
        logger.exception("Writing session aborted")
        raise
    finally:
        pygame.quit()
        stored = _store_session(session, output_path, messages)
    return 0 if stored else 1


if __name__ == "__main__":
    sys.exit(main())
