from __future__ import annotations

from typing import Optional, Tuple

import pygame


Color = Tuple[int, int, int]

BACKGROUND: Color = (248, 248, 248)

_MONOSPACE_FONTS = "dejavusansmono,liberationmono,ubuntumono,menlo,consolas,couriernew,monospace"


def create_fullscreen_window(*, mouse_visible: bool = False) -> Tuple[pygame.Surface, pygame.Rect]:
    pygame.init()
    screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    pygame.mouse.set_visible(mouse_visible)
    return screen, screen.get_rect()


def create_monospace_font(size: int) -> pygame.font.Font:
    path = pygame.font.match_font(_MONOSPACE_FONTS)
    if path:
        return pygame.font.Font(path, size)
    return pygame.font.SysFont("monospace", size)


def create_caption_font(size: int) -> pygame.font.Font:
    if pygame.font.match_font("ubuntu"):
        return pygame.font.SysFont("ubuntu", size)
    return pygame.font.SysFont("sans", size)


def panel_inner_rect(rect: pygame.Rect, padding: int) -> pygame.Rect:
    inner = rect.inflate(-2 * padding, -2 * padding)
    inner.width = max(0, inner.width)
    inner.height = max(0, inner.height)
    return inner


def draw_panel(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: Color,
    *,
    caption: str = "",
    caption_font: Optional[pygame.font.Font] = None,
    border_width: int = 2,
) -> None:
    pygame.draw.rect(surface, color, rect, width=border_width, border_radius=10)
    if not caption or caption_font is None:
        return
    text = caption_font.render(f" {caption} ", True, color)
    text_rect = text.get_rect(midleft=(rect.left + 14, rect.top))
    # cut the border behind the caption
    pygame.draw.rect(surface, BACKGROUND, text_rect)
    surface.blit(text, text_rect)


def draw_text_block(
    surface: pygame.Surface,
    rect: pygame.Rect,
    text: str,
    font: pygame.font.Font,
    color: Color,
    line_height: int,
) -> None:
    y = rect.top
    for line in text.split("\n"):
        if y + line_height > rect.bottom + 1:
            break
        if line:
            surface.blit(font.render(line, True, color), (rect.left, y))
        y += line_height


def draw_cursor(
    surface: pygame.Surface,
    rect: pygame.Rect,
    text: str,
    column: int,
    row: int,
    font: pygame.font.Font,
    color: Color,
    line_height: int,
) -> None:
    """Draw a bar cursor at ``(column, row)`` of ``text``; rows start at 1."""
    lines = text.split("\n")
    line = lines[row - 1] if 0 < row <= len(lines) else ""
    x = rect.left + font.size(line[:column])[0]
    y = rect.top + (max(1, row) - 1) * line_height
    pygame.draw.rect(surface, color, (x, y, 3, line_height))
