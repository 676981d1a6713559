"""Greedy word wrapping and the tail-window projection of the body text.

The body grows without bound while the viewport stays fixed, so only the most
recent wrapped lines are shown. Wrapping drops whitespace at line breaks and at
the end of the text; the original trailing whitespace is put back afterwards so
the cursor lands after the spaces or newlines the writer just typed. A run of
several trailing spaces can therefore spill past the right margin.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple

_TOKEN_RE = re.compile(r"\s+|\S+")


@dataclass
class _Token:
    text: str
    is_space: bool


@dataclass(frozen=True)
class Projection:
    text: str
    column: int
    row: int


def _tokenize(paragraph: str) -> List[_Token]:
    return [_Token(text=match.group(), is_space=match.group().isspace()) for match in _TOKEN_RE.finditer(paragraph)]


def _wrap_tokens(tokens: List[_Token], max_width: int) -> List[str]:
    lines: List[str] = []
    current = ""
    for token in tokens:
        if token.is_space:
            # whitespace that would open a wrapped line is dropped
            if not current and lines:
                continue
            current += token.text
            continue

        word = token.text
        if len(current) + len(word) <= max_width:
            current += word
            continue

        if current.rstrip():
            lines.append(current.rstrip())
        current = ""
        if len(word) <= max_width:
            current = word
            continue

        chunks = [word[i : i + max_width] for i in range(0, len(word), max_width)]
        lines.extend(chunks[:-1])
        current = chunks[-1]

    if current.rstrip() or not lines:
        lines.append(current.rstrip())
    return lines


def wrap(text: str, width: int) -> List[str]:
    """Wrap each paragraph of ``text`` to ``width`` columns. Never returns an empty list."""
    max_width = max(1, width)
    lines: List[str] = []
    for paragraph in text.split("\n"):
        lines.extend(_wrap_tokens(_tokenize(paragraph), max_width))
    return lines


def fill(text: str, width: int) -> str:
    return "\n".join(wrap(text, width))


def split_lines(text: str) -> List[str]:
    """Split on newlines; a trailing newline does not open another line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def trailing_whitespace(text: str) -> str:
    return text[len(text.rstrip()) :]


def visible_text(text: str, rows: int, cols: int) -> str:
    lines = split_lines(fill(text, cols))
    total_lines = len(lines)
    skip = total_lines - rows + 1 if total_lines > max(1, rows) - 1 else 0
    shown = "".join(f"{line}\n" for line in lines[skip:]).rstrip()
    return shown + trailing_whitespace(text)


def cursor_position(text: str) -> Tuple[int, int]:
    """Return ``(column, row)`` just past the end of ``text``; rows start at 1."""
    lines = split_lines(text)
    if text.endswith("\n"):
        return 0, len(lines) + 1
    last_line = lines[-1] if lines else ""
    return len(last_line), max(1, len(lines))


def project(text: str, cols: int, rows: int) -> Projection:
    shown = visible_text(text, rows, cols)
    column, row = cursor_position(shown)
    return Projection(text=shown, column=column, row=row)
