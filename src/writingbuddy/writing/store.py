from __future__ import annotations

import logging
from pathlib import Path

from writingbuddy.paths import ensure_parent

logger = logging.getLogger(__name__)


def append_session(path: Path, title: str, body: str) -> bool:
    """Append a finished session to ``path``. Returns False when there was nothing to store."""
    if not body:
        return False
    ensure_parent(path)
    with path.open("a", encoding="utf-8") as handle:
        if title:
            handle.write(title + "\n")
        handle.write(body + "\n")
        handle.write("\n")
    logger.info("Appended %d characters to %s", len(body), path)
    return True
