from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional

DEFAULT_LANGUAGE = "en-US"

CATALOGS: Dict[str, Dict[str, str]] = {
    "en-US": {
        "instructions": "Instructions",
        "title": "Title",
        "text": "Text",
        "word-count": "Word count",
        "time": "Time",
        "exit-save": "Esc: save and exit. ",
        "exit-no-save": "Esc: exit without saving. ",
        "start-writing": "Enter: start writing.",
        "keep-writing": "Keep writing until your goals are reached.",
        "stop-writing": "Esc: stop writing.",
        "storing-text": "Storing text into: ",
        "store-failed": "Could not store the text: ",
        "read-specified-config": "Reading config file: ",
        "config-not-found": "Config file not found: ",
        "invalid-config": "Invalid configuration: ",
    },
    "de": {
        "instructions": "Anleitung",
        "title": "Titel",
        "text": "Text",
        "word-count": "Wörter",
        "time": "Zeit",
        "exit-save": "Esc: speichern und beenden. ",
        "exit-no-save": "Esc: beenden ohne zu speichern. ",
        "start-writing": "Enter: mit dem Schreiben beginnen.",
        "keep-writing": "Schreib weiter, bis deine Ziele erreicht sind.",
        "stop-writing": "Esc: Schreiben beenden.",
        "storing-text": "Text wird gespeichert in: ",
        "store-failed": "Text konnte nicht gespeichert werden: ",
        "read-specified-config": "Lese Konfigurationsdatei: ",
        "config-not-found": "Konfigurationsdatei nicht gefunden: ",
        "invalid-config": "Ungültige Konfiguration: ",
    },
}


def _primary_subtag(tag: str) -> str:
    # "de_CH.UTF-8" -> "de"
    return tag.split(".")[0].replace("_", "-").split("-")[0].lower()


def requested_languages(configured: Optional[str] = None) -> List[str]:
    requested: List[str] = []
    if configured:
        requested.append(configured)
    for name in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(name)
        if value and value not in {"C", "POSIX"}:
            requested.append(value)
    return requested


def negotiate_language(requested: Iterable[str], available: Iterable[str] = CATALOGS) -> str:
    available = list(available)
    for tag in requested:
        wanted = _primary_subtag(tag)
        for candidate in available:
            if _primary_subtag(candidate) == wanted:
                return candidate
    return DEFAULT_LANGUAGE


class Messages:
    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        self.language = language
        self._catalog = CATALOGS[language]

    @classmethod
    def for_config(cls, configured: Optional[str] = None) -> "Messages":
        return cls(negotiate_language(requested_languages(configured)))

    def get(self, key: str) -> str:
        try:
            return self._catalog[key]
        except KeyError:
            raise KeyError(f"Message doesn't exist: {key}") from None
