"""Shared helpers and protocol for DialogDesk ticket classifiers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, Pattern, Protocol, runtime_checkable

from DialogDesk.tickets.model import Ticket

STANDALONE_BONUS = 0.5


def normalize_text(text: str | None) -> str:
    """Lower-case text for keyword matching."""
    return (text or "").lower()


@lru_cache(maxsize=2048)
def _standalone_pattern(keyword: str) -> Pattern[str]:
    return re.compile(r"(?<!\S)" + re.escape(keyword) + r"(?!\S)")


@lru_cache(maxsize=2048)
def _word_pattern(word: str) -> Pattern[str]:
    return re.compile(r"(?<!\w)" + re.escape(word) + r"(?!\w)")


def is_standalone(keyword: str, lowered: str) -> bool:
    """True when the keyword sits between whitespace or text boundaries."""
    return bool(_standalone_pattern(keyword).search(lowered))


def contains_word(word: str, lowered: str) -> bool:
    """True when the word occurs without letters or digits glued to either side."""
    return bool(_word_pattern(word).search(lowered))


def keyword_score(text: str, keywords: Iterable[str], bonus: float = STANDALONE_BONUS) -> float:
    """One point per contained keyword plus a bonus for each standalone occurrence."""
    lowered = normalize_text(text)
    score = 0.0
    for keyword in keywords:
        kw = keyword.lower()
        if kw and kw in lowered:
            score += 1.0
            if is_standalone(kw, lowered):
                score += bonus
    return score


def best_label(scores: Dict[str, float], default: str) -> str:
    """Highest score wins; ties keep the earlier label and all-zero keeps the default."""
    best, best_score = default, 0.0
    for label, score in scores.items():
        if score > best_score:
            best, best_score = label, score
    return best


@dataclass(slots=True)
class ClassifierMetadata:
    name: str
    mode: str
    description: str = ""


@runtime_checkable
class TicketClassifierProtocol(Protocol):
    metadata: ClassifierMetadata

    def classify(self, text: str, subject: str = "", requester_id: str = "") -> Ticket:  # pragma: no cover - Protocol definition only
        ...


__all__ = [
    "STANDALONE_BONUS",
    "ClassifierMetadata",
    "TicketClassifierProtocol",
    "best_label",
    "contains_word",
    "is_standalone",
    "keyword_score",
    "normalize_text",
]
