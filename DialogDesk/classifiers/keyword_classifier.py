"""Rule-based ticket classifier: department, priority, language, title and id."""

from __future__ import annotations

import random
import re
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from DialogDesk.classifiers.keywords import (
    DEPARTMENT_KEYWORDS,
    LANGUAGE_CONFIDENCE_THRESHOLD,
    PRIORITY_CHECK_ORDER,
    PRIORITY_KEYWORDS,
    RUSSIAN_MARKERS,
    UKRAINIAN_LETTER_WEIGHT,
    UKRAINIAN_LETTERS,
    UKRAINIAN_MARKERS,
)
from DialogDesk.classifiers.utils import (
    ClassifierMetadata,
    best_label,
    contains_word,
    keyword_score,
    normalize_text,
)
from DialogDesk.label_space import DEFAULT_DEPARTMENT, DEFAULT_PRIORITY, DEPARTMENTS
from DialogDesk.tickets.formatter import capitalize_first
from DialogDesk.tickets.model import Ticket
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)

TICKET_ID_PREFIX = "TKT-"
TICKET_ID_PATTERN = re.compile(r"^TKT-\d{17}$")

TITLE_MAX_LENGTH = 50
TITLE_TRUNCATED_LENGTH = 47
TITLE_ELLIPSIS = "..."
SUBJECT_MIN_LENGTH = 6
SENTENCE_SEARCH_START = 10
_SENTENCE_END = re.compile(r"[.!?]\s")
_LINE_BREAKS = re.compile(r"\s*\n\s*")


def _single_line(text: str) -> str:
    # Titles are rendered on one display line.
    return _LINE_BREAKS.sub(" ", text.strip())


def generate_title(text: str, subject: str | None = None) -> str:
    """Derive a ticket title.

    An explicit subject longer than six characters is used as is. Otherwise the
    body is kept when it fits into 50 characters, cut after the first sentence
    when that sentence ends inside [10, 50), or truncated to 47 chars + "...".
    """
    explicit = _single_line(subject or "")
    if len(explicit) > SUBJECT_MIN_LENGTH:
        return capitalize_first(explicit)

    title = _single_line(text or "")
    if len(title) > TITLE_MAX_LENGTH:
        match = _SENTENCE_END.search(title, SENTENCE_SEARCH_START)
        if match is not None and match.start() < TITLE_MAX_LENGTH:
            title = title[: match.start() + 1]
        else:
            title = title[:TITLE_TRUNCATED_LENGTH] + TITLE_ELLIPSIS
    return capitalize_first(title)


def generate_ticket_id(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """TKT-<YYYYMMDDHHMMSS><000-999>.

    The random suffix only makes collisions within one second unlikely
    (1 in 1000 per pair); it is not a uniqueness guarantee.
    """
    moment = now or datetime.now()
    suffix = (rng or random).randint(0, 999)
    return f"{TICKET_ID_PREFIX}{moment.strftime('%Y%m%d%H%M%S')}{suffix:03d}"


class KeywordTicketClassifier:
    """Bag-of-keywords classifier producing complete tickets.

    Keyword tables default to the static ones in ``keywords.py`` and can be
    replaced per instance, e.g. from a batch configuration file.
    """

    def __init__(
        self,
        department_keywords: Optional[Mapping[str, Sequence[str]]] = None,
        priority_keywords: Optional[Mapping[str, Sequence[str]]] = None,
        ukrainian_markers: Optional[Sequence[str]] = None,
        russian_markers: Optional[Sequence[str]] = None,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
    ) -> None:
        departments = department_keywords if department_keywords is not None else DEPARTMENT_KEYWORDS
        unknown = [name for name in departments if name not in DEPARTMENTS]
        if unknown:
            raise ValueError(f"Unknown departments in keyword table: {', '.join(unknown)}")
        # Canonical order keeps IT first so it wins ties.
        self.department_keywords: Dict[str, List[str]] = {
            name: list(departments[name]) for name in DEPARTMENTS if name in departments
        }
        priorities = priority_keywords if priority_keywords is not None else PRIORITY_KEYWORDS
        self.priority_keywords: Dict[str, List[str]] = {
            name: list(priorities.get(name, [])) for name in PRIORITY_CHECK_ORDER
        }
        self.ukrainian_markers = list(ukrainian_markers if ukrainian_markers is not None else UKRAINIAN_MARKERS)
        self.russian_markers = list(russian_markers if russian_markers is not None else RUSSIAN_MARKERS)
        self.clock = clock
        self.rng = rng or random.Random()
        self.metadata = ClassifierMetadata(
            name="Keyword rules",
            mode="keyword",
            description="Department/priority keyword scoring with Ukrainian/Russian language heuristics",
        )

    def department_scores(self, text: str) -> Dict[str, float]:
        return {name: keyword_score(text, keywords) for name, keywords in self.department_keywords.items()}

    def predict_department(self, text: str) -> str:
        scores = self.department_scores(text)
        department = best_label(scores, DEFAULT_DEPARTMENT)
        logger.debug("Department scores %s -> %s", scores, department)
        return department

    def predict_priority(self, text: str) -> str:
        lowered = normalize_text(text)
        for level in PRIORITY_CHECK_ORDER:
            if any(kw.lower() in lowered for kw in self.priority_keywords[level] if kw):
                return level
        return DEFAULT_PRIORITY

    def language_scores(self, text: str) -> Dict[str, int]:
        """Ukrainian letters count double; each marker adds one point.

        Markers are matched as whole words, not as substrings, so short
        markers such as "та" do not score inside "стандарт" or "квитанція".
        """
        lowered = normalize_text(text)
        letters = sum(1 for char in lowered if char in UKRAINIAN_LETTERS)
        ukrainian = letters * UKRAINIAN_LETTER_WEIGHT
        ukrainian += sum(1 for word in self.ukrainian_markers if contains_word(word, lowered))
        russian = sum(1 for word in self.russian_markers if contains_word(word, lowered))
        return {"Ukrainian": ukrainian, "Russian": russian}

    def detect_language(self, text: str) -> str:
        scores = self.language_scores(text)
        ukrainian, russian = scores["Ukrainian"], scores["Russian"]
        if ukrainian > russian:
            return "Ukrainian" if ukrainian > LANGUAGE_CONFIDENCE_THRESHOLD else "Mixed"
        if russian > ukrainian:
            return "Russian" if russian > LANGUAGE_CONFIDENCE_THRESHOLD else "Mixed"
        return "Mixed"

    def classify(self, text: str, subject: str = "", requester_id: str = "") -> Ticket:
        """Build a new ticket from validated report text."""
        created_at = self.clock().replace(microsecond=0)
        ticket = Ticket(
            id=generate_ticket_id(created_at, self.rng),
            department=self.predict_department(text),
            priority=self.predict_priority(text),
            title=generate_title(text, subject),
            description=(text or "").strip(),
            requester=str(requester_id),
            language=self.detect_language(text),
            created_at=created_at,
        )
        logger.info("Ticket %s created for %s: department=%s priority=%s", ticket.id, ticket.requester, ticket.department, ticket.priority)
        return ticket


_DEFAULT_CLASSIFIER: Optional[KeywordTicketClassifier] = None


def classify(text: str, subject: str = "", requester_id: str = "") -> Ticket:
    """Classify with a lazily created default classifier."""
    global _DEFAULT_CLASSIFIER
    if _DEFAULT_CLASSIFIER is None:
        _DEFAULT_CLASSIFIER = KeywordTicketClassifier()
    return _DEFAULT_CLASSIFIER.classify(text, subject, requester_id)


__all__ = [
    "KeywordTicketClassifier",
    "TICKET_ID_PATTERN",
    "classify",
    "generate_ticket_id",
    "generate_title",
]
