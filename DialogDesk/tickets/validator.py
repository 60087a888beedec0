"""Content validator rejecting low-information reports before ticket creation."""

from __future__ import annotations

import re
import string
from typing import Any, FrozenSet, List, Pattern

from DialogDesk.messages import validation_reason
from DialogDesk.tickets.model import ValidationResult
from DialogDesk.utils.logger import get_logger, shorten

logger = get_logger(__name__)

MIN_LENGTH = 5
MIN_MEANINGFUL_WORDS = 2

JUNK_TOKENS: FrozenSet[str] = frozenset(
    {"бла", "bla", "blah", "ла", "ля", "тест", "test", "qwe", "asd", "йцу", "фыв", "хм", "ммм"}
)

FILLER_WORDS: FrozenSet[str] = frozenset(
    {
        # Ukrainian
        "ну", "ой", "ах", "ех", "хм", "ага", "угу", "ого", "ось", "от", "так", "ні", "добре",
        "ладно", "нормально", "привіт", "дякую", "будь", "ласка", "ок", "окей", "типу", "короче",
        "взагалі", "просто", "коротше", "мабуть", "ніби", "наче",
        # Russian
        "эх", "ух", "вот", "да", "нет", "хорошо", "привет", "спасибо", "пожалуйста", "типа",
        "вообще", "наверное", "как", "бы",
        # English
        "ok", "okay", "well", "hi", "hello", "thanks", "yes", "no", "hmm", "um", "uh", "like",
        "so", "just",
    }
)

MEANINGLESS_PATTERNS: List[Pattern[str]] = [
    # single interjection
    re.compile(r"^(а|о|у|е|э|ну|ой|ах|ох|эх|ех|ух|хм|ага|угу|ого|ого-го|ой-ой|oh|ah|wow|hmm)[!?.…]*$"),
    # yes/no-only reply
    re.compile(r"^(так|ні|да|нет|yes|no|ok|ок|окей|okay|ага|угу|неа)[!?.…]*$"),
    # punctuation / symbols only
    re.compile(r"^[^\w]+$"),
    # digits only
    re.compile(r"^[\d\s.,:;+\-()]+$"),
    # three or more blah-like tokens
    re.compile(r"^((бла|bla|blah|ла|ля)[\s,.!-]*){3,}$"),
    # a short alphabetic pair repeated: "asasas", "хахаха"
    re.compile(r"^([a-zа-яёіїєґ]{2})\1{2,}$"),
]

_REPEATED_CHARS = re.compile(r"(\S)\1{4,}")
_WORD_CHAR = re.compile(r"\w")
_TOKEN_EDGES = string.punctuation + "«»“”„…–—"
_KEYBOARD_MASH = re.compile(r"[a-z]{5,}")


class ContentValidator:
    """Ordered rule chain; the first matching rule decides the rejection reason.

    Cheap structural checks run before the word-level ones. The keyboard-mash
    check treats any whitespace-stripped text made only of Latin letters as
    random typing, which also catches short all-English reports such as
    "vpn wifi"; this is a known weakness of the heuristic.
    """

    def __init__(
        self,
        junk_tokens: FrozenSet[str] = JUNK_TOKENS,
        filler_words: FrozenSet[str] = FILLER_WORDS,
        meaningless_patterns: List[Pattern[str]] | None = None,
    ) -> None:
        self.junk_tokens = junk_tokens
        self.filler_words = filler_words
        self.meaningless_patterns = meaningless_patterns or MEANINGLESS_PATTERNS

    def validate(self, text: Any) -> ValidationResult:
        result = self._check(text)
        if not result.is_valid:
            logger.debug("Rejected message (%s): %s", result.code, shorten(str(text), 40))
        return result

    def _check(self, text: Any) -> ValidationResult:
        if not isinstance(text, str) or text == "":
            return _reject("empty")

        trimmed = text.strip()
        if len(trimmed) < MIN_LENGTH:
            return _reject("too_short")

        lowered = trimmed.lower()
        if _REPEATED_CHARS.search(lowered):
            return _reject("repeated_chars")

        tokens = lowered.split()
        if len(tokens) >= 3 and len(set(tokens)) == 1 and tokens[0] in self.junk_tokens:
            return _reject("junk_tokens")

        if any(pattern.match(lowered) for pattern in self.meaningless_patterns):
            return _reject("meaningless")

        # Apostrophes and hyphens inside a token belong to the word.
        stripped = (token.strip(_TOKEN_EDGES) for token in tokens)
        words = [word for word in stripped if len(word) > 1 and _WORD_CHAR.search(word)]
        if not words:
            return _reject("no_words")

        if all(word in self.filler_words for word in words):
            return _reject("only_filler")

        meaningful = [word for word in words if word not in self.filler_words]
        if len(meaningful) < MIN_MEANINGFUL_WORDS:
            return _reject("too_little_content")

        if _KEYBOARD_MASH.fullmatch("".join(lowered.split())):
            return _reject("gibberish")

        return ValidationResult.accept()


def _reject(code: str) -> ValidationResult:
    return ValidationResult.reject(code, validation_reason(code))


_DEFAULT_VALIDATOR = ContentValidator()


def validate(text: Any) -> ValidationResult:
    """Validate a report with the default rule set."""
    return _DEFAULT_VALIDATOR.validate(text)


__all__ = ["ContentValidator", "validate", "JUNK_TOKENS", "FILLER_WORDS", "MEANINGLESS_PATTERNS", "MIN_LENGTH"]
