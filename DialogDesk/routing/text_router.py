"""Chooses how a user message is turned into report text.

Order: local AI text processing, then the cloud LLM, then the raw message.
Each stage is optional and a failing stage hands over to the next one.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from DialogDesk.engines.llm_fallback import LLMFallbackEngine
from DialogDesk.engines.local_ai import LocalAIClient
from DialogDesk.errors import LLMUnavailableError, LocalAIError
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RoutedText:
    text: str
    source: str  # local_ai, llm or raw


class TextRouter:
    def __init__(
        self,
        local_ai: Optional[LocalAIClient] = None,
        llm: Optional[LLMFallbackEngine] = None,
        process_text: bool = True,
    ) -> None:
        self.local_ai = local_ai
        self.llm = llm
        # False when local AI is only deployed for speech recognition.
        self.process_text = process_text

    @property
    def speech_enabled(self) -> bool:
        return self.local_ai is not None

    def normalise(self, text: str, client_id: str) -> RoutedText:
        if self.local_ai is not None and self.process_text:
            try:
                processed = self.local_ai.process_text(text, client_id)
                if processed:
                    return RoutedText(processed, "local_ai")
                logger.warning("Local text processing returned nothing for %s", client_id)
            except LocalAIError as exc:
                logger.warning("Local text processing failed for %s: %s", client_id, exc)
        if self.llm is not None:
            try:
                return RoutedText(self.llm.rewrite_report(text), "llm")
            except LLMUnavailableError as exc:
                logger.warning("LLM fallback failed for %s: %s", client_id, exc)
        return RoutedText(text, "raw")

    def transcribe(self, audio_path: str | Path, client_id: str, segment_number: int) -> str:
        """Speech to text; raises LocalAIError when speech recognition is off or fails."""
        if self.local_ai is None:
            raise LocalAIError("Speech-to-text is disabled")
        return self.local_ai.speech_to_text(audio_path, client_id, segment_number)

    def health(self) -> Dict[str, bool]:
        """Reachability of the configured services only."""
        status: Dict[str, bool] = {}
        if self.local_ai is not None:
            status.update(self.local_ai.check_health())
        if self.llm is not None:
            status["llm"] = self.llm.check_health()
        return status


__all__ = ["RoutedText", "TextRouter"]
