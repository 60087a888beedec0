"""Cloud LLM fallback via the Hugging Face InferenceClient."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from huggingface_hub import InferenceClient  # type: ignore

from DialogDesk.errors import LLMUnavailableError
from DialogDesk.utils.config import LLMSettings
from DialogDesk.utils.logger import get_logger, shorten

logger = get_logger(__name__)

REWRITE_SYSTEM_PROMPT = (
    "You turn user messages to an IT helpdesk bot into a concise problem description. "
    "Keep the user's language (Ukrainian or Russian), keep every concrete detail such as "
    "device names, error texts and deadlines, drop greetings and filler, and do not invent "
    "facts. Answer with the description only."
)


class LLMFallbackEngine:
    """chat_completion wrapper with retries, used when local AI is unavailable."""

    def __init__(
        self,
        settings: LLMSettings,
        timeout: int = 30,
        max_retries: int = 1,
        client: Optional[Any] = None,
    ) -> None:
        self.model_name = settings.model
        self.max_tokens = settings.max_tokens
        self.temperature = settings.temperature
        self.timeout = timeout
        self.max_retries = max_retries
        self.client = client or InferenceClient(model=settings.model, token=settings.token, timeout=timeout)

    def _extract_content(self, response: Any) -> Optional[str]:
        choices = getattr(response, "choices", None)
        if not choices and isinstance(response, dict):
            choices = response.get("choices")
        if not choices:
            return None
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else getattr(first, "message", None)
        if message is None:
            return None
        content = message.get("content") if isinstance(message, dict) else getattr(message, "content", None)
        return None if content is None else str(content)

    def chat(self, messages: List[Dict[str, str]]) -> str:
        """Call chat_completion with retries; raise LLMUnavailableError when every attempt fails."""
        last_error: Optional[Exception] = None
        for attempt in range(max(1, self.max_retries + 1)):
            try:
                response = self.client.chat_completion(  # type: ignore[call-overload]
                    model=self.model_name,
                    messages=messages,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                )
            except Exception as exc:  # network, auth and rate-limit errors all look alike here
                logger.warning("LLM attempt %s failed: %s", attempt + 1, exc)
                last_error = exc
                continue
            content = self._extract_content(response)
            if content and content.strip():
                return content.strip()
            logger.warning("LLM attempt %s returned no content", attempt + 1)
        raise LLMUnavailableError(f"LLM {self.model_name} unavailable: {last_error or 'empty response'}")

    def rewrite_report(self, text: str) -> str:
        """Rewrite a raw user message into a concise problem description."""
        logger.info("Rewriting report with %s: %s", self.model_name, shorten(text))
        return self.chat(
            [
                {"role": "system", "content": REWRITE_SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ]
        )

    def check_health(self) -> bool:
        try:
            self.chat([{"role": "user", "content": "ping"}])
        except LLMUnavailableError:
            return False
        return True


__all__ = ["LLMFallbackEngine", "REWRITE_SYSTEM_PROMPT"]
