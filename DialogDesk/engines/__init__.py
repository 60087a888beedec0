"""Engine package exports."""

from .llm_fallback import LLMFallbackEngine
from .local_ai import LocalAIClient

__all__ = ["LLMFallbackEngine", "LocalAIClient"]
