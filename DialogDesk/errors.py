"""Exception hierarchy for DialogDesk collaborators."""


class DialogDeskError(Exception):
    """Base class for recoverable DialogDesk failures."""


class LocalAIError(DialogDeskError):
    """Local speech-to-text or text-processing service failed."""


class LLMUnavailableError(DialogDeskError):
    """Cloud LLM fallback did not produce a usable answer."""


class HelpdeskError(DialogDeskError):
    """Helpdesk API rejected or could not receive a ticket."""


__all__ = ["DialogDeskError", "LocalAIError", "LLMUnavailableError", "HelpdeskError"]
