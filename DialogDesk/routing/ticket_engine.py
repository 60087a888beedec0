"""TicketEngine chains validation, classification and rendering."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from DialogDesk.classifiers.keyword_classifier import KeywordTicketClassifier
from DialogDesk.classifiers.utils import ClassifierMetadata, TicketClassifierProtocol
from DialogDesk.tickets.formatter import render
from DialogDesk.tickets.model import PendingTicketRecord, Ticket, ValidationResult
from DialogDesk.tickets.validator import ContentValidator
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class TicketOutcome:
    validation: ValidationResult
    ticket: Optional[Ticket] = None
    display_text: str = ""
    latency_ms: float = 0.0

    @property
    def accepted(self) -> bool:
        return self.validation.is_valid and self.ticket is not None

    def as_dict(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "is_valid": self.validation.is_valid,
            "rejection_code": self.validation.code,
            "rejection_reason": self.validation.reason,
            "latency_ms": self.latency_ms,
        }
        if self.ticket is not None:
            row.update(self.ticket.as_dict())
        return row


class TicketEngine:
    """Turns report text into a validated, classified and rendered ticket."""

    def __init__(
        self,
        validator: Optional[ContentValidator] = None,
        classifier: Optional[TicketClassifierProtocol] = None,
    ) -> None:
        self.validator = validator or ContentValidator()
        self._classifier = classifier or KeywordTicketClassifier()
        if not isinstance(self._classifier, TicketClassifierProtocol):
            raise TypeError(f"{type(self._classifier).__name__} does not implement TicketClassifierProtocol")

    @property
    def metadata(self) -> ClassifierMetadata:
        return self._classifier.metadata

    def validate(self, text: str) -> ValidationResult:
        return self.validator.validate(text)

    def create(self, text: str, requester_id: str = "", subject: str = "", validated: bool = False) -> TicketOutcome:
        """Validate (unless already done) and classify; rejected text yields no ticket."""
        start = time.perf_counter()
        validation = ValidationResult.accept() if validated else self.validator.validate(text)
        if not validation.is_valid:
            return TicketOutcome(validation, latency_ms=(time.perf_counter() - start) * 1000)
        ticket = self._classifier.classify(text, subject, requester_id)
        return TicketOutcome(
            validation=validation,
            ticket=ticket,
            display_text=render(ticket),
            latency_ms=(time.perf_counter() - start) * 1000,
        )

    def create_pending(
        self, text: str, requester_id: str, source_type: str = "text", validated: bool = False
    ) -> Tuple[TicketOutcome, Optional[PendingTicketRecord]]:
        outcome = self.create(text, requester_id, validated=validated)
        if outcome.ticket is None:
            return outcome, None
        record = PendingTicketRecord(
            ticket_id=outcome.ticket.id,
            content=outcome.display_text,
            source_type=source_type,
            requester=str(requester_id),
            created_at=outcome.ticket.created_at,
        )
        return outcome, record


__all__ = ["TicketEngine", "TicketOutcome"]
