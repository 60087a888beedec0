"""Ticket value objects shared by the classifier, formatter and editor."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict

from DialogDesk.label_space import (
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    DEPARTMENT_SET,
    LANGUAGE_SET,
    PRIORITY_SET,
    STATUS_SET,
)

SOURCE_TYPES = ("voice", "text")


@dataclass(frozen=True, slots=True)
class Ticket:
    """Structured support request produced from validated user input."""

    id: str
    department: str
    title: str
    description: str
    requester: str
    language: str
    created_at: datetime
    priority: str = DEFAULT_PRIORITY
    category: str = DEFAULT_CATEGORY
    status: str = DEFAULT_STATUS

    def __post_init__(self) -> None:
        if self.department not in DEPARTMENT_SET:
            raise ValueError(f"Unknown department '{self.department}'")
        if self.priority not in PRIORITY_SET:
            raise ValueError(f"Unknown priority '{self.priority}'")
        if self.language not in LANGUAGE_SET:
            raise ValueError(f"Unknown language '{self.language}'")
        if self.status not in STATUS_SET:
            raise ValueError(f"Unknown status '{self.status}'")

    def with_changes(self, **changes: Any) -> "Ticket":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "department": self.department,
            "category": self.category,
            "priority": self.priority,
            "title": self.title,
            "description": self.description,
            "requester": self.requester,
            "language": self.language,
            "created_at": self.created_at.isoformat(),
            "status": self.status,
        }


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of the content validator; reason is shown to the user verbatim."""

    is_valid: bool
    reason: str = ""
    code: str = ""

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def reject(cls, code: str, reason: str) -> "ValidationResult":
        return cls(is_valid=False, reason=reason, code=code)


@dataclass(frozen=True, slots=True)
class PendingTicketRecord:
    """Unconfirmed ticket held by a user session."""

    ticket_id: str
    content: str
    source_type: str
    requester: str
    created_at: datetime = field(default_factory=datetime.now)
    last_modified: datetime | None = None

    def __post_init__(self) -> None:
        if self.source_type not in SOURCE_TYPES:
            raise ValueError(f"Unknown source type '{self.source_type}'")

    def revised(self, content: str, when: datetime | None = None) -> "PendingTicketRecord":
        """Return the record with new display text and a fresh modification time."""
        return replace(self, content=content, last_modified=when or datetime.now())


__all__ = ["Ticket", "ValidationResult", "PendingTicketRecord", "SOURCE_TYPES"]
