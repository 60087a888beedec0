"""Ticket model, validation, display format and editing."""

from DialogDesk.tickets.editor import (
    EditIntent,
    EditKind,
    EditResult,
    apply_document_edit,
    apply_edit,
    apply_intent,
    classify_edit,
    flatten,
    set_field,
)
from DialogDesk.tickets.formatter import parse_fields, render, ticket_from_fields
from DialogDesk.tickets.model import PendingTicketRecord, Ticket, ValidationResult
from DialogDesk.tickets.validator import ContentValidator, validate

__all__ = [
    "ContentValidator",
    "EditIntent",
    "EditKind",
    "EditResult",
    "PendingTicketRecord",
    "Ticket",
    "ValidationResult",
    "apply_document_edit",
    "apply_edit",
    "apply_intent",
    "classify_edit",
    "flatten",
    "parse_fields",
    "render",
    "set_field",
    "ticket_from_fields",
    "validate",
]
