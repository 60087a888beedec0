"""Classifier exports."""

from __future__ import annotations

from DialogDesk.classifiers.keyword_classifier import (
    TICKET_ID_PATTERN,
    KeywordTicketClassifier,
    classify,
    generate_ticket_id,
    generate_title,
)
from DialogDesk.classifiers.utils import ClassifierMetadata, TicketClassifierProtocol

__all__ = [
    "TICKET_ID_PATTERN",
    "ClassifierMetadata",
    "KeywordTicketClassifier",
    "TicketClassifierProtocol",
    "classify",
    "generate_ticket_id",
    "generate_title",
]
