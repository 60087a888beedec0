"""Routing exports."""

from DialogDesk.routing.text_router import RoutedText, TextRouter
from DialogDesk.routing.ticket_engine import TicketEngine, TicketOutcome

__all__ = ["RoutedText", "TextRouter", "TicketEngine", "TicketOutcome"]
