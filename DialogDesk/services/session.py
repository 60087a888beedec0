"""In-memory per-user session store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from DialogDesk.tickets.model import PendingTicketRecord
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)

MAX_HISTORY = 50
ACTIVE_WINDOW = timedelta(minutes=30)
IDLE_LIMIT = timedelta(hours=1)


@dataclass(slots=True)
class HistoryEntry:
    kind: str
    content: str
    timestamp: datetime


@dataclass(slots=True)
class Session:
    user_id: str
    last_activity: datetime
    history: List[HistoryEntry] = field(default_factory=list)
    pending: Dict[str, PendingTicketRecord] = field(default_factory=dict)
    editing_ticket: Optional[str] = None
    edit_mode: Optional[str] = None
    authenticated: bool = False
    user_info: Optional[Dict[str, Any]] = None
    message_count: int = 0


class SessionStore:
    """Sessions keyed by user id. Single-threaded use only."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now, max_history: int = MAX_HISTORY) -> None:
        self.clock = clock
        self.max_history = max_history
        self.sessions: Dict[str, Session] = {}

    def get(self, user_id: str) -> Session:
        key = str(user_id)
        session = self.sessions.get(key)
        if session is None:
            session = Session(user_id=key, last_activity=self.clock())
            self.sessions[key] = session
            logger.info("Created session for user %s", key)
        return session

    def touch(self, user_id: str) -> Session:
        session = self.get(user_id)
        session.last_activity = self.clock()
        return session

    def add_history(self, user_id: str, kind: str, content: str) -> None:
        session = self.touch(user_id)
        session.history.append(HistoryEntry(kind, content, self.clock()))
        if len(session.history) > self.max_history:
            session.history = session.history[-self.max_history :]

    def next_segment(self, user_id: str) -> int:
        """Sequential message number, sent with voice uploads."""
        session = self.touch(user_id)
        session.message_count += 1
        return session.message_count

    def put_pending(self, user_id: str, record: PendingTicketRecord) -> None:
        self.touch(user_id).pending[record.ticket_id] = record

    def get_pending(self, user_id: str, ticket_id: str) -> Optional[PendingTicketRecord]:
        return self.get(user_id).pending.get(ticket_id)

    def pop_pending(self, user_id: str, ticket_id: str) -> Optional[PendingTicketRecord]:
        session = self.touch(user_id)
        if session.editing_ticket == ticket_id:
            self.stop_editing(user_id)
        return session.pending.pop(ticket_id, None)

    def start_editing(self, user_id: str, ticket_id: str, mode: str) -> None:
        session = self.touch(user_id)
        session.editing_ticket = ticket_id
        session.edit_mode = mode

    def stop_editing(self, user_id: str) -> None:
        session = self.get(user_id)
        session.editing_ticket = None
        session.edit_mode = None

    def clear(self, user_id: str) -> None:
        if self.sessions.pop(str(user_id), None) is not None:
            logger.info("Cleared session for user %s", user_id)

    def stats(self) -> Dict[str, int]:
        now = self.clock()
        active = sum(1 for session in self.sessions.values() if now - session.last_activity < ACTIVE_WINDOW)
        return {"total": len(self.sessions), "active": active}

    def cleanup_inactive(self, max_idle: timedelta = IDLE_LIMIT) -> int:
        cutoff = self.clock() - max_idle
        stale = [user_id for user_id, session in self.sessions.items() if session.last_activity < cutoff]
        for user_id in stale:
            del self.sessions[user_id]
        if stale:
            logger.info("Cleaned up %s inactive sessions", len(stale))
        return len(stale)


__all__ = ["ACTIVE_WINDOW", "IDLE_LIMIT", "MAX_HISTORY", "HistoryEntry", "Session", "SessionStore"]
