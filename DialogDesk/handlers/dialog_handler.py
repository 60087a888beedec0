"""Telegram-independent dialog flow.

Every handler returns a list of ``Reply`` values; the bot adapter only has to
send them. Pending tickets live in the session store as display text, which
the field editor transforms in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Tuple

from DialogDesk import messages
from DialogDesk.engines.llm_fallback import LLMFallbackEngine
from DialogDesk.engines.local_ai import LocalAIClient
from DialogDesk.errors import DialogDeskError, LocalAIError
from DialogDesk.routing.text_router import TextRouter
from DialogDesk.routing.ticket_engine import TicketEngine
from DialogDesk.services.auth import AuthClient
from DialogDesk.services.helpdesk import HelpdeskClient
from DialogDesk.services.session import Session, SessionStore
from DialogDesk.tickets.editor import apply_document_edit, apply_edit, flatten
from DialogDesk.tickets.model import PendingTicketRecord
from DialogDesk.utils.config import Settings
from DialogDesk.utils.logger import get_logger, shorten

logger = get_logger(__name__)

PARSE_MODE = "Markdown"


@dataclass(frozen=True, slots=True)
class Button:
    text: str
    callback_data: str


@dataclass(frozen=True, slots=True)
class Reply:
    text: str
    buttons: Tuple[Tuple[Button, ...], ...] = ()
    parse_mode: Optional[str] = None


class DialogHandler:
    def __init__(
        self,
        engine: TicketEngine,
        router: TextRouter,
        helpdesk: HelpdeskClient,
        sessions: Optional[SessionStore] = None,
        mode: str = "debug",
        auth: Optional[AuthClient] = None,
    ) -> None:
        self.engine = engine
        self.auth = auth
        self.router = router
        self.helpdesk = helpdesk
        self.sessions = sessions or SessionStore()
        self.mode = mode
        self.started_at = self.sessions.clock()
        self.commands = {
            "/start": self._start,
            "/help": self._help,
            "/clear": self._clear,
            "/stats": self._stats,
            "/health": self._health,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "DialogHandler":
        """Wire collaborators according to the feature flags."""
        local_ai = None
        if settings.features.local_ai or settings.features.speech_to_text:
            local_ai = LocalAIClient(settings.local_ai)
        llm = LLMFallbackEngine(settings.llm) if settings.features.llm_fallback else None
        router = TextRouter(local_ai=local_ai, llm=llm, process_text=settings.features.local_ai)
        helpdesk = HelpdeskClient(settings.helpdesk, debug=settings.debug)
        auth = AuthClient(settings.helpdesk, debug=settings.debug)
        return cls(TicketEngine(), router, helpdesk, mode=settings.mode, auth=auth)

    # ------------------------------------------------------------------
    # entry points
    # ------------------------------------------------------------------
    def handle_text(self, user_id: str, text: str) -> List[Reply]:
        if text.startswith("/"):
            return self.handle_command(user_id, text)
        allowed, greeting = self._authorize(user_id)
        if not allowed:
            return greeting
        return greeting + self._route_text(user_id, text)

    def _route_text(self, user_id: str, text: str) -> List[Reply]:
        session = self.sessions.touch(user_id)
        self.sessions.add_history(user_id, "text", text)
        logger.info("Text message from %s: %s", user_id, shorten(text))
        try:
            if session.editing_ticket and session.edit_mode in ("text", "document"):
                return self._apply_edit(user_id, session, text)
            return self._new_ticket(user_id, text, "text")
        except DialogDeskError as exc:
            logger.error("Text handling failed for %s: %s", user_id, exc)
            return [Reply(messages.TEXT_ERROR)]

    def handle_voice(self, user_id: str, audio_path: str | Path) -> List[Reply]:
        allowed, greeting = self._authorize(user_id)
        if not allowed:
            return greeting
        return greeting + self._route_voice(user_id, audio_path)

    def _route_voice(self, user_id: str, audio_path: str | Path) -> List[Reply]:
        if not self.router.speech_enabled:
            return [Reply(messages.VOICE_DISABLED)]
        session = self.sessions.touch(user_id)
        segment = self.sessions.next_segment(user_id)
        replies = [Reply(messages.VOICE_PROCESSING)]
        try:
            transcript = self.router.transcribe(audio_path, user_id, segment)
        except LocalAIError as exc:
            logger.error("Voice recognition failed for %s: %s", user_id, exc)
            return replies + [Reply(messages.VOICE_ERROR)]
        self.sessions.add_history(user_id, "voice", transcript)
        try:
            if session.editing_ticket and session.edit_mode == "voice":
                return replies + self._apply_edit(user_id, session, transcript)
            return replies + self._new_ticket(user_id, transcript, "voice")
        except DialogDeskError as exc:
            logger.error("Voice handling failed for %s: %s", user_id, exc)
            return replies + [Reply(messages.GENERAL_ERROR)]

    def handle_callback(self, user_id: str, data: str) -> List[Reply]:
        action, _sep, ticket_id = (data or "").partition("_")
        logger.info("Callback %s from %s for %s", action, user_id, ticket_id)
        handlers = {
            "confirm": self._confirm,
            "cancel": self._cancel,
            "edit": self._edit_options,
            "edittext": self._start_text_edit,
            "editvoice": self._start_voice_edit,
            "editdoc": self._start_document_edit,
            "back": self._back,
        }
        handler = handlers.get(action)
        if handler is None:
            logger.warning("Unknown callback action: %s", action)
            return []
        record = self.sessions.get_pending(user_id, ticket_id)
        if record is None:
            return [Reply(messages.TICKET_NOT_FOUND)]
        self.sessions.touch(user_id)
        return handler(user_id, record)

    def handle_command(self, user_id: str, command: str) -> List[Reply]:
        name = command.split()[0].split("@")[0].lower() if command.strip() else ""
        handler = self.commands.get(name)
        if handler is None:
            return [Reply(messages.UNKNOWN_COMMAND)]
        logger.info("Command %s from %s", name, user_id)
        allowed, greeting = self._authorize(user_id)
        if not allowed:
            return greeting
        return greeting + handler(user_id)

    def _authorize(self, user_id: str) -> Tuple[bool, List[Reply]]:
        """Check the user on every message; the greeting is sent only once per session."""
        if self.auth is None:
            return True, []
        result = self.auth.authorize(user_id)
        if not result.allowed:
            logger.warning("Access denied for user %s", user_id)
            return False, [Reply(result.message)]
        session = self.sessions.touch(user_id)
        if session.authenticated:
            return True, []
        session.authenticated = True
        session.user_info = result.user
        return True, [Reply(result.message)] if result.message else []

    # ------------------------------------------------------------------
    # ticket flow
    # ------------------------------------------------------------------
    def _new_ticket(self, user_id: str, text: str, source_type: str) -> List[Reply]:
        validation = self.engine.validate(text)
        if not validation.is_valid:
            logger.info("Rejected message from %s: %s", user_id, validation.code)
            return [Reply(messages.REJECTED.format(reason=validation.reason))]
        routed = self.router.normalise(text, user_id)
        _outcome, record = self.engine.create_pending(routed.text, user_id, source_type, validated=True)
        if record is None:
            return [Reply(messages.TEXT_ERROR)]
        self.sessions.put_pending(user_id, record)
        return [self._preview(record, messages.TICKET_PREVIEW)]

    def _apply_edit(self, user_id: str, session: Session, instruction: str) -> List[Reply]:
        ticket_id, mode = session.editing_ticket or "", session.edit_mode
        record = session.pending.get(ticket_id)
        self.sessions.stop_editing(user_id)
        if record is None:
            return [Reply(messages.TICKET_NOT_FOUND)]
        if mode == "document":
            updated = apply_document_edit(record.content, instruction)
        else:
            updated = apply_edit(record.content, instruction)
        record = record.revised(updated)
        self.sessions.put_pending(user_id, record)
        logger.info("Ticket %s edited by %s (%s)", ticket_id, user_id, mode)
        return [self._preview(record, messages.TICKET_UPDATED_PREVIEW, edited=True)]

    def _preview(self, record: PendingTicketRecord, template: str, edited: bool = False) -> Reply:
        edit_label = messages.BUTTONS["edit_again"] if edited else messages.BUTTONS["edit"]
        buttons = (
            (
                Button(messages.BUTTONS["confirm"], f"confirm_{record.ticket_id}"),
                Button(messages.BUTTONS["cancel"], f"cancel_{record.ticket_id}"),
            ),
            (Button(edit_label, f"edit_{record.ticket_id}"),),
        )
        return Reply(template.format(content=record.content), buttons, PARSE_MODE)

    def _confirm(self, user_id: str, record: PendingTicketRecord) -> List[Reply]:
        result = self.helpdesk.create_ticket(record.content, user_id)
        if not result.success:
            return [self._preview(record, messages.TICKET_SUBMIT_ERROR + "\n\n{content}")]
        self.sessions.pop_pending(user_id, record.ticket_id)
        self.sessions.add_history(user_id, "ticket", result.ticket_id)
        if result.debug:
            return [Reply(messages.TICKET_DEBUG_SENT.format(ticket_id=result.ticket_id))]
        if result.url:
            return [Reply(messages.TICKET_SENT_WITH_URL.format(ticket_id=result.ticket_id, url=result.url))]
        return [Reply(messages.TICKET_SENT.format(ticket_id=result.ticket_id))]

    def _cancel(self, user_id: str, record: PendingTicketRecord) -> List[Reply]:
        self.sessions.pop_pending(user_id, record.ticket_id)
        logger.info("Ticket %s cancelled by %s", record.ticket_id, user_id)
        return [Reply(messages.TICKET_CANCELLED)]

    def _edit_options(self, user_id: str, record: PendingTicketRecord) -> List[Reply]:
        options = [Button(messages.BUTTONS["edit_text"], f"edittext_{record.ticket_id}")]
        if self.router.speech_enabled:
            options.append(Button(messages.BUTTONS["edit_voice"], f"editvoice_{record.ticket_id}"))
        options.append(Button(messages.BUTTONS["edit_document"], f"editdoc_{record.ticket_id}"))
        buttons = (tuple(options), (Button(messages.BUTTONS["back"], f"back_{record.ticket_id}"),))
        return [Reply(messages.EDIT_OPTIONS, buttons)]

    def _back_button(self, record: PendingTicketRecord) -> Tuple[Tuple[Button, ...], ...]:
        return ((Button(messages.BUTTONS["back"], f"back_{record.ticket_id}"),),)

    def _start_text_edit(self, user_id: str, record: PendingTicketRecord) -> List[Reply]:
        self.sessions.start_editing(user_id, record.ticket_id, "text")
        return [Reply(messages.EDIT_TEXT_INSTRUCTION, self._back_button(record))]

    def _start_voice_edit(self, user_id: str, record: PendingTicketRecord) -> List[Reply]:
        if not self.router.speech_enabled:
            return [Reply(messages.VOICE_DISABLED)]
        self.sessions.start_editing(user_id, record.ticket_id, "voice")
        return [Reply(messages.EDIT_VOICE_INSTRUCTION, self._back_button(record))]

    def _start_document_edit(self, user_id: str, record: PendingTicketRecord) -> List[Reply]:
        self.sessions.start_editing(user_id, record.ticket_id, "document")
        text = messages.EDIT_DOCUMENT_INSTRUCTION.format(document=flatten(record.content))
        return [Reply(text, self._back_button(record))]

    def _back(self, user_id: str, record: PendingTicketRecord) -> List[Reply]:
        self.sessions.stop_editing(user_id)
        return [self._preview(record, messages.TICKET_PREVIEW, edited=record.last_modified is not None)]

    # ------------------------------------------------------------------
    # commands
    # ------------------------------------------------------------------
    def _start(self, user_id: str) -> List[Reply]:
        self.sessions.touch(user_id)
        return [Reply(messages.BOT_READY)]

    def _help(self, user_id: str) -> List[Reply]:
        return [Reply(messages.HELP.format(mode=self.mode))]

    def _clear(self, user_id: str) -> List[Reply]:
        self.sessions.clear(user_id)
        return [Reply(messages.HISTORY_CLEARED)]

    def _stats(self, user_id: str) -> List[Reply]:
        stats = self.sessions.stats()
        return [Reply(messages.STATS.format(total=stats["total"], active=stats["active"], uptime=self.uptime()))]

    def _health(self, user_id: str) -> List[Reply]:
        status = self.router.health()
        summary = messages.HEALTH_ALL_OK if status and all(status.values()) else messages.HEALTH_DEGRADED
        text = messages.HEALTH.format(
            speech=messages.status_mark(status.get("speech_to_text", False)),
            text=messages.status_mark(status.get("text_processing", False)),
            llm=messages.status_mark(status.get("llm", False)),
            summary=summary,
        )
        return [Reply(text)]

    def uptime(self) -> str:
        elapsed: timedelta = self.sessions.clock() - self.started_at
        return str(timedelta(seconds=int(elapsed.total_seconds())))


__all__ = ["Button", "DialogHandler", "Reply"]
