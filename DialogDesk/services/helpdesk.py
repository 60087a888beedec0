"""Helpdesk (Zammad-style) ticket submission."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from DialogDesk.errors import HelpdeskError
from DialogDesk.label_space import DEFAULT_CATEGORY, DEFAULT_DEPARTMENT, DEFAULT_PRIORITY, group_id_for, priority_id_for
from DialogDesk.tickets.formatter import parse_fields
from DialogDesk.utils.config import HelpdeskSettings
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TITLE = "Заявка з Telegram"
OPEN_STATE_ID = 1
SOURCE = "telegram_bot"
CREATED_VIA = "AI Dialog Bot"
BODY_SEPARATOR = "━" * 44


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    success: bool
    ticket_id: str = ""
    url: str = ""
    error: str = ""
    debug: bool = False


def _customer_id(requester_id: str) -> Optional[int]:
    text = str(requester_id).strip()
    return int(text) if text.lstrip("-").isdigit() else None


def format_body(content: str, fields: Dict[str, str]) -> str:
    """Display text followed by a plain structured section for helpdesk agents."""
    lines = [
        content,
        "",
        BODY_SEPARATOR,
        "📋 СТРУКТУРОВАНА ІНФОРМАЦІЯ:",
        "",
        f"📝 Заголовок: {fields['title']}",
        f"📄 Опис: {fields['description']}",
        f"🔧 Пріоритет: {fields['priority']}",
        f"💼 Відділ: {fields['department']}",
        f"📂 Категорія: {fields['category']}",
        f"🌐 Мова: {fields['language']}",
        f"🤖 Створено через: {CREATED_VIA}",
    ]
    return "\n".join(lines)


def build_request_body(content: str, requester_id: str) -> Dict[str, Any]:
    fields = parse_fields(content)
    fields["priority"] = fields["priority"] or DEFAULT_PRIORITY
    fields["department"] = fields["department"] or DEFAULT_DEPARTMENT
    fields["category"] = fields["category"] or DEFAULT_CATEGORY
    fields["language"] = fields["language"] or "Mixed"
    return {
        "title": fields["title"] or DEFAULT_TITLE,
        "body": format_body(content, fields),
        "customer_id": _customer_id(requester_id),
        "group_id": group_id_for(fields["department"]),
        "priority_id": priority_id_for(fields["priority"]),
        "state_id": OPEN_STATE_ID,
        "telegram_id": str(requester_id),
        "source": SOURCE,
        "original_content": content,
        "created_via": CREATED_VIA,
    }


class HelpdeskClient:
    """Posts confirmed tickets to the helpdesk API; debug mode never leaves the process."""

    def __init__(
        self,
        settings: HelpdeskSettings,
        debug: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.debug = debug
        self.session = session or requests.Session()

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(
                self.settings.tickets_url,
                json=body,
                timeout=self.settings.timeout,
                verify=self.settings.verify_tls,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise HelpdeskError(f"Helpdesk request failed: {exc}") from exc
        except ValueError as exc:
            raise HelpdeskError("Helpdesk returned a non-JSON response") from exc
        if not isinstance(data, dict):
            raise HelpdeskError("Invalid response format from ticket creation API")
        ticket = data.get("ticket")
        if not (data.get("success") and isinstance(ticket, dict) and ticket.get("id")):
            raise HelpdeskError("Invalid response format from ticket creation API")
        return ticket

    def create_ticket(self, content: str, requester_id: str) -> SubmissionResult:
        body = build_request_body(content, requester_id)
        logger.info("Creating helpdesk ticket for user %s: %s", requester_id, body["title"])
        if self.debug:
            ticket_id = f"DEBUG-{int(time.time() * 1000)}"
            logger.info("Debug mode, ticket %s not submitted (group %s, priority %s)", ticket_id, body["group_id"], body["priority_id"])
            return SubmissionResult(success=True, ticket_id=ticket_id, debug=True)
        try:
            ticket = self._post(body)
        except HelpdeskError as exc:
            logger.error("Ticket creation error: %s", exc)
            return SubmissionResult(success=False, error=str(exc))
        ticket_id = str(ticket["id"])
        logger.info("Ticket created successfully: ID %s for user %s", ticket_id, requester_id)
        return SubmissionResult(success=True, ticket_id=ticket_id, url=str(ticket.get("url") or ""))


__all__ = ["HelpdeskClient", "SubmissionResult", "build_request_body", "format_body"]
