"""Tests for helpdesk submission."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

import requests

from DialogDesk.services.helpdesk import HelpdeskClient, build_request_body
from DialogDesk.tickets.formatter import render
from DialogDesk.tickets.model import Ticket
from DialogDesk.utils.config import HelpdeskSettings

SETTINGS = HelpdeskSettings(tickets_url="https://helpdesk.local/api", timeout=15.0, verify_tls=False)


def _content() -> str:
    return render(
        Ticket(
            id="TKT-20240501101500042",
            department="HR",
            title="Відпустка з понеділка",
            description="Прошу оформити відпустку з понеділка",
            requester="42",
            language="Ukrainian",
            created_at=datetime(2024, 5, 1, 10, 15, 0),
            priority="Low",
        )
    )


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        return self.payload


class FakeSession:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> Any:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def test_request_body_maps_fields() -> None:
    body = build_request_body(_content(), "42")
    assert body["title"] == "Відпустка з понеділка"
    assert body["group_id"] == 2
    assert body["priority_id"] == 1
    assert body["state_id"] == 1
    assert body["customer_id"] == 42
    assert body["telegram_id"] == "42"
    assert body["source"] == "telegram_bot"
    assert body["original_content"] == _content()
    assert body["body"].startswith(_content())
    assert "📋 СТРУКТУРОВАНА ІНФОРМАЦІЯ:" in body["body"]
    assert "💼 Відділ: HR" in body["body"]


def test_request_body_defaults_for_unparseable_content() -> None:
    body = build_request_body("довільний текст", "not-a-number")
    assert body["title"] == "Заявка з Telegram"
    assert body["group_id"] == 1
    assert body["priority_id"] == 2
    assert body["customer_id"] is None


def test_debug_mode_does_not_post() -> None:
    session = FakeSession()
    result = HelpdeskClient(SETTINGS, debug=True, session=session).create_ticket(_content(), "42")  # type: ignore[arg-type]
    assert result.success
    assert result.debug
    assert result.ticket_id.startswith("DEBUG-")
    assert session.calls == []


def test_production_submission() -> None:
    session = FakeSession(FakeResponse({"success": True, "ticket": {"id": 77, "url": "https://helpdesk.local/#ticket/77"}}))
    result = HelpdeskClient(SETTINGS, debug=False, session=session).create_ticket(_content(), "42")  # type: ignore[arg-type]
    assert result.success
    assert result.ticket_id == "77"
    assert result.url.endswith("/77")
    call = session.calls[0]
    assert call["url"] == "https://helpdesk.local/api"
    assert call["verify"] is False
    assert call["timeout"] == 15.0
    assert call["json"]["group_id"] == 2


def test_submission_failures_are_reported() -> None:
    refused = FakeSession(error=requests.ConnectionError("refused"))
    result = HelpdeskClient(SETTINGS, debug=False, session=refused).create_ticket(_content(), "42")  # type: ignore[arg-type]
    assert not result.success
    assert "refused" in result.error

    malformed = FakeSession(FakeResponse({"success": False}))
    result = HelpdeskClient(SETTINGS, debug=False, session=malformed).create_ticket(_content(), "42")  # type: ignore[arg-type]
    assert not result.success
    assert "Invalid response" in result.error

    server_error = FakeSession(FakeResponse({}, status_code=500))
    assert not HelpdeskClient(SETTINGS, debug=False, session=server_error).create_ticket(_content(), "42").success  # type: ignore[arg-type]


def test_non_object_response_is_reported() -> None:
    listed = FakeSession(FakeResponse([{"id": 7}]))
    result = HelpdeskClient(SETTINGS, debug=False, session=listed).create_ticket(_content(), "42")  # type: ignore[arg-type]
    assert not result.success
    assert "Invalid response" in result.error
