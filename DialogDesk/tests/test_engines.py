"""Tests for the local AI client and the LLM fallback engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest
import requests

from DialogDesk.engines import llm_fallback
from DialogDesk.engines.llm_fallback import LLMFallbackEngine
from DialogDesk.engines.local_ai import LocalAIClient, extract_text, health_url
from DialogDesk.errors import LLMUnavailableError, LocalAIError
from DialogDesk.utils.config import LLMSettings, LocalAISettings

LOCAL_SETTINGS = LocalAISettings(
    speech_to_text_url="http://localhost:8338/update/",
    text_processing_url="http://localhost:8339/process/",
    speech_timeout=60.0,
    text_timeout=30.0,
)
LLM_SETTINGS = LLMSettings(model="Qwen/Qwen2-72B-Instruct", token=None, max_tokens=256, temperature=0.2)


class FakeResponse:
    def __init__(self, payload: Any) -> None:
        self.payload = payload
        self.text = payload if isinstance(payload, str) else ""

    def raise_for_status(self) -> None:
        return None

    def json(self) -> Any:
        if isinstance(self.payload, str):
            raise ValueError("not json")
        return self.payload


class FakeSession:
    def __init__(self, payload: Any = None, error: Exception | None = None, healthy: bool = True) -> None:
        self.payload = payload
        self.error = error
        self.healthy = healthy
        self.posts: List[Dict[str, Any]] = []
        self.gets: List[str] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.posts.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.payload)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.gets.append(url)
        if not self.healthy:
            raise requests.ConnectionError("down")
        return FakeResponse({})


def test_extract_text_shapes() -> None:
    assert extract_text({"translated_text": "a", "text": "b"}) == "a"
    assert extract_text({"transcript": "c"}) == "c"
    assert extract_text('{"text": "d"}') == "d"
    assert extract_text("plain words") == "plain words"
    assert extract_text({"other": 1}) == '{"other": 1}'
    assert extract_text(None) == ""


def test_health_url() -> None:
    assert health_url("http://localhost:8338/update/") == "http://localhost:8338/health"
    assert health_url("http://ai.local/api/process/") == "http://ai.local/api/health"


def test_speech_to_text_posts_multipart(tmp_path: Path) -> None:
    audio = tmp_path / "voice.ogg"
    audio.write_bytes(b"OggS")
    session = FakeSession({"text": "принтер не працює"})
    client = LocalAIClient(LOCAL_SETTINGS, session=session)  # type: ignore[arg-type]
    assert client.speech_to_text(audio, "42", 3) == "принтер не працює"
    call = session.posts[0]
    assert call["url"] == LOCAL_SETTINGS.speech_to_text_url
    assert call["data"] == {"clientId": "42", "segment_number": "3"}
    assert "file" in call["files"]
    assert call["timeout"] == 60.0


def test_speech_to_text_errors(tmp_path: Path) -> None:
    audio = tmp_path / "voice.ogg"
    audio.write_bytes(b"OggS")
    slow = LocalAIClient(LOCAL_SETTINGS, session=FakeSession(error=requests.Timeout("slow")))  # type: ignore[arg-type]
    with pytest.raises(LocalAIError, match="timeout"):
        slow.speech_to_text(audio, "42", 1)
    down = LocalAIClient(LOCAL_SETTINGS, session=FakeSession(error=requests.ConnectionError("refused")))  # type: ignore[arg-type]
    with pytest.raises(LocalAIError, match="not available"):
        down.speech_to_text(audio, "42", 1)
    with pytest.raises(LocalAIError):
        LocalAIClient(LOCAL_SETTINGS, session=FakeSession({})).speech_to_text(tmp_path / "missing.ogg", "42", 1)  # type: ignore[arg-type]


def test_process_text_and_health() -> None:
    session = FakeSession({"processed_text": "Не працює принтер"})
    client = LocalAIClient(LOCAL_SETTINGS, session=session)  # type: ignore[arg-type]
    assert client.process_text("принтер не працює", "42") == "Не працює принтер"
    assert session.posts[0]["json"]["clientId"] == "42"
    assert client.check_health() == {"speech_to_text": True, "text_processing": True}
    assert session.gets == ["http://localhost:8338/health", "http://localhost:8339/health"]
    offline = LocalAIClient(LOCAL_SETTINGS, session=FakeSession(healthy=False))  # type: ignore[arg-type]
    assert offline.check_health() == {"speech_to_text": False, "text_processing": False}


class DummyClient:
    def __init__(self, content: str | None = "Не працює принтер у бухгалтерії", fail: bool = False) -> None:
        self.content = content
        self.fail = fail
        self.calls: List[Dict[str, Any]] = []

    def chat_completion(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.fail:
            raise RuntimeError("rate limited")
        return type("Resp", (), {"choices": [{"message": {"content": self.content}}]})


def test_rewrite_report_uses_chat_completion() -> None:
    client = DummyClient()
    engine = LLMFallbackEngine(LLM_SETTINGS, client=client)
    assert engine.rewrite_report("ну короче принтер не працює") == "Не працює принтер у бухгалтерії"
    call = client.calls[0]
    assert call["model"] == "Qwen/Qwen2-72B-Instruct"
    assert call["messages"][0]["role"] == "system"
    assert call["messages"][1]["content"] == "ну короче принтер не працює"
    assert call["max_tokens"] == 256


def test_llm_retries_then_raises() -> None:
    client = DummyClient(fail=True)
    engine = LLMFallbackEngine(LLM_SETTINGS, max_retries=2, client=client)
    with pytest.raises(LLMUnavailableError):
        engine.rewrite_report("текст")
    assert len(client.calls) == 3
    assert not engine.check_health()


def test_llm_empty_content_is_unavailable() -> None:
    engine = LLMFallbackEngine(LLM_SETTINGS, max_retries=0, client=DummyClient(content="  "))
    with pytest.raises(LLMUnavailableError):
        engine.chat([{"role": "user", "content": "ping"}])


def test_default_client_is_inference_client(monkeypatch: Any) -> None:
    created: List[Dict[str, Any]] = []

    def fake_client(**kwargs: Any) -> DummyClient:
        created.append(kwargs)
        return DummyClient()

    monkeypatch.setattr(llm_fallback, "InferenceClient", fake_client)
    engine = LLMFallbackEngine(LLM_SETTINGS, timeout=10)
    assert created == [{"model": "Qwen/Qwen2-72B-Instruct", "token": None, "timeout": 10}]
    assert engine.check_health()
