"""HTTP client for the local speech-to-text and text-processing services."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

import requests

from DialogDesk.errors import LocalAIError
from DialogDesk.utils.config import LocalAISettings
from DialogDesk.utils.logger import get_logger, shorten

logger = get_logger(__name__)

TRANSCRIPT_KEYS = ("translated_text", "text", "transcription", "result", "transcript")
PROCESSED_KEYS = ("result", "processed_text")
HEALTH_TIMEOUT = 5.0


def health_url(service_url: str) -> str:
    """Sibling /health endpoint: http://host:8338/update/ -> http://host:8338/health."""
    parts = urlsplit(service_url)
    parent = parts.path.rstrip("/").rsplit("/", 1)[0]
    return urlunsplit((parts.scheme, parts.netloc, f"{parent}/health", "", ""))


def extract_text(payload: Any, keys: Sequence[str] = TRANSCRIPT_KEYS) -> str:
    """Pull the recognised text out of the many response shapes the services return."""
    if isinstance(payload, str):
        try:
            parsed = json.loads(payload)
        except ValueError:
            return payload
        if not isinstance(parsed, dict):
            return payload
        payload = parsed
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if value:
                return str(value)
        return json.dumps(payload, ensure_ascii=False)
    return "" if payload is None else str(payload)


class LocalAIClient:
    """Pooled-session client for the on-premise AI services."""

    def __init__(self, settings: LocalAISettings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def _failure(self, service: str, exc: requests.RequestException) -> LocalAIError:
        if isinstance(exc, requests.Timeout):
            return LocalAIError(f"{service} service timeout. Please try again.")
        if isinstance(exc, requests.ConnectionError):
            return LocalAIError(f"{service} service is not available. Please try again later.")
        return LocalAIError(f"{service} service request failed: {exc}")

    @staticmethod
    def _body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def speech_to_text(self, audio_path: str | Path, client_id: str, segment_number: int) -> str:
        """Upload a voice file and return the transcription."""
        logger.info("Converting speech to text for client %s, segment %s", client_id, segment_number)
        data = {"clientId": str(client_id), "segment_number": str(segment_number)}
        try:
            with open(audio_path, "rb") as handle:
                response = self.session.post(
                    self.settings.speech_to_text_url,
                    data=data,
                    files={"file": (Path(audio_path).name, handle)},
                    timeout=self.settings.speech_timeout,
                )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Speech-to-text request failed: %s", exc)
            raise self._failure("Speech-to-text", exc) from exc
        except OSError as exc:
            raise LocalAIError(f"Cannot read voice file {audio_path}: {exc}") from exc
        text = extract_text(self._body(response)).strip()
        logger.info("Speech-to-text result for client %s: %s", client_id, shorten(text))
        return text

    def process_text(self, text: str, client_id: str) -> str:
        """Send text through the local processing model and return its result."""
        payload: Dict[str, Any] = {
            "text": text,
            "clientId": str(client_id),
            "timestamp": datetime.now().isoformat(),
        }
        try:
            response = self.session.post(
                self.settings.text_processing_url,
                json=payload,
                timeout=self.settings.text_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Text processing request failed: %s", exc)
            raise self._failure("Text processing", exc) from exc
        result = extract_text(self._body(response), keys=PROCESSED_KEYS).strip()
        logger.info("Text processing result for client %s: %s", client_id, shorten(result))
        return result

    def check_health(self) -> Dict[str, bool]:
        status = {"speech_to_text": False, "text_processing": False}
        targets = {
            "speech_to_text": self.settings.speech_to_text_url,
            "text_processing": self.settings.text_processing_url,
        }
        for name, url in targets.items():
            try:
                self.session.get(health_url(url), timeout=HEALTH_TIMEOUT).raise_for_status()
                status[name] = True
            except requests.RequestException:
                logger.warning("%s health check failed", name)
        return status


__all__ = ["LocalAIClient", "extract_text", "health_url"]
