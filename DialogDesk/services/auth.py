"""Requester authorization against the helpdesk check-user endpoint.

Production mode blocks unknown users and users that cannot be checked;
debug mode lets them through with a warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from DialogDesk import messages
from DialogDesk.errors import HelpdeskError
from DialogDesk.utils.config import HelpdeskSettings
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AuthResult:
    allowed: bool
    message: str = ""
    user: Optional[Dict[str, Any]] = None


class AuthClient:
    def __init__(
        self,
        settings: HelpdeskSettings,
        debug: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.debug = debug
        self.session = session or requests.Session()

    def _post(self, telegram_id: str) -> Dict[str, Any]:
        try:
            response = self.session.post(
                self.settings.check_user_url,
                json={"telegram_id": telegram_id},
                timeout=self.settings.auth_timeout,
                verify=self.settings.verify_tls,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise HelpdeskError(f"Check-user request failed: {exc}") from exc
        except ValueError as exc:
            raise HelpdeskError("Check-user endpoint returned a non-JSON response") from exc
        if not isinstance(data, dict) or not data.get("success") or "exists" not in data:
            raise HelpdeskError("Invalid response format from check-user API")
        return data

    def check_user(self, telegram_id: str) -> Optional[Dict[str, Any]]:
        """Helpdesk user record, or None when the user is unknown.

        Raises HelpdeskError when the endpoint cannot answer.
        """
        data = self._post(str(telegram_id))
        user = data.get("user")
        if data["exists"] and isinstance(user, dict):
            return user
        return None

    def authorize(self, telegram_id: str) -> AuthResult:
        logger.info("Checking user %s", telegram_id)
        try:
            user = self.check_user(telegram_id)
        except HelpdeskError as exc:
            logger.error("Authentication service error: %s", exc)
            return self._refuse(messages.AUTH_SERVICE_ERROR)
        if user is None:
            logger.warning("User %s not found in helpdesk", telegram_id)
            return self._refuse(messages.AUTH_USER_NOT_FOUND.format(user_id=telegram_id))
        logger.info("User %s authenticated as %s", telegram_id, user.get("email", ""))
        welcome = messages.AUTH_WELCOME.format(
            firstname=user.get("firstname", ""),
            lastname=user.get("lastname", ""),
            email=user.get("email", ""),
        )
        return AuthResult(allowed=True, message=welcome, user=user)

    def _refuse(self, reason: str) -> AuthResult:
        if self.debug:
            return AuthResult(allowed=True, message=messages.AUTH_DEBUG_WARNING.format(reason=reason))
        return AuthResult(allowed=False, message=messages.AUTH_ACCESS_DENIED.format(reason=reason))


__all__ = ["AuthClient", "AuthResult"]
