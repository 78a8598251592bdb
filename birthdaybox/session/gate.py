from __future__ import annotations

"""Session Gate: a passphrase check in front of the main screen.

This is NOT a security boundary. The secret ships with the app and is
compared in plaintext; it only keeps the greeting from being opened by
accident. Swap StaticPassphrase for another CredentialCheck to change how
candidates are verified without touching the GUI.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from ..app.explain import trace as xtrace
from ..config.config import DEFAULT_ERROR_MESSAGE


logger = logging.getLogger(__name__)


class CredentialCheck(Protocol):
    def verify(self, candidate: str) -> bool: ...


class StaticPassphrase:
    """Exact, case-sensitive comparison against one fixed string."""

    def __init__(self, secret: str) -> None:
        self._secret = str(secret)

    def verify(self, candidate: str) -> bool:
        return candidate == self._secret


class LoginResult(str, enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class SessionState:
    authenticated: bool = False
    password_input: str = ""
    error: str = ""


class SessionGate:
    def __init__(self, check: CredentialCheck, error_message: str = DEFAULT_ERROR_MESSAGE) -> None:
        self.check = check
        self.error_message = error_message
        self.state = SessionState()

    @property
    def authenticated(self) -> bool:
        return self.state.authenticated

    def attempt_login(self, candidate: str) -> LoginResult:
        if self.check.verify(candidate):
            self.state.authenticated = True
            self.state.error = ""
            xtrace("login", {"result": LoginResult.SUCCESS.value})
            return LoginResult.SUCCESS
        # No lockout or delay; the user simply types again
        self.state.error = self.error_message
        self.state.password_input = ""
        logger.info("Login attempt rejected")
        xtrace("login", {"result": LoginResult.FAILURE.value})
        return LoginResult.FAILURE


def gate_from_config(cfg: dict) -> SessionGate:
    gate = cfg.get("gate", {})
    return SessionGate(StaticPassphrase(gate.get("secret", "2025")), gate.get("error_message", DEFAULT_ERROR_MESSAGE))
