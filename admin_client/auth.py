"""Client-side view of the admin session.

The server owns the session; this side only remembers what the last
identity check said, and decides whether a protected screen may render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from schemas import LoginIn

from .cache import QueryCache
from .envelope import parse_body
from .notifications import Notifier
from .result import ClientError, Err, Ok
from .transport import Transport, TransportError
from .ui_state import KeyValueStore, load_ui_state, save_ui_state

logger = logging.getLogger(__name__)


class AuthPhase(Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"


class GateDecision(Enum):
    WAIT = "wait"  # identity check in flight: render nothing, redirect nowhere
    ALLOW = "allow"
    REDIRECT_TO_LOGIN = "redirect_to_login"


@dataclass(frozen=True)
class AuthState:
    phase: AuthPhase = AuthPhase.ANONYMOUS
    user: Optional[dict] = None

    @property
    def is_authenticated(self) -> bool:
        return self.phase is AuthPhase.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self.phase is AuthPhase.AUTHENTICATING


def gate(state: AuthState) -> GateDecision:
    if state.is_loading:
        return GateDecision.WAIT
    if state.is_authenticated:
        return GateDecision.ALLOW
    return GateDecision.REDIRECT_TO_LOGIN


class AuthSession:
    def __init__(
        self,
        transport: Transport,
        *,
        cache: Optional[QueryCache] = None,
        notifier: Optional[Notifier] = None,
        ui_store: Optional[KeyValueStore] = None,
    ):
        self.transport = transport
        self.cache = cache
        self.notifier = notifier or Notifier()
        self.ui_store = ui_store
        self._state = AuthState()
        self._listeners: List[Callable[[AuthState], None]] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, callback: Callable[[AuthState], None]) -> None:
        self._listeners.append(callback)

    def _set(self, phase: AuthPhase, user: Any = None) -> AuthState:
        self._state = AuthState(phase, user)
        for callback in self._listeners:
            callback(self._state)
        return self._state

    def _call(self, method, path, json=None):
        try:
            response = self.transport.request(method, path, json=json)
        except TransportError as exc:
            return Err(ClientError(kind="network", message=str(exc)))
        return parse_body(response.body, response.status)

    def check(self) -> AuthState:
        """Ask the server who we are (page load, tab refocus)."""
        self._set(AuthPhase.AUTHENTICATING)
        result = self._call("GET", "/api/auth/me")
        if result.ok:
            return self._set(AuthPhase.AUTHENTICATED, result.value)
        if result.error.code == "session_expired":
            return self._set(AuthPhase.EXPIRED)
        return self._set(AuthPhase.ANONYMOUS)

    def login(self, username: str, password: str):
        try:
            credentials = LoginIn.model_validate({"username": username, "password": password})
        except ValidationError:
            return Err(ClientError(kind="validation", message="username and password are required"))

        self._set(AuthPhase.AUTHENTICATING)
        result = self._call("POST", "/api/auth/login", json=credentials.model_dump())
        if not result.ok:
            self._set(AuthPhase.ANONYMOUS)
            self.notifier.error("failed to sign in", result.error.message)
            return result
        self._set(AuthPhase.AUTHENTICATED, result.value)
        return Ok(result.value)

    def logout(self):
        result = self._call("POST", "/api/auth/logout")
        # local state is cleared whatever the server said
        self._set(AuthPhase.ANONYMOUS)
        if self.cache is not None:
            self.cache.clear()
        if self.ui_store is not None:
            state = load_ui_state(self.ui_store)
            if state.scroll_lock:
                state.scroll_lock = False
                save_ui_state(self.ui_store, state)
        if not result.ok:
            logger.warning("Logout request failed: %s", result.error.message)
        return result
