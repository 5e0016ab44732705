"""HTTP transport for the admin client.

``RequestsTransport`` keeps one ``requests.Session`` so the HttpOnly session
cookie set at login rides along on every later call. Tests plug in any object
with the same ``request`` method (e.g. a wrapper around Flask's test client).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: Any


class TransportError(Exception):
    """No HTTP answer at all (DNS, refused connection, timeout...)."""


class Transport:
    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> TransportResponse:
        raise NotImplementedError


class RequestsTransport(Transport):
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method, path, params=None, json=None) -> TransportResponse:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, params=params, json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(str(exc)) from exc

        try:
            body = r.json() if r.content else None
        except ValueError:
            body = None
        logger.debug("%s %s -> %s", method, url, r.status_code)
        return TransportResponse(r.status_code, body)
