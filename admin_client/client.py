"""One entry point wiring transport, cache, notifications and auth."""

from __future__ import annotations

from typing import Dict, Optional

from .auth import AuthSession
from .cache import QueryCache
from .notifications import Notifier
from .resource import DeleteConfirmation, ResourceClient
from .transport import RequestsTransport, Transport
from .ui_state import KeyValueStore, MemoryStore


class AdminClient:
    """Shared cache and notifier across every resource, as in a single admin tab."""

    def __init__(self, transport: Transport, ui_store: Optional[KeyValueStore] = None):
        self.transport = transport
        self.cache = QueryCache()
        self.notifier = Notifier()
        self.ui_store = ui_store or MemoryStore()
        self.auth = AuthSession(transport, cache=self.cache, notifier=self.notifier, ui_store=self.ui_store)
        self._resources: Dict[str, ResourceClient] = {}

    @classmethod
    def connect(cls, base_url: str, ui_store: Optional[KeyValueStore] = None) -> "AdminClient":
        return cls(RequestsTransport(base_url), ui_store=ui_store)

    def resource(self, key: str) -> ResourceClient:
        if key not in self._resources:
            self._resources[key] = ResourceClient(self.transport, key, cache=self.cache, notifier=self.notifier)
        return self._resources[key]

    def delete_dialog(self, key: str) -> DeleteConfirmation:
        return DeleteConfirmation(self.resource(key))
