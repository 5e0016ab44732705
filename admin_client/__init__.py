"""Python client for the back-office JSON API."""

from .auth import AuthPhase, AuthSession, AuthState, GateDecision, gate
from .cache import QueryCache
from .client import AdminClient
from .envelope import parse_body, parse_list
from .forms import SlugSync
from .notifications import Notification, Notifier
from .resource import DeleteConfirmation, ResourceClient
from .result import ClientError, Err, Ok
from .transport import RequestsTransport, Transport, TransportError, TransportResponse
from .ui_state import JsonFileStore, KeyValueStore, MemoryStore, UIState, load_ui_state, save_ui_state

__all__ = [
    "AdminClient",
    "AuthPhase",
    "AuthSession",
    "AuthState",
    "ClientError",
    "DeleteConfirmation",
    "Err",
    "GateDecision",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "Notification",
    "Notifier",
    "Ok",
    "QueryCache",
    "RequestsTransport",
    "ResourceClient",
    "SlugSync",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UIState",
    "gate",
    "load_ui_state",
    "parse_body",
    "parse_list",
    "save_ui_state",
]
