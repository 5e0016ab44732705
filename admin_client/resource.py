"""List/create/update/delete for one admin resource.

Lists and items are cached. Mutations are validated locally with the same
pydantic schema the server uses, never retried, and on success drop every
cached list that could now be stale before returning.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from pydantic import ValidationError

from schemas import SCHEMAS

from .cache import QueryCache
from .envelope import parse_body, parse_list
from .notifications import Notifier
from .result import ClientError, Err, Ok
from .transport import Transport, TransportError

logger = logging.getLogger(__name__)

# collections that embed data from another resource (names, counts)
DEPENDENTS = {
    "countries": ("scholarships",),
    "levels": ("scholarships",),
    "categories": ("scholarships",),
    "tags": ("posts",),
    "scholarships": ("success-stories",),
    "users": ("posts",),
}

VERBS = {"POST": "create", "PUT": "update", "DELETE": "delete", "GET": "load"}


def _validation_error(exc: ValidationError) -> ClientError:
    errors = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()))
        errors.append({"field": field or None, "message": err.get("msg", "")})
    return ClientError(kind="validation", message="validation failed", errors=errors)


class ResourceClient:
    def __init__(
        self,
        transport: Transport,
        key: str,
        *,
        cache: Optional[QueryCache] = None,
        notifier: Optional[Notifier] = None,
        schema=None,
        dependents=None,
    ):
        self.transport = transport
        self.key = key
        self.path = f"/api/{key}"
        self.cache = cache if cache is not None else QueryCache()
        self.notifier = notifier or Notifier()
        self.schema = schema or SCHEMAS.get(key)
        self.dependents = tuple(DEPENDENTS.get(key, ()) if dependents is None else dependents)
        self._pending = threading.Lock()

    @property
    def is_pending(self) -> bool:
        return self._pending.locked()

    # ---------- reads ----------
    def list(self, params: Optional[Dict[str, Any]] = None, refresh: bool = False):
        if refresh:
            self.cache.invalidate(self.path, params)
        cached = self.cache.get(self.path, params)
        if cached is not None:
            return Ok(cached)
        result = self._send("GET", self.path, params=params, parse=parse_list)
        if result.ok:
            self.cache.set(self.path, params, result.value)
        return result

    def get(self, item_id: int, refresh: bool = False):
        path = f"{self.path}/{item_id}"
        if refresh:
            self.cache.invalidate(path)
        cached = self.cache.get(path)
        if cached is not None:
            return Ok(cached)
        result = self._send("GET", path)
        if result.ok:
            self.cache.set(path, None, result.value)
        return result

    # ---------- writes ----------
    def create(self, values: Dict[str, Any]):
        return self._mutate("POST", self.path, values)

    def update(self, item_id: int, values: Dict[str, Any]):
        """Send only ``values``; they are checked merged over the current item."""
        current = self.get(item_id)
        if not current.ok:
            return current
        merged = {**current.value, **values}
        return self._mutate("PUT", f"{self.path}/{item_id}", merged, item_id=item_id, fields=set(values))

    def _delete(self, item_id: int):
        # reached only through DeleteConfirmation.confirm()
        return self._mutate("DELETE", f"{self.path}/{item_id}", None, item_id=item_id)

    def _mutate(self, method: str, path: str, values, item_id=None, fields=None):
        verb = VERBS[method]
        payload = None
        if values is not None:
            try:
                if self.schema:
                    validated = self.schema.model_validate(values)
                    payload = validated.model_dump(mode="json", include=fields, exclude_unset=fields is None)
                else:
                    payload = {k: v for k, v in values.items() if fields is None or k in fields}
            except ValidationError as exc:
                return Err(_validation_error(exc))

        if not self._pending.acquire(blocking=False):
            return Err(ClientError(kind="busy", message=f"another {self.key} submission is in progress"))
        try:
            result = self._send(method, path, json=payload)
            if result.ok:
                self._invalidate_after_write(item_id)
                self.notifier.success(f"{self.key}: {verb}d")
            else:
                self.notifier.error(f"failed to {verb} {self.key}", result.error.message)
            return result
        finally:
            self._pending.release()

    def _invalidate_after_write(self, item_id=None) -> None:
        self.cache.invalidate_collection(self.path)
        for key in self.dependents:
            self.cache.invalidate_collection(f"/api/{key}")
        if item_id is not None:
            self.cache.invalidate_tree(f"{self.path}/{item_id}")
            self.cache.invalidate_tree(f"{self.path}/slug")

    def _send(self, method, path, params=None, json=None, parse=parse_body):
        try:
            response = self.transport.request(method, path, params=params, json=json)
        except TransportError as exc:
            return Err(ClientError(kind="network", message=str(exc)))
        return parse(response.body, response.status)


class DeleteConfirmation:
    """Two-step delete: ``request`` opens the dialog, ``confirm`` sends.

    The dialog is open exactly while a target is selected, so closing one
    always clears the other.
    """

    def __init__(self, client: ResourceClient):
        self.client = client
        self.target = None
        self.label = None

    @property
    def is_open(self) -> bool:
        return self.target is not None

    def request(self, item_id: int, label: Optional[str] = None) -> None:
        self.target = item_id
        self.label = label

    def cancel(self) -> None:
        self.target = None
        self.label = None

    def confirm(self):
        if self.target is None:
            return Err(ClientError(kind="validation", message="nothing selected for deletion"))
        item_id = self.target
        self.cancel()
        return self.client._delete(item_id)
