"""Persisted admin UI preferences behind a small key-value interface."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

UI_STATE_KEY = "admin_ui_state"


@dataclass
class UIState:
    compact_mode: bool = False
    expanded_groups: List[str] = field(default_factory=list)
    scroll_lock: bool = False

    def toggle_group(self, name: str) -> bool:
        """Flip a sidebar group; returns whether it is now expanded."""
        if name in self.expanded_groups:
            self.expanded_groups.remove(name)
            return False
        self.expanded_groups.append(name)
        return True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "UIState":
        if not isinstance(data, dict):
            return cls()
        groups = data.get("expanded_groups")
        return cls(
            compact_mode=bool(data.get("compact_mode", False)),
            expanded_groups=[str(g) for g in groups] if isinstance(groups, list) else [],
            scroll_lock=bool(data.get("scroll_lock", False)),
        )


class KeyValueStore:
    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self):
        self._data: Dict[str, Any] = {}

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value

    def delete(self, key):
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """One JSON object on disk; writes go through a temp file and ``os.replace``."""

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except ValueError:
            logger.warning("Ignoring unreadable UI state file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        folder = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(folder, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=folder, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise

    def get(self, key, default=None):
        return self._read().get(key, default)

    def set(self, key, value):
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key):
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


def load_ui_state(store: KeyValueStore) -> UIState:
    return UIState.from_dict(store.get(UI_STATE_KEY))


def save_ui_state(store: KeyValueStore, state: UIState) -> None:
    store.set(UI_STATE_KEY, state.to_dict())
