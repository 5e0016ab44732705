"""Query cache keyed by ``(path, params)``."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

Key = Tuple[str, Tuple[Tuple[str, str], ...]]


def cache_key(path: str, params: Optional[Dict[str, Any]] = None) -> Key:
    items = tuple(sorted((str(k), str(v)) for k, v in (params or {}).items() if v is not None))
    return path.rstrip("/"), items


class QueryCache:
    def __init__(self):
        self._entries: Dict[Key, Any] = {}

    def get(self, path, params=None):
        return self._entries.get(cache_key(path, params))

    def set(self, path, params, value) -> None:
        self._entries[cache_key(path, params)] = value

    def invalidate_collection(self, path: str) -> int:
        """Drop every filtered variant of the list at ``path``."""
        path = path.rstrip("/")
        return self._drop(lambda p: p == path)

    def invalidate_tree(self, path: str) -> int:
        """Drop ``path`` and everything below it (items, slug lookups)."""
        path = path.rstrip("/")
        return self._drop(lambda p: p == path or p.startswith(path + "/"))

    def invalidate(self, path: str, params=None) -> None:
        self._entries.pop(cache_key(path, params), None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _drop(self, match) -> int:
        stale = [key for key in self._entries if match(key[0])]
        for key in stale:
            del self._entries[key]
        return len(stale)
