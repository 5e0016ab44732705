"""Success/failure values returned by every client operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ClientError:
    """Why an operation failed.

    ``kind`` is one of ``validation`` (rejected before any request),
    ``http`` (non-2xx answer), ``network`` (no answer), ``busy`` (another
    mutation is pending) or ``parse`` (unreadable body).
    """

    kind: str
    message: str
    status: Optional[int] = None
    code: Optional[str] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def field_errors(self) -> Dict[str, str]:
        return {e.get("field") or "": e.get("message", "") for e in self.errors}


@dataclass(frozen=True)
class Ok:
    value: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: ClientError

    @property
    def ok(self) -> bool:
        return False
