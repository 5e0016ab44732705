"""Response-shape normalisation, applied once where responses enter the client.

The server answers with ``{"success": ..., "data": ...}``; older endpoints
and third-party mirrors may answer with a bare JSON array. Both become the
same ``Result``.
"""

from __future__ import annotations

from typing import Any

from .result import ClientError, Err, Ok


def parse_body(body: Any, status: int = 200):
    if isinstance(body, list):
        return Ok(body)

    if isinstance(body, dict) and "success" in body:
        if body.get("success") and 200 <= status < 300:
            return Ok(body.get("data"))
        return Err(ClientError(
            kind="http",
            message=body.get("message") or f"HTTP {status}",
            status=status,
            code=body.get("code"),
            errors=list(body.get("errors") or []),
        ))

    if 200 <= status < 300:
        return Ok(body)
    message = body.get("message") if isinstance(body, dict) else None
    return Err(ClientError(kind="http", message=message or f"HTTP {status}", status=status))


def parse_list(body: Any, status: int = 200):
    """Like ``parse_body`` but the payload must be a list."""
    result = parse_body(body, status)
    if result.ok and not isinstance(result.value, list):
        return Err(ClientError(kind="parse", message="expected a list", status=status))
    return result
