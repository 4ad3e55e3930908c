# This file builds the `{"success": true, ...}` bodies returned by mutating endpoints.
# Read endpoints return raw rows instead; that split is part of the public contract.

from __future__ import annotations

from typing import Any


def build_success_envelope(*, message: str | None = None, **payload: Any) -> dict[str, Any]:
    """Build the standard success body for create, update, delete, and lending calls."""

    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body.update(payload)
    return body
