from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Session:
    """Authenticated user of this editor. `actor_id` identifies our own saves."""
    access_token: str
    actor_id: str


def bearer_headers(session: Optional[Session], organization_id: Optional[str]) -> Dict[str, str]:
    """Headers required by the persistence API and the push channel."""
    if session is None or not session.access_token:
        raise PermissionError("Missing Bearer token")
    headers = {"Authorization": f"Bearer {session.access_token}"}
    if organization_id:
        headers["X-Organization-Id"] = organization_id
    return headers


def sync_enabled(workflow_id: Optional[str], session: Optional[Session]) -> bool:
    """Subscriptions and fetches only run for a bound workflow and a live session"""
    return bool(workflow_id) and session is not None and bool(session.access_token)
