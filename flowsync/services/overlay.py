# flowsync/services/overlay.py
"""
Status Overlay
Paints execution status onto nodes and the edges feeding them, and clears
terminal statuses after a fixed delay.
"""
from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Dict, Optional

from ..config import settings
from ..models import StatusEvent
from .store import GraphStore

logger = logging.getLogger(__name__)


class StatusOverlay:
    """
    Per-element status machine: idle -> running -> success|error -> idle.

    Every terminal event (error, or `remaining == 0`) schedules its own
    decay timer. Timers are never merged nor cancelled, so an older timer
    can clear a status set by a newer event for the same node within the
    decay window. `guard_stale_decay=True` makes each timer clear only if
    no newer event arrived for that node since it was scheduled.
    """

    def __init__(
        self,
        store: GraphStore,
        decay_delay: Optional[float] = None,
        guard_stale_decay: Optional[bool] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.store = store
        self.decay_delay = (
            settings.decay_delay_seconds if decay_delay is None else decay_delay
        )
        self.guard_stale_decay = (
            settings.guard_stale_decay if guard_stale_decay is None else guard_stale_decay
        )
        self._loop = loop
        self._versions: Dict[str, int] = defaultdict(int)
        self._pending = 0

    @property
    def pending(self) -> int:
        """Decays scheduled and not fired yet"""
        return self._pending

    def apply(self, event: StatusEvent) -> None:
        """
        Set the event's status on node `node_id` and on every edge whose
        target is that node, then schedule a decay if the status is terminal.
        """
        node_id = event.node_id
        if not self.store.has_node(node_id):
            # Sin nodo no hay aristas que lo alimenten (load/connect lo garantizan)
            logger.debug("Status for unknown node %s ignored", node_id)
            return
        status = event.to_status()
        self._versions[node_id] += 1

        self.store.patch_status("nodes", status, lambda n: n.ref == node_id)
        self.store.patch_status("edges", status, lambda e: e.target == node_id)

        if event.is_terminal:
            self._schedule_decay(node_id, self._versions[node_id])

    def clear(self, node_id: str) -> None:
        """Back to idle for a node and its incoming edges."""
        self.store.patch_status("nodes", None, lambda n: n.ref == node_id)
        self.store.patch_status("edges", None, lambda e: e.target == node_id)

    def clear_all(self) -> None:
        self.store.patch_status("nodes", None)
        self.store.patch_status("edges", None)

    def _schedule_decay(self, node_id: str, version: int) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self._pending += 1
        loop.call_later(self.decay_delay, self._decay, node_id, version)
        logger.debug("Decay of %s scheduled in %.3fs", node_id, self.decay_delay)

    def _decay(self, node_id: str, version: int) -> None:
        self._pending -= 1
        if self.guard_stale_decay and self._versions[node_id] != version:
            logger.debug("Skipping stale decay of %s", node_id)
            return
        # Se aplica sobre el snapshot vigente al momento de disparar
        self.clear(node_id)
