# flowsync/services/ingestion.py
"""
Event Ingestion
Validates push channel payloads and routes them:

- graph:status  -> StatusOverlay
- graph:updated -> Reconciler
- graph:log     -> log sink callback, date cut to "HH:MM:SS"

A payload failing its schema is dropped: no retry, no exception.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

from pydantic import ValidationError

from ..models import (
    LOG_EVENT,
    STATUS_EVENT,
    UPDATED_EVENT,
    LogEntry,
    LogEvent,
    StatusEvent,
    UpdatedEvent,
)
from .overlay import StatusOverlay
from .reconcile import Reconciler

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[None]]
LogSink = Callable[[LogEntry], None]


class PushChannel(Protocol):
    """Per-workflow event channel; connection lifecycle lives elsewhere"""

    def on(self, event: str, handler: Handler) -> None: ...

    def off(self, event: str, handler: Handler) -> None: ...


class EventIngestion:
    def __init__(
        self,
        channel: PushChannel,
        overlay: StatusOverlay,
        reconciler: Reconciler,
        on_log: Optional[LogSink] = None,
    ):
        self.channel = channel
        self.overlay = overlay
        self.reconciler = reconciler
        self.on_log = on_log
        self.dropped = 0
        self._handlers: Dict[str, Handler] = {
            STATUS_EVENT: self.handle_status,
            UPDATED_EVENT: self.handle_updated,
            LOG_EVENT: self.handle_log,
        }
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Register or deregister the three handlers on the channel."""
        if enabled == self._enabled:
            return
        for event, handler in self._handlers.items():
            if enabled:
                self.channel.on(event, handler)
            else:
                self.channel.off(event, handler)
        self._enabled = enabled

    def _parse(self, schema, event: str, payload: Any):
        try:
            return schema.model_validate(payload)
        except ValidationError as exc:
            self.dropped += 1
            logger.debug("Dropping %s payload: %s", event, exc.errors())
            return None

    async def handle_status(self, payload: Any) -> None:
        event = self._parse(StatusEvent, STATUS_EVENT, payload)
        if event is not None:
            self.overlay.apply(event)

    async def handle_updated(self, payload: Any) -> None:
        event = self._parse(UpdatedEvent, UPDATED_EVENT, payload)
        if event is not None:
            await self.reconciler.handle(event)

    async def handle_log(self, payload: Any) -> None:
        event = self._parse(LogEvent, LOG_EVENT, payload)
        if event is not None and self.on_log is not None:
            self.on_log(event.to_entry())
