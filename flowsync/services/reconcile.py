import logging
from typing import Optional

from ..models import UpdatedEvent
from ..session import Session
from .bridge import PersistenceBridge

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Discard-and-refetch on remote saves.

    A save by another actor reloads the whole graph, overwriting any local
    edit not saved yet. Our own saves echo back and are ignored.
    """

    def __init__(self, bridge: PersistenceBridge, session: Optional[Session]):
        self.bridge = bridge
        self.session = session

    def is_echo(self, event: UpdatedEvent) -> bool:
        return self.session is not None and event.actor_id == self.session.actor_id

    async def handle(self, event: UpdatedEvent) -> bool:
        """Returns True when a reload happened"""
        if self.is_echo(event):
            return False
        logger.info("Workflow changed by %s, reloading", event.actor_id)
        await self.bridge.load()
        return True
