"""
Persistence Bridge
Moves the graph between the store and the persistence API.
"""

import asyncio
import logging
from typing import Optional, Protocol

from ..converters import graph_to_workflow, workflow_to_graph
from ..models import WorkflowDTO
from .store import GraphStore

logger = logging.getLogger(__name__)


class PersistenceApi(Protocol):
    """What the bridge needs from the API client (see WorkflowApi)"""

    def get(self, workflow_id: str) -> WorkflowDTO: ...

    def update(self, workflow_id: str, workflow: WorkflowDTO) -> None: ...

    def execute(self, workflow_id: str) -> None: ...


class PersistenceBridge:
    """
    Load, save and execute the workflow bound to `workflow_id`.

    With no workflow id (a new, unsaved workflow) save and execute do
    nothing, and load only empties the store. API errors propagate.
    """

    def __init__(self, api: PersistenceApi, store: GraphStore, workflow_id: Optional[str]):
        self.api = api
        self.store = store
        self.workflow_id = workflow_id
        # Último documento recibido de la API
        self.workflow: Optional[WorkflowDTO] = None
        self.is_loading = False

    @property
    def bound(self) -> bool:
        return bool(self.workflow_id)

    async def load(self) -> Optional[WorkflowDTO]:
        """Fetch the workflow and replace the whole local graph with it."""
        if not self.bound:
            self.workflow = None
            self.store.clear()
            return None

        self.is_loading = True
        try:
            workflow = await asyncio.to_thread(self.api.get, self.workflow_id)
        finally:
            self.is_loading = False

        self.workflow = workflow
        nodes, edges = workflow_to_graph(workflow)
        self.store.load(nodes, edges)
        logger.info(
            "Loaded workflow %s (%d nodes, %d edges)",
            self.workflow_id, len(nodes), len(edges),
        )
        return workflow

    async def save(self) -> None:
        if not self.bound:
            return

        workflow = graph_to_workflow(
            self.workflow_id, self.store.list_nodes(), self.store.list_edges()
        )
        await asyncio.to_thread(self.api.update, self.workflow_id, workflow)
        logger.info("Saved workflow %s", self.workflow_id)

    async def execute(self) -> None:
        if not self.bound:
            return
        await asyncio.to_thread(self.api.execute, self.workflow_id)
        logger.info("Execution of workflow %s requested", self.workflow_id)
