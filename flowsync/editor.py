"""
Workflow Editor
Wires store, overlay, selection, persistence and push channel together for
one workflow, as seen by the rendering surface.
"""

from typing import Any, Dict, Optional, Tuple

from .models import Edge, Node, Position, WorkflowDTO
from .services import (
    EventIngestion,
    GraphStore,
    PersistenceApi,
    PersistenceBridge,
    PushChannel,
    Reconciler,
    SelectionTracker,
    StatusOverlay,
)
from .services.ingestion import LogSink
from .session import Session, sync_enabled
from .workflow_api import WorkflowApi


class WorkflowEditor:
    """
    Sync core of one open workflow.

    Args:
        workflow_id: Bound workflow, None for a new unsaved one
        session: Authenticated session, None when logged out
        organization_id: Organization scope sent to the API
        channel: Push channel of this workflow
        api: Persistence API; a WorkflowApi is built if None
        on_log: Optional sink of remote log lines
        decay_delay: Overrides Settings.decay_delay_seconds
    """

    def __init__(
        self,
        workflow_id: Optional[str],
        session: Optional[Session],
        organization_id: Optional[str],
        channel: PushChannel,
        api: Optional[PersistenceApi] = None,
        on_log: Optional[LogSink] = None,
        decay_delay: Optional[float] = None,
    ):
        self.workflow_id = workflow_id
        self.session = session
        self.api = api or WorkflowApi(session, organization_id)

        self.store = GraphStore()
        self.selection = SelectionTracker(self.store)
        self.overlay = StatusOverlay(self.store, decay_delay=decay_delay)
        self.bridge = PersistenceBridge(self.api, self.store, workflow_id)
        self.reconciler = Reconciler(self.bridge, session)
        self.ingestion = EventIngestion(channel, self.overlay, self.reconciler, on_log)

    @property
    def enabled(self) -> bool:
        return sync_enabled(self.workflow_id, self.session)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self.store.list_nodes()

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self.store.list_edges()

    @property
    def selected_node(self) -> Optional[Node]:
        return self.selection.selected

    @property
    def is_loading(self) -> bool:
        """A fetch (mount or remote reload) is in flight"""
        return self.bridge.is_loading

    @property
    def workflow(self) -> Optional[WorkflowDTO]:
        """Last workflow document fetched from the API"""
        return self.bridge.workflow

    async def mount(self) -> None:
        """Subscribe to the channel and fetch the workflow, if enabled."""
        self.ingestion.set_enabled(self.enabled)
        if self.enabled:
            await self.bridge.load()
        else:
            self.store.clear()

    def unmount(self) -> None:
        # Los decaimientos ya programados pueden disparar igual
        self.ingestion.set_enabled(False)

    def reset(self) -> None:
        """Stop routing events and drop every status shown right now."""
        self.ingestion.set_enabled(False)
        self.overlay.clear_all()

    def create_node(self, block: Dict[str, Any], position: Position) -> Node:
        return self.store.create_node(block, position)

    def update_node(self, ref: str, /, **patch: Any) -> Optional[Node]:
        return self.store.update_node(ref, **patch)

    async def save(self) -> None:
        await self.bridge.save()

    async def execute(self) -> None:
        await self.bridge.execute()
