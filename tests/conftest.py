# tests/conftest.py
from typing import Any, Callable, Dict, List, Optional

import pytest

from flowsync.models import Edge, Node, Position, WorkflowDTO, WorkflowEdgeDTO, WorkflowNodeDTO
from flowsync.services import GraphStore
from flowsync.session import Session


class FakeApi:
    """API de persistencia falsa: guarda en memoria y asigna ids al guardar."""

    def __init__(self, workflow: Optional[WorkflowDTO] = None) -> None:
        self.workflow = workflow
        self.get_calls: List[str] = []
        self.updates: List[WorkflowDTO] = []
        self.executed: List[str] = []
        self.fail_with: Optional[Exception] = None
        self.on_get: Optional[Callable[[], None]] = None
        self._seq = 0

    def _next_id(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}_{self._seq}"

    def get(self, workflow_id: str) -> WorkflowDTO:
        self.get_calls.append(workflow_id)
        if self.on_get:
            self.on_get()
        if self.fail_with:
            raise self.fail_with
        return self.workflow.model_copy(deep=True)

    def update(self, workflow_id: str, workflow: WorkflowDTO) -> None:
        if self.fail_with:
            raise self.fail_with
        self.updates.append(workflow)
        # El servidor asigna id a lo que todavía no lo tiene
        stored = workflow.model_copy(deep=True)
        for node in stored.nodes:
            node.id = node.id or self._next_id("node")
        for edge in stored.edges:
            edge.id = edge.id or self._next_id("edge")
        self.workflow = stored

    def execute(self, workflow_id: str) -> None:
        if self.fail_with:
            raise self.fail_with
        self.executed.append(workflow_id)


class FakeChannel:
    """Canal push falso: registra handlers y permite emitir eventos."""

    def __init__(self) -> None:
        self.handlers: Dict[str, List[Callable]] = {}

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: Callable) -> None:
        if handler in self.handlers.get(event, []):
            self.handlers[event].remove(handler)

    async def emit(self, event: str, payload: Any) -> None:
        for handler in list(self.handlers.get(event, [])):
            await handler(payload)


@pytest.fixture()
def workflow() -> WorkflowDTO:
    """Workflow persistido con dos nodos y una arista n1 -> n2."""
    return WorkflowDTO(
        id="wf_demo",
        nodes=[
            WorkflowNodeDTO(id="10", ref="n1", pos_x=0, pos_y=0, block={"type": "http_get"}),
            WorkflowNodeDTO(id="11", ref="n2", pos_x=100, pos_y=0, block={"type": "save_db"}),
        ],
        edges=[WorkflowEdgeDTO(id="20", source="n1", source_handle="out", target="n2")],
    )


@pytest.fixture()
def api(workflow) -> FakeApi:
    return FakeApi(workflow)


@pytest.fixture()
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture()
def session() -> Session:
    return Session(access_token="mock-abc", actor_id="u_me")


@pytest.fixture()
def store() -> GraphStore:
    """Store con n3 -> n2 -> n1; n3 todavía sin id persistido."""
    s = GraphStore()
    s.load(
        [
            Node(ref="n1", persisted_id="10", position=Position(0, 0), block={"type": "a"}),
            Node(ref="n2", persisted_id="11", position=Position(1, 0), block={"type": "b"}),
            Node(ref="n3", position=Position(2, 0), block={"type": "c"}),
        ],
        [
            Edge(source="n2", target="n1", source_handle="out", persisted_id="20"),
            Edge(source="n3", target="n2"),
        ],
    )
    return s


@pytest.fixture()
def empty_api() -> FakeApi:
    """API sin workflow guardado (workflow nuevo)."""
    return FakeApi()
