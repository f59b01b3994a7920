from typing import Optional

from ..models import Node
from .observers import GraphChange, GraphObserver
from .store import GraphStore


class SelectionTracker(GraphObserver):
    """
    Currently selected node, derived from the store.

    Recomputed on every node snapshot: the first node flagged `selected`,
    or None. Read-only; select through `GraphStore.select`.
    """

    def __init__(self, store: GraphStore):
        self._selected: Optional[Node] = None
        store.attach(self)
        self._recompute(store.list_nodes())

    @property
    def selected(self) -> Optional[Node]:
        return self._selected

    def update(self, change: GraphChange) -> None:
        if change.touches_nodes:
            self._recompute(change.nodes)

    def _recompute(self, nodes) -> None:
        self._selected = next((n for n in nodes if n.selected), None)
