# flowsync/services/store.py
"""
Graph State Store
Owns the local copy of the workflow graph. Every mutation swaps in a new
tuple of nodes or edges, so a reader always holds a complete snapshot.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, Literal, Optional, Tuple

from ..models import Edge, Node, Position, Status
from ..util.ids import new_ref
from .observers import GraphChange, GraphSubject

logger = logging.getLogger(__name__)

Collection = Literal["nodes", "edges"]

# Campos que update_node no puede tocar: ref es fijo, status es del overlay
# y selected solo cambia via select()
_PROTECTED_FIELDS = {"ref", "status", "selected"}


class GraphIntegrityError(ValueError):
    """A structural edit references a node that does not exist."""


class GraphStore(GraphSubject):
    """In-memory nodes and edges of one workflow"""

    def __init__(self):
        super().__init__()
        self._nodes: Tuple[Node, ...] = ()
        self._edges: Tuple[Edge, ...] = ()

    # ------------------------------------------------------------------
    # Lectura
    # ------------------------------------------------------------------

    def list_nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    def list_edges(self) -> Tuple[Edge, ...]:
        return self._edges

    def get_node(self, ref: str) -> Optional[Node]:
        for node in self._nodes:
            if node.ref == ref:
                return node
        return None

    def has_node(self, ref: str) -> bool:
        return self.get_node(ref) is not None

    # ------------------------------------------------------------------
    # Reemplazo completo
    # ------------------------------------------------------------------

    def load(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """
        Replace the whole graph (initial fetch and remote reconciliation).
        Edges pointing at unknown refs are dropped.
        """
        new_nodes = tuple(nodes)
        refs = {n.ref for n in new_nodes}
        kept = []
        for edge in edges:
            if edge.source in refs and edge.target in refs:
                kept.append(edge)
            else:
                logger.warning(
                    "Dropping dangling edge %s -> %s", edge.source, edge.target
                )
        self._nodes = new_nodes
        self._edges = tuple(kept)
        self._publish("load")

    def clear(self) -> None:
        self.load((), ())

    # ------------------------------------------------------------------
    # Ediciones estructurales
    # ------------------------------------------------------------------

    def create_node(self, block: Dict[str, Any], position: Position) -> Node:
        """Mint a ref and append a node that has never been saved."""
        node = Node(ref=new_ref(), position=position, block=block)
        self._nodes = self._nodes + (node,)
        self._publish("nodes")
        return node

    def update_node(self, ref: str, /, **patch: Any) -> Optional[Node]:
        """
        Structural patch of the node keyed by `ref`.

        Returns:
            The patched node, or None when `ref` is not in the graph
        """
        protected = _PROTECTED_FIELDS.intersection(patch)
        if protected:
            raise ValueError(f"update_node cannot patch {sorted(protected)}")

        patched: Optional[Node] = None
        nodes = []
        for node in self._nodes:
            if node.ref == ref:
                node = replace(node, **patch)
                patched = node
            nodes.append(node)

        if patched is None:
            return None
        self._nodes = tuple(nodes)
        self._publish("nodes")
        return patched

    def move_node(self, ref: str, x: float, y: float) -> Optional[Node]:
        return self.update_node(ref, position=Position(x=x, y=y))

    def remove_node(self, ref: str) -> bool:
        """Delete a node together with every edge attached to it."""
        if not self.has_node(ref):
            return False
        self._nodes = tuple(n for n in self._nodes if n.ref != ref)
        self._edges = tuple(
            e for e in self._edges if e.source != ref and e.target != ref
        )
        self._publish("nodes")
        return True

    def connect(
        self, source: str, target: str, source_handle: Optional[str] = None
    ) -> Edge:
        missing = [ref for ref in (source, target) if not self.has_node(ref)]
        if missing:
            raise GraphIntegrityError(f"Unknown node ref(s): {', '.join(missing)}")

        edge = Edge(source=source, target=target, source_handle=source_handle)
        self._edges = self._edges + (edge,)
        self._publish("edges")
        return edge

    def remove_edge(self, edge: Edge) -> bool:
        edges = tuple(e for e in self._edges if e is not edge)
        if len(edges) == len(self._edges):
            return False
        self._edges = edges
        self._publish("edges")
        return True

    def select(self, ref: Optional[str]) -> None:
        """Mark one node as selected (None clears the selection flag)."""
        nodes = self._patch(
            self._nodes,
            lambda n: replace(n, selected=n.ref == ref),
            lambda n: n.selected != (n.ref == ref),
        )
        if nodes == self._nodes:
            return
        self._nodes = nodes
        self._publish("nodes")

    # ------------------------------------------------------------------
    # Overlay de estado
    # ------------------------------------------------------------------

    def patch_status(
        self,
        kind: Collection,
        status: Optional[Status],
        predicate: Callable[[Any], bool] = lambda _: True,
    ) -> int:
        """
        Set `status` on every node or edge matching `predicate`.

        Elements that do not match, or already carry that status, are kept
        as the very same objects.

        Returns:
            Number of elements whose status changed
        """
        changed = 0

        def apply(element):
            nonlocal changed
            changed += 1
            return replace(element, status=status)

        def wants(element) -> bool:
            return predicate(element) and element.status != status

        if kind == "nodes":
            nodes = self._patch(self._nodes, apply, wants)
            if changed:
                self._nodes = nodes
        elif kind == "edges":
            edges = self._patch(self._edges, apply, wants)
            if changed:
                self._edges = edges
        else:
            raise ValueError(f"Unknown collection: {kind}")

        if changed:
            self._publish(kind)
        return changed

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    @staticmethod
    def _patch(elements: Tuple, transform: Callable, predicate: Callable) -> Tuple:
        # Una sola pasada; los elementos no afectados se conservan tal cual
        return tuple(transform(e) if predicate(e) else e for e in elements)

    def _publish(self, kind) -> None:
        self.notify(GraphChange(kind=kind, nodes=self._nodes, edges=self._edges))
