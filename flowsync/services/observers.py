"""
Observer Pattern: change notifications of the graph store.

Lets derived views (selection, rendering) react to every new snapshot
without the store knowing about them.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Literal, Tuple

from ..models import Edge, Node

ChangeKind = Literal["nodes", "edges", "load"]


@dataclass(frozen=True)
class GraphChange:
    """A new snapshot of the store, and which collection produced it."""
    kind: ChangeKind
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]

    @property
    def touches_nodes(self) -> bool:
        return self.kind in ("nodes", "load")


class GraphObserver(ABC):
    """Observador base para cambios del grafo."""

    @abstractmethod
    def update(self, change: GraphChange) -> None:
        """
        Recibe un snapshot nuevo.

        Args:
            change: Snapshot completo posterior a la mutación
        """
        pass


class GraphSubject:
    """
    Subject del patrón Observer.

    Gestiona la lista de observadores y les entrega cada snapshot.
    """

    def __init__(self):
        self._observers: List[GraphObserver] = []

    def attach(self, observer: GraphObserver) -> None:
        """Agrega un observador."""
        if observer not in self._observers:
            self._observers.append(observer)

    def detach(self, observer: GraphObserver) -> None:
        """Remueve un observador."""
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, change: GraphChange) -> None:
        """Notifica a todos los observadores."""
        for observer in list(self._observers):
            observer.update(change)
