"""
Servicios del núcleo de sincronización.

Componentes principales:
- GraphStore: copia local del grafo (snapshots inmutables)
- StatusOverlay: estado de ejecución transitorio con decaimiento
- EventIngestion: validación y ruteo de eventos del canal push
- Reconciler: recarga completa ante cambios de otro actor
- SelectionTracker: nodo seleccionado, derivado del store
- PersistenceBridge: load / save / execute contra la API
"""

from .observers import GraphChange, GraphObserver, GraphSubject
from .store import GraphStore, GraphIntegrityError
from .overlay import StatusOverlay
from .bridge import PersistenceApi, PersistenceBridge
from .reconcile import Reconciler
from .selection import SelectionTracker
from .ingestion import EventIngestion, PushChannel

__all__ = [
    "GraphChange", "GraphObserver", "GraphSubject",
    "GraphStore", "GraphIntegrityError",
    "StatusOverlay",
    "PersistenceApi", "PersistenceBridge",
    "Reconciler",
    "SelectionTracker",
    "EventIngestion", "PushChannel",
]
