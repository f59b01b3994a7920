"""
Núcleo de sincronización del editor de workflows.

Mantiene la copia local del grafo, la sincroniza con la API de persistencia
y superpone el estado de ejecución que llega por el canal push.
"""

from .editor import WorkflowEditor
from .session import Session
from .util.ids import new_ref

__all__ = ["WorkflowEditor", "Session", "new_ref"]
