"""
Local graph model
Nodes and edges as held by the editor, keyed by their local `ref`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

StatusState = Literal["running", "success", "error"]


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Status:
    """
    Transient execution status of a node or edge.
    Never persisted; `None` on the element means idle.
    """
    state: StatusState
    remaining: Optional[int] = None  # pasos aguas abajo todavía en curso


@dataclass(frozen=True)
class Node:
    ref: str
    position: Position = field(default_factory=Position)
    block: Dict[str, Any] = field(default_factory=dict)
    persisted_id: Optional[str] = None  # asignado por el servidor en el primer save
    status: Optional[Status] = None
    selected: bool = False

    @property
    def node_type(self) -> str:
        """Rendering type, derived from the block payload"""
        return str(self.block.get("type") or "default")


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    source_handle: Optional[str] = None
    persisted_id: Optional[str] = None
    status: Optional[Status] = None
