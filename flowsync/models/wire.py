"""
Persistence API DTOs
Shape of a workflow as the remote store reads and writes it.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class WorkflowNodeDTO(BaseModel):
    """Node as stored by the API (`id` only once persisted)"""
    id: Optional[str] = None
    ref: str
    pos_x: float = 0
    pos_y: float = 0
    block: Dict[str, Any] = Field(default_factory=dict)


class WorkflowEdgeDTO(BaseModel):
    """Edge as stored by the API; endpoints are node refs"""
    id: Optional[str] = None
    source: str
    source_handle: Optional[str] = None
    target: str


class WorkflowDTO(BaseModel):
    """Full workflow document (nodes + edges)"""
    id: str
    nodes: List[WorkflowNodeDTO] = Field(default_factory=list)
    edges: List[WorkflowEdgeDTO] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """
        Request body for the API. Absent ids and handles are omitted, not
        sent as null. `block` is passed through untouched.
        """
        nodes = []
        for node in self.nodes:
            item: Dict[str, Any] = {
                "ref": node.ref,
                "pos_x": node.pos_x,
                "pos_y": node.pos_y,
                "block": node.block,
            }
            if node.id is not None:
                item["id"] = node.id
            nodes.append(item)

        edges = []
        for edge in self.edges:
            item = {"source": edge.source, "target": edge.target}
            if edge.id is not None:
                item["id"] = edge.id
            if edge.source_handle:
                item["source_handle"] = edge.source_handle
            edges.append(item)

        return {"id": self.id, "nodes": nodes, "edges": edges}
