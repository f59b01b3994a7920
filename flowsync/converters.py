"""
Format Converters
Translates between the local graph (Node + Edge keyed by ref) and the
persistence API format (WorkflowDTO with pos_x/pos_y and persisted ids)
"""

from typing import List, Sequence, Tuple

from .models import (
    Edge,
    Node,
    Position,
    WorkflowDTO,
    WorkflowEdgeDTO,
    WorkflowNodeDTO,
)


def node_to_wire(node: Node) -> WorkflowNodeDTO:
    """
    Convert a local node to the API format.

    Local format:
        Node(ref="01H...", persisted_id=None, position=Position(x=10, y=20), block={...})

    API format:
        {ref: "01H...", pos_x: 10, pos_y: 20, block: {...}}   # sin id hasta el primer save

    Transient fields (status, selected) are never sent.
    """
    return WorkflowNodeDTO(
        id=node.persisted_id,
        ref=node.ref,
        pos_x=node.position.x,
        pos_y=node.position.y,
        block=node.block,
    )


def edge_to_wire(edge: Edge) -> WorkflowEdgeDTO:
    """Convert a local edge to the API format (empty handle becomes absent)."""
    return WorkflowEdgeDTO(
        id=edge.persisted_id,
        source=edge.source,
        source_handle=edge.source_handle or None,
        target=edge.target,
    )


def graph_to_workflow(
    workflow_id: str,
    nodes: Sequence[Node],
    edges: Sequence[Edge],
) -> WorkflowDTO:
    """
    Convert a store snapshot into the document accepted by `update`.

    Args:
        workflow_id: Id of the bound workflow
        nodes: Node snapshot, in collection order
        edges: Edge snapshot, in collection order

    Returns:
        WorkflowDTO with every node and edge, none omitted
    """
    return WorkflowDTO(
        id=workflow_id,
        nodes=[node_to_wire(n) for n in nodes],
        edges=[edge_to_wire(e) for e in edges],
    )


def node_from_wire(data: WorkflowNodeDTO) -> Node:
    """API node -> local node, with no status and not selected."""
    return Node(
        ref=data.ref,
        persisted_id=data.id,
        position=Position(x=data.pos_x, y=data.pos_y),
        block=dict(data.block),
    )


def edge_from_wire(data: WorkflowEdgeDTO) -> Edge:
    return Edge(
        persisted_id=data.id,
        source=data.source,
        source_handle=data.source_handle,
        target=data.target,
    )


def workflow_to_graph(workflow: WorkflowDTO) -> Tuple[List[Node], List[Edge]]:
    """
    Convert a fetched workflow into local nodes and edges.

    Returns:
        Tuple of (nodes, edges) in document order
    """
    nodes = [node_from_wire(n) for n in workflow.nodes]
    edges = [edge_from_wire(e) for e in workflow.edges]
    return nodes, edges
