from .graph import Position, Status, StatusState, Node, Edge
from .events import (
    STATUS_EVENT, UPDATED_EVENT, LOG_EVENT,
    StatusEvent, UpdatedEvent, LogEvent, LogEntry,
)
from .wire import WorkflowDTO, WorkflowNodeDTO, WorkflowEdgeDTO

__all__ = [
    "Position", "Status", "StatusState", "Node", "Edge",
    "STATUS_EVENT", "UPDATED_EVENT", "LOG_EVENT",
    "StatusEvent", "UpdatedEvent", "LogEvent", "LogEntry",
    "WorkflowDTO", "WorkflowNodeDTO", "WorkflowEdgeDTO",
]
