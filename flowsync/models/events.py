"""
Push channel payload schemas
Every inbound event is validated against one of these before it touches
local state. Unknown or missing fields reject the payload.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .graph import Status

STATUS_EVENT = "graph:status"
UPDATED_EVENT = "graph:updated"
LOG_EVENT = "graph:log"


class _EventModel(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


class StatusEvent(_EventModel):
    """Execution progress of one node"""
    node_id: str = Field(alias="nodeId")
    status: Literal["running", "success", "error"]
    remaining: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("remaining")
    @classmethod
    def whole_steps(cls, value: Optional[float]) -> Optional[float]:
        # Cuenta de pasos: 3 y 3.0 valen, 0.5 no
        if value is not None and not float(value).is_integer():
            raise ValueError("remaining must be a whole number")
        return value

    @property
    def is_terminal(self) -> bool:
        """Error, or nothing left downstream"""
        return self.status == "error" or self.remaining == 0

    def to_status(self) -> Status:
        remaining = None if self.remaining is None else int(self.remaining)
        return Status(state=self.status, remaining=remaining)


class UpdatedEvent(_EventModel):
    """Someone saved the workflow"""
    actor_id: str = Field(alias="actorId")


class LogEvent(_EventModel):
    """Log line emitted by the remote run"""
    date: str = Field(min_length=19)
    msg: str

    @field_validator("date")
    @classmethod
    def drop_fraction(cls, value: str) -> str:
        # "YYYY-MM-DDTHH:MM:SS.mmmZ" -> "YYYY-MM-DDTHH:MM:SS"
        return value[:19]

    def to_entry(self) -> "LogEntry":
        return LogEntry(date=self.date[11:19], msg=self.msg)


class LogEntry(BaseModel):
    """What the log sink receives: {date: "HH:MM:SS", msg}"""
    date: str
    msg: str
