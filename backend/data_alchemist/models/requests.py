"""API request models."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from data_alchemist.models.records import Client, Task, Worker


class ValidateRequest(BaseModel):
    """Stateless validation of the three collections."""

    clients: list[Client] = Field(default_factory=list)
    workers: list[Worker] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    sequence: Optional[int] = Field(
        default=None,
        description="Caller sequence number, echoed back so stale responses can be discarded",
    )


class WorkspaceSubmission(BaseModel):
    """Replace a workspace's records; only newer sequence numbers are accepted."""

    sequence: int = Field(..., ge=0, description="Monotonically increasing per workspace")
    clients: list[Client] = Field(default_factory=list)
    workers: list[Worker] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)


class IngestRequest(BaseModel):
    """One decoded sheet: a header row and data rows."""

    headers: list[Any] = Field(..., description="Header row exactly as decoded from the file")
    rows: list[list[Any]] = Field(default_factory=list)
