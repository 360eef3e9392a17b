"""API response models."""

from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

from data_alchemist.validators.models import ValidationReport


class IngestResponse(BaseModel):
    """Records converted from one sheet, keyed by spreadsheet header."""

    entity: Literal["clients", "workers", "tasks"]
    records: list[dict]
    header_mapping: dict[str, int]
    unmapped_headers: list[str] = []
    skipped_rows: int = 0


class WorkspaceResponse(BaseModel):
    """Latest stored validation result for a workspace."""

    workspace_id: str
    sequence: int
    updated_at: datetime
    report: ValidationReport


class ExportStatusResponse(BaseModel):
    """Whether the workspace's data may be exported. Only error-severity defects block export."""

    workspace_id: str
    sequence: int
    can_export: bool
    blocking_defects: int
    summary: dict[str, int]


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
