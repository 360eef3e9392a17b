"""Workspaces API — submit records, read the latest report, check the export gate."""

from fastapi import APIRouter, Request, Response

import structlog

from data_alchemist.exceptions import StoreUnavailableError, WorkspaceNotFoundError
from data_alchemist.models.requests import WorkspaceSubmission
from data_alchemist.models.responses import ExportStatusResponse, WorkspaceResponse
from data_alchemist.services.workspace_store import WorkspaceStore
from data_alchemist.validators import ValidationReport

logger = structlog.get_logger()

router = APIRouter()


def _store(request: Request) -> WorkspaceStore:
    store = getattr(request.app.state, "workspace_store", None)
    if store is None:
        raise StoreUnavailableError("Workspace store is not configured")
    return store


def _not_found(workspace_id: str) -> WorkspaceNotFoundError:
    return WorkspaceNotFoundError(f"Workspace {workspace_id} not found")


@router.put("/workspaces/{workspace_id}", response_model=ValidationReport)
async def submit_workspace(workspace_id: str, request_body: WorkspaceSubmission, request: Request):
    """Validate and store a workspace's records.

    Rejected with 409 when a submission with the same or a higher sequence
    number has already been stored (last call wins).
    """
    logger.info(
        "workspace_submitted",
        workspace_id=workspace_id,
        sequence=request_body.sequence,
        clients=len(request_body.clients),
        workers=len(request_body.workers),
        tasks=len(request_body.tasks),
    )
    return await _store(request).submit(
        workspace_id,
        request_body.sequence,
        request_body.clients,
        request_body.workers,
        request_body.tasks,
    )


@router.get("/workspaces/{workspace_id}", response_model=WorkspaceResponse)
async def get_workspace(workspace_id: str, request: Request):
    """Latest stored validation result."""
    store = _store(request)
    document = await store.get(workspace_id)
    if document is None:
        raise _not_found(workspace_id)
    return WorkspaceResponse(
        workspace_id=workspace_id,
        sequence=document["sequence"],
        updated_at=document["updated_at"],
        report=store.report_from(document),
    )


@router.get("/workspaces/{workspace_id}/export-status", response_model=ExportStatusResponse)
async def get_export_status(workspace_id: str, request: Request):
    """Export is blocked while any error-severity defect exists; warnings and info never block."""
    report = await _store(request).get_report(workspace_id)
    if report is None:
        raise _not_found(workspace_id)

    logger.info(
        "export_status_checked",
        workspace_id=workspace_id,
        sequence=report.sequence,
        can_export=report.can_export,
    )
    return ExportStatusResponse(
        workspace_id=workspace_id,
        sequence=report.sequence,
        can_export=report.can_export,
        blocking_defects=report.summary.get("error", 0),
        summary=report.summary,
    )


@router.delete("/workspaces/{workspace_id}", status_code=204)
async def delete_workspace(workspace_id: str, request: Request):
    """Forget a workspace."""
    if not await _store(request).delete(workspace_id):
        raise _not_found(workspace_id)
    return Response(status_code=204)
