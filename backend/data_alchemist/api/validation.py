"""Validation API — stateless validation and sheet ingestion."""

from fastapi import APIRouter

import structlog

from data_alchemist.ingestion import convert_rows
from data_alchemist.models.requests import IngestRequest, ValidateRequest
from data_alchemist.models.responses import IngestResponse
from data_alchemist.validators import ValidationEngine, ValidationReport

logger = structlog.get_logger()

router = APIRouter()


@router.post("/validate", response_model=ValidationReport)
async def validate_records(request_body: ValidateRequest):
    """Validate clients, workers and tasks together.

    Nothing is stored. The caller's sequence number is echoed back so a client
    firing a request per edit can drop responses older than the latest one.
    """
    logger.info(
        "validation_requested",
        sequence=request_body.sequence,
        clients=len(request_body.clients),
        workers=len(request_body.workers),
        tasks=len(request_body.tasks),
    )
    return ValidationEngine().report(
        request_body.clients,
        request_body.workers,
        request_body.tasks,
        sequence=request_body.sequence,
    )


@router.post("/ingest/{entity}", response_model=IngestResponse)
async def ingest_sheet(entity: str, request_body: IngestRequest):
    """Map a decoded sheet's headers and coerce its cells into records.

    Raises UnknownEntityError (404) for an unknown entity and IngestionError (400)
    when no header matches.
    """
    logger.info("sheet_received", entity=entity, columns=len(request_body.headers), rows=len(request_body.rows))
    result = convert_rows(request_body.headers, request_body.rows, entity)

    return IngestResponse(
        entity=result.entity,
        records=[record.to_row() for record in result.records],
        header_mapping=result.header_mapping,
        unmapped_headers=result.unmapped_headers,
        skipped_rows=result.skipped_rows,
    )
