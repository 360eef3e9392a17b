"""Header mapping and row conversion — decoded spreadsheet rows → Client / Worker / Task records."""

from typing import Any, Sequence

import structlog
from pydantic import BaseModel, Field

from data_alchemist.exceptions import IngestionError, UnknownEntityError
from data_alchemist.ingestion.coercion import (
    parse_int_or_default,
    parse_number_array,
    parse_phases,
    parse_string_array,
    parse_text,
)
from data_alchemist.models.records import Client, Task, Worker
from data_alchemist.validators.reference_data import EXPECTED_HEADERS

logger = structlog.get_logger()


class IngestionResult(BaseModel):
    """Records built from one uploaded sheet, plus the expected headers that were not found."""

    entity: str
    records: list[Any] = Field(default_factory=list)
    header_mapping: dict[str, int] = Field(default_factory=dict)
    unmapped_headers: list[str] = Field(default_factory=list)
    skipped_rows: int = 0


def expected_headers(entity: str) -> list[str]:
    try:
        return EXPECTED_HEADERS[entity]
    except KeyError:
        raise UnknownEntityError(
            f"Unknown entity '{entity}'. Expected one of: {', '.join(EXPECTED_HEADERS)}"
        )


def map_headers(headers: Sequence[Any], entity: str) -> dict[str, int]:
    """Map each expected header to the index of the first file header matching it case-insensitively."""
    normalized = [str(h).strip().lower() if h is not None else "" for h in headers]
    mapping = {}
    for expected in expected_headers(entity):
        try:
            mapping[expected] = normalized.index(expected.lower())
        except ValueError:
            continue
    return mapping


def _is_blank_row(row: Sequence[Any]) -> bool:
    return all(parse_text(cell) == "" for cell in row)


def _cell(row: Sequence[Any], mapping: dict[str, int], header: str) -> Any:
    index = mapping.get(header)
    if index is None or index >= len(row):
        return None
    return row[index]


def _to_client(row, mapping, n: int) -> Client:
    return Client(
        ClientID=parse_text(_cell(row, mapping, "ClientID"), f"CLIENT_{n}"),
        ClientName=parse_text(_cell(row, mapping, "ClientName"), f"Client {n}"),
        PriorityLevel=parse_int_or_default(_cell(row, mapping, "PriorityLevel")),
        RequestedTaskIDs=parse_string_array(_cell(row, mapping, "RequestedTaskIDs")),
        GroupTag=parse_text(_cell(row, mapping, "GroupTag")),
        AttributesJSON=parse_text(_cell(row, mapping, "AttributesJSON"), "{}"),
    )


def _to_worker(row, mapping, n: int) -> Worker:
    return Worker(
        WorkerID=parse_text(_cell(row, mapping, "WorkerID"), f"WORKER_{n}"),
        WorkerName=parse_text(_cell(row, mapping, "WorkerName"), f"Worker {n}"),
        Skills=parse_string_array(_cell(row, mapping, "Skills")),
        AvailableSlots=parse_number_array(_cell(row, mapping, "AvailableSlots")),
        MaxLoadPerPhase=parse_int_or_default(_cell(row, mapping, "MaxLoadPerPhase")),
        WorkerGroup=parse_text(_cell(row, mapping, "WorkerGroup")),
        QualificationLevel=parse_int_or_default(_cell(row, mapping, "QualificationLevel")),
    )


def _to_task(row, mapping, n: int) -> Task:
    return Task(
        TaskID=parse_text(_cell(row, mapping, "TaskID"), f"TASK_{n}"),
        TaskName=parse_text(_cell(row, mapping, "TaskName"), f"Task {n}"),
        Category=parse_text(_cell(row, mapping, "Category")),
        Duration=parse_int_or_default(_cell(row, mapping, "Duration")),
        RequiredSkills=parse_string_array(_cell(row, mapping, "RequiredSkills")),
        PreferredPhases=parse_phases(_cell(row, mapping, "PreferredPhases")),
        MaxConcurrent=parse_int_or_default(_cell(row, mapping, "MaxConcurrent")),
    )


_CONVERTERS = {
    "clients": _to_client,
    "workers": _to_worker,
    "tasks": _to_task,
}


def convert_rows(
    headers: Sequence[Any],
    rows: Sequence[Sequence[Any]],
    entity: str,
) -> IngestionResult:
    """Convert one decoded sheet into records.

    Args:
        headers: Header row as decoded from the file
        rows: Data rows; cells may be strings, numbers or None
        entity: "clients", "workers" or "tasks"

    Returns:
        IngestionResult with records in row order (blank rows skipped)

    Raises:
        UnknownEntityError: entity is not a known record kind
        IngestionError: the header row is empty or matches none of the expected headers
    """
    expected = expected_headers(entity)
    if not headers:
        raise IngestionError(f"No header row supplied for {entity}")

    mapping = map_headers(headers, entity)
    if not mapping:
        raise IngestionError(
            f"None of the headers match {entity} columns. Expected: {', '.join(expected)}"
        )

    convert = _CONVERTERS[entity]
    records = []
    skipped = 0
    for row in rows:
        if _is_blank_row(row):
            skipped += 1
            continue
        records.append(convert(row, mapping, len(records) + 1))

    unmapped = [h for h in expected if h not in mapping]

    logger.info(
        "rows_ingested",
        entity=entity,
        records=len(records),
        skipped_rows=skipped,
        unmapped_headers=unmapped,
    )

    return IngestionResult(
        entity=entity,
        records=records,
        header_mapping=mapping,
        unmapped_headers=unmapped,
        skipped_rows=skipped,
    )
