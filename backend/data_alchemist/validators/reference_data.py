"""Reference data — header names, value ranges, and placeholders used by the validators.

This is the encoded data contract that makes validation deterministic.
"""

from typing import Optional

# ──────────────────────────────────────────────────────────────────────
# SPREADSHEET HEADERS (in canonical column order)
# ──────────────────────────────────────────────────────────────────────

EXPECTED_HEADERS: dict[str, list[str]] = {
    "clients": ["ClientID", "ClientName", "PriorityLevel", "RequestedTaskIDs", "GroupTag", "AttributesJSON"],
    "workers": ["WorkerID", "WorkerName", "Skills", "AvailableSlots", "MaxLoadPerPhase", "WorkerGroup", "QualificationLevel"],
    "tasks": ["TaskID", "TaskName", "Category", "Duration", "RequiredSkills", "PreferredPhases", "MaxConcurrent"],
}

# ──────────────────────────────────────────────────────────────────────
# IDENTITY FIELDS per entity kind: (id field, name field)
# ──────────────────────────────────────────────────────────────────────

ID_FIELDS: dict[str, str] = {
    "clients": "ClientID",
    "workers": "WorkerID",
    "tasks": "TaskID",
}

NAME_FIELDS: dict[str, str] = {
    "clients": "ClientName",
    "workers": "WorkerName",
    "tasks": "TaskName",
}

# ──────────────────────────────────────────────────────────────────────
# VALUE RANGES — (entity, field) → (min, max); None means unbounded
# ──────────────────────────────────────────────────────────────────────

PRIORITY_MIN = 1
PRIORITY_MAX = 5
MIN_DURATION = 1
MIN_LOAD_PER_PHASE = 1

VALUE_RANGES: list[tuple[str, str, int, Optional[int]]] = [
    ("clients", "PriorityLevel", PRIORITY_MIN, PRIORITY_MAX),
    ("tasks", "Duration", MIN_DURATION, None),
    ("workers", "MaxLoadPerPhase", MIN_LOAD_PER_PHASE, None),
]

# Widest "a-b" phase range a sheet cell may expand to
MAX_PHASE_SPAN = 1000

# Entity key used when a record has no identifier
UNKNOWN_ENTITY_ID = "unknown"

# Entity key for defects spanning the whole dataset
SYSTEM_ENTITY_ID = "system"
