"""Record models — clients, workers and tasks as they arrive from a spreadsheet.

Field aliases match the spreadsheet headers. Fields are deliberately lenient:
malformed values are carried through to the validation engine, which reports
them as defects instead of failing at construction. An absent column defaults
to None, so a model reads exactly like a mapping without that key.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecordBase(BaseModel):
    """Shared config for all record models."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_row(self) -> dict:
        """Dump using spreadsheet header names."""
        return self.model_dump(by_alias=True)


class Client(RecordBase):
    client_id: Optional[Any] = Field(default=None, alias="ClientID")
    client_name: Optional[Any] = Field(default=None, alias="ClientName")
    priority_level: Optional[Any] = Field(default=None, alias="PriorityLevel")
    requested_task_ids: Optional[Any] = Field(default=None, alias="RequestedTaskIDs")
    group_tag: Optional[Any] = Field(default=None, alias="GroupTag")
    attributes_json: Optional[Any] = Field(default=None, alias="AttributesJSON")


class Worker(RecordBase):
    worker_id: Optional[Any] = Field(default=None, alias="WorkerID")
    worker_name: Optional[Any] = Field(default=None, alias="WorkerName")
    skills: Optional[Any] = Field(default=None, alias="Skills")
    available_slots: Optional[Any] = Field(default=None, alias="AvailableSlots")
    max_load_per_phase: Optional[Any] = Field(default=None, alias="MaxLoadPerPhase")
    worker_group: Optional[Any] = Field(default=None, alias="WorkerGroup")
    qualification_level: Optional[Any] = Field(default=None, alias="QualificationLevel")


class Task(RecordBase):
    task_id: Optional[Any] = Field(default=None, alias="TaskID")
    task_name: Optional[Any] = Field(default=None, alias="TaskName")
    category: Optional[Any] = Field(default=None, alias="Category")
    duration: Optional[Any] = Field(default=None, alias="Duration")
    required_skills: Optional[Any] = Field(default=None, alias="RequiredSkills")
    preferred_phases: Optional[Any] = Field(default=None, alias="PreferredPhases")
    max_concurrent: Optional[Any] = Field(default=None, alias="MaxConcurrent")
