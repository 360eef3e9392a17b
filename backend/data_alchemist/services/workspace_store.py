"""Workspace store — Redis-backed latest-records / latest-report per workspace.

Every edit in the presentation layer re-submits the three collections with an
increasing sequence number. Only a submission newer than the stored one
replaces it, so a slow, superseded validation can never overwrite a newer one.
"""

import json
from datetime import datetime, timezone
from typing import Optional

import structlog
from redis.exceptions import WatchError

from data_alchemist.config import get_settings
from data_alchemist.exceptions import StaleSubmissionError, StoreUnavailableError
from data_alchemist.validators import ValidationEngine, ValidationReport

logger = structlog.get_logger()


class WorkspaceStore:
    """Manages per-workspace validation state in Redis."""

    def __init__(self, redis_client, ttl_seconds: Optional[int] = None):
        self.redis = redis_client
        self.ttl = ttl_seconds or get_settings().WORKSPACE_TTL_SECONDS
        self._prefix = "data_alchemist:workspace:"

    def _key(self, workspace_id: str) -> str:
        return f"{self._prefix}{workspace_id}"

    def _require_redis(self):
        if self.redis is None:
            raise StoreUnavailableError("Workspace store is not connected to Redis")
        return self.redis

    async def submit(
        self,
        workspace_id: str,
        sequence: int,
        clients: list,
        workers: list,
        tasks: list,
    ) -> ValidationReport:
        """Validate the collections and store the result if `sequence` is newer than the stored one.

        Raises:
            StaleSubmissionError: a submission with an equal or higher sequence is already stored
            StoreUnavailableError: no Redis connection
        """
        redis = self._require_redis()
        report = ValidationEngine().report(clients, workers, tasks, sequence=sequence)
        key = self._key(workspace_id)

        document = {
            "workspace_id": workspace_id,
            "sequence": sequence,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "clients": [_as_row(r) for r in clients],
            "workers": [_as_row(r) for r in workers],
            "tasks": [_as_row(r) for r in tasks],
            "report": report.model_dump(mode="json"),
        }
        payload = json.dumps(document, default=str)

        # Compare-and-set on the stored sequence
        async with redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(key)
                    current = await pipe.get(key)
                    if current is not None:
                        current_sequence = json.loads(current).get("sequence", -1)
                        if sequence <= current_sequence:
                            logger.info(
                                "workspace_submission_stale",
                                workspace_id=workspace_id,
                                sequence=sequence,
                                current_sequence=current_sequence,
                            )
                            raise StaleSubmissionError(workspace_id, sequence, current_sequence)
                    pipe.multi()
                    pipe.setex(key, self.ttl, payload)
                    await pipe.execute()
                    break
                except WatchError:
                    # Another submission landed between WATCH and EXEC; re-read and compare again
                    continue

        logger.info(
            "workspace_updated",
            workspace_id=workspace_id,
            sequence=sequence,
            can_export=report.can_export,
            summary=report.summary,
        )
        return report

    async def get(self, workspace_id: str) -> Optional[dict]:
        """Retrieve the stored workspace document."""
        redis = self._require_redis()
        data = await redis.get(self._key(workspace_id))
        if data is None:
            return None
        return json.loads(data)

    async def get_report(self, workspace_id: str) -> Optional[ValidationReport]:
        """Latest stored report, or None if the workspace is unknown."""
        document = await self.get(workspace_id)
        if document is None:
            return None
        return self.report_from(document)

    @staticmethod
    def report_from(document: dict) -> ValidationReport:
        """Rebuild the report held in a stored workspace document."""
        return ValidationReport.model_validate(document["report"])

    async def delete(self, workspace_id: str) -> bool:
        """Delete a workspace. Returns True if it existed."""
        redis = self._require_redis()
        removed = await redis.delete(self._key(workspace_id))
        logger.info("workspace_deleted", workspace_id=workspace_id, existed=bool(removed))
        return bool(removed)


def _as_row(record) -> dict:
    """Record as a header-keyed dict for storage."""
    if hasattr(record, "to_row"):
        return record.to_row()
    return dict(record)
