"""Service errors. Data-quality problems are Defects, never exceptions."""


class IngestionError(Exception):
    """Raised when decoded rows cannot be mapped onto record fields."""

    pass


class UnknownEntityError(Exception):
    """Raised when an entity kind other than clients, workers or tasks is requested."""

    pass


class WorkspaceNotFoundError(Exception):
    """Raised when a workspace has no stored validation result."""

    pass


class StaleSubmissionError(Exception):
    """Raised when a submission's sequence number is not newer than the stored one."""

    def __init__(self, workspace_id: str, sequence: int, current: int):
        self.workspace_id = workspace_id
        self.sequence = sequence
        self.current = current
        super().__init__(
            f"Workspace {workspace_id} already holds sequence {current}; "
            f"submission {sequence} is stale"
        )


class StoreUnavailableError(Exception):
    """Raised when the workspace store backend is not connected."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    IngestionError: 400,
    UnknownEntityError: 404,
    WorkspaceNotFoundError: 404,
    StaleSubmissionError: 409,
    StoreUnavailableError: 503,
}
