# launchboard/exceptions/board.py
from fastapi import HTTPException, status


class TaskNotFoundError(HTTPException):
    def __init__(self, task_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found"
        )


class TaxonomyEntryNotFoundError(HTTPException):
    """Missing phase or category entry"""
    def __init__(self, entry_id: str, kind: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{kind} {entry_id} not found"
        )


class GatewayUnavailableError(HTTPException):
    """Remote store failed; the request may be retried"""
    def __init__(self, detail: str = "Data store unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail
        )
