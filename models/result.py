"""Operation results returned to callers with a user-facing message."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .appointment import Appointment


class OperationResult(BaseModel):
    """Outcome of a scheduler operation."""

    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[str] = Field(None, description="Error code when success is False")


class SeriesResult(BaseModel):
    """Aggregate outcome of a recurring series request."""

    recurrence_group_id: str
    requested_count: int
    created_count: int
    appointments: List[Appointment] = Field(default_factory=list)
