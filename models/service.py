"""Service models for salon services."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Service(BaseModel):
    """Service offered by the salon."""

    id: str
    name: str = Field(..., min_length=1)
    duration_minutes: int = Field(..., gt=0, description="Duration in minutes")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "uuid-here",
                "name": "Gel Manicure",
                "duration_minutes": 60,
            }
        }


class ServiceCreate(BaseModel):
    """Service creation model."""

    name: str
    duration_minutes: int


class ServiceUpdate(BaseModel):
    """Service update model; only the provided fields change."""

    name: Optional[str] = None
    duration_minutes: Optional[int] = None
