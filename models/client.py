"""Client models for the salon's client registry."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ClientTier(str, Enum):
    """Client tier."""

    REGULAR = "regular"
    PREMIUM = "premium"


class Client(BaseModel):
    """Client model."""

    id: str
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    notes: Optional[str] = None
    tier: ClientTier = ClientTier.REGULAR
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "id": "uuid-here",
                "name": "Maria Silva",
                "phone": "+420123456789",
                "tier": "premium",
            }
        }


class ClientCreate(BaseModel):
    """Client creation model."""

    name: str
    phone: Optional[str] = None
    notes: Optional[str] = None
    tier: ClientTier = ClientTier.REGULAR


class ClientUpdate(BaseModel):
    """Client update model; only the provided fields change."""

    name: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    tier: Optional[ClientTier] = None
