"""
Pydantic schemas for Trip and Participant entities.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from tripsplit.schemas.expense import ExpenseResponse


class TripCreate(BaseModel):
    """Schema for trip creation."""
    name: str = Field(..., max_length=200)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)  # Falls back to DEFAULT_CURRENCY


class TripUpdate(BaseModel):
    """Schema for trip update."""
    name: Optional[str] = Field(None, max_length=200)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: str
    name: str
    currency: str
    created_at: datetime

    class Config:
        from_attributes = True


class ParticipantCreate(BaseModel):
    """Schema for adding a participant."""
    name: str = Field(..., max_length=100)


class ParticipantResponse(BaseModel):
    """Schema for participant response."""
    id: str
    name: str

    class Config:
        from_attributes = True


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with participants and expenses."""
    participants: List[ParticipantResponse] = []
    expenses: List[ExpenseResponse] = []
