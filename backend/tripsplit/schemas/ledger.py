"""
Immutable ledger snapshots handed to the settlement engine.

A snapshot is loaded in one go from the store after every committed mutation,
so balance and settlement code never observes a half-applied change.
"""
from pydantic import BaseModel
from typing import Dict, Tuple
from datetime import datetime
from decimal import Decimal


class ParticipantSnapshot(BaseModel):
    """A participant as seen by the engine."""
    id: str
    name: str

    model_config = {"frozen": True, "from_attributes": True}


class ExpenseSnapshot(BaseModel):
    """An expense as seen by the engine."""
    id: str
    description: str
    amount: Decimal
    payer_id: str
    consumer_ids: Tuple[str, ...]
    created_at: datetime

    model_config = {"frozen": True, "from_attributes": True}


class TripSnapshot(BaseModel):
    """Fully loaded trip: the ledger plus display metadata."""
    id: str
    name: str
    currency: str
    created_at: datetime
    participants: Tuple[ParticipantSnapshot, ...] = ()
    expenses: Tuple[ExpenseSnapshot, ...] = ()

    model_config = {"frozen": True, "from_attributes": True}

    def participant_names(self) -> Dict[str, str]:
        """Map participant id to display name."""
        return {p.id: p.name for p in self.participants}
