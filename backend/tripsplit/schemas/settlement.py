"""
Pydantic schemas for balances, totals and settlement results.
"""
from pydantic import BaseModel
from typing import List, Dict
from decimal import Decimal


class Transfer(BaseModel):
    """Schema for a single transfer in settlement."""
    from_participant_id: str
    from_name: str
    to_participant_id: str
    to_name: str
    amount: Decimal


class ParticipantBalance(BaseModel):
    """Net balance of one participant (positive = is owed, negative = owes)."""
    participant_id: str
    name: str
    net: Decimal


class BalancesResponse(BaseModel):
    """Schema for the balances endpoint."""
    trip_id: str
    currency: str
    balances: List[ParticipantBalance]


class TotalsResponse(BaseModel):
    """Schema for trip totals."""
    trip_id: str
    currency: str
    total: Decimal
    by_person: Dict[str, Decimal]  # participant id -> amount paid
    owed_by_person: Dict[str, Decimal]  # participant id -> equal-split share


class SettlementSummary(BaseModel):
    """Schema for settlement summary."""
    trip_id: str
    currency: str
    net_balances: List[ParticipantBalance]
    transfers: List[Transfer]
    total_expenses: Decimal
    participant_count: int
    summary: str
