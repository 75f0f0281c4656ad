"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    description: str
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    payer_id: str
    consumer_ids: Optional[List[str]] = None  # Defaults to every participant of the trip


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: str
    description: str
    amount: Decimal
    payer_id: str
    payer_name: str
    consumer_ids: List[str]
    share_amount: Decimal  # Equal share per consumer, rounded for display
    created_at: datetime


class OrphanedExpensesResponse(BaseModel):
    """Expenses that would be dropped if a participant were removed."""
    participant_id: str
    expense_ids: List[str]
    total_amount: Decimal
