"""
Ledger validation and derived views.

These helpers never touch the database; the trip store calls them before
committing a mutation.
"""
from typing import Dict, Iterable, List, Optional
from decimal import Decimal
from tripsplit.core.exceptions import LedgerValidationError
from tripsplit.schemas.settlement import TotalsResponse
from tripsplit.services.balance_service import to_decimal
from tripsplit.services.settlement_service import quantize_amount


def clean_name(value: Optional[str], field: str = "name") -> str:
    """Trim a display string and reject it if nothing is left."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise LedgerValidationError(f"{field} must not be empty")
    return cleaned


def clean_currency(value: str) -> str:
    """Normalize an ISO-like currency code."""
    cleaned = clean_name(value, "currency").upper()
    if len(cleaned) != 3 or not cleaned.isalpha():
        raise LedgerValidationError("currency must be a three-letter code")
    return cleaned


def validate_expense(
    participants: Iterable,
    description: str,
    amount,
    payer_id: str,
    consumer_ids: Optional[List[str]] = None
) -> List[str]:
    """
    Check a new expense against the current participants.

    Returns the normalized consumer id list: duplicates dropped, order kept,
    and every participant when no consumers are given.
    """
    participant_ids = [p.id for p in participants]
    if not participant_ids:
        raise LedgerValidationError("Add participants before recording expenses")

    clean_name(description, "description")

    amount = to_decimal(amount)
    if not amount.is_finite() or amount <= 0:
        raise LedgerValidationError("amount must be greater than zero")

    if payer_id not in participant_ids:
        raise LedgerValidationError("payer must be a participant of the trip")

    if consumer_ids is None:
        return participant_ids

    normalized = list(dict.fromkeys(consumer_ids))
    if not normalized:
        raise LedgerValidationError("an expense needs at least one consumer")

    unknown = [cid for cid in normalized if cid not in participant_ids]
    if unknown:
        raise LedgerValidationError(f"unknown consumer ids: {', '.join(unknown)}")

    return normalized


def orphaned_expenses(expenses: Iterable, participant_id: str) -> List:
    """Expenses that become invalid if the participant is removed."""
    return [
        e for e in expenses
        if e.payer_id == participant_id or participant_id in e.consumer_ids
    ]


def compute_totals(trip) -> TotalsResponse:
    """Grand total plus amount paid and owed per participant."""
    by_person: Dict[str, Decimal] = {p.id: Decimal(0) for p in trip.participants}
    owed_by_person: Dict[str, Decimal] = {p.id: Decimal(0) for p in trip.participants}
    total = Decimal(0)

    for expense in trip.expenses:
        amount = to_decimal(expense.amount)
        total += amount
        if expense.payer_id in by_person:
            by_person[expense.payer_id] += amount

        consumer_ids = list(expense.consumer_ids)
        if consumer_ids:
            share = amount / len(consumer_ids)
            for consumer_id in consumer_ids:
                if consumer_id in owed_by_person:
                    owed_by_person[consumer_id] += share

    return TotalsResponse(
        trip_id=trip.id,
        currency=trip.currency,
        total=total,
        by_person=by_person,
        owed_by_person={pid: quantize_amount(v) for pid, v in owed_by_person.items()}
    )
