"""
Trip and participant management routes.
"""
from fastapi import APIRouter, Depends, status, Response
from typing import List
from decimal import Decimal
from tripsplit.core.exceptions import TripsplitError
from tripsplit.schemas.ledger import TripSnapshot
from tripsplit.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripDetailResponse,
    ParticipantCreate, ParticipantResponse
)
from tripsplit.schemas.expense import ExpenseResponse, OrphanedExpensesResponse
from tripsplit.services.settlement_service import quantize_amount
from tripsplit.services.trip_store import TripStore
from tripsplit.api.dependencies import get_trip_store, http_error

router = APIRouter(prefix="/trips", tags=["trips"])


def build_trip_detail(trip: TripSnapshot) -> TripDetailResponse:
    """Resolve ids to names for display."""
    names = trip.participant_names()
    expense_responses = []
    for expense in trip.expenses:
        share = expense.amount / len(expense.consumer_ids) if expense.consumer_ids else Decimal(0)
        expense_responses.append(ExpenseResponse(
            id=expense.id,
            description=expense.description,
            amount=expense.amount,
            payer_id=expense.payer_id,
            payer_name=names.get(expense.payer_id, ""),
            consumer_ids=list(expense.consumer_ids),
            share_amount=quantize_amount(share),
            created_at=expense.created_at
        ))

    return TripDetailResponse(
        id=trip.id,
        name=trip.name,
        currency=trip.currency,
        created_at=trip.created_at,
        participants=[ParticipantResponse(id=p.id, name=p.name) for p in trip.participants],
        expenses=expense_responses
    )


@router.post("", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    store: TripStore = Depends(get_trip_store)
):
    """Create a new trip."""
    try:
        trip = store.create_trip(trip_data.name, trip_data.currency)
    except TripsplitError as exc:
        raise http_error(exc)
    return build_trip_detail(trip)


@router.get("", response_model=List[TripResponse])
async def list_trips(store: TripStore = Depends(get_trip_store)):
    """List all trips, newest first."""
    return [
        TripResponse(id=t.id, name=t.name, currency=t.currency, created_at=t.created_at)
        for t in store.list_trips()
    ]


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """Get trip details with participants and expenses."""
    try:
        trip = store.get_trip(trip_id)
    except TripsplitError as exc:
        raise http_error(exc)
    return build_trip_detail(trip)


@router.patch("/{trip_id}", response_model=TripDetailResponse)
async def update_trip(
    trip_id: str,
    trip_data: TripUpdate,
    store: TripStore = Depends(get_trip_store)
):
    """Rename a trip or change its display currency."""
    try:
        trip = store.update_trip(trip_id, name=trip_data.name, currency=trip_data.currency)
    except TripsplitError as exc:
        raise http_error(exc)
    return build_trip_detail(trip)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """Delete a trip."""
    try:
        store.delete_trip(trip_id)
    except TripsplitError as exc:
        raise http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{trip_id}/participants", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def add_participant(
    trip_id: str,
    participant: ParticipantCreate,
    store: TripStore = Depends(get_trip_store)
):
    """Add a participant to the trip."""
    try:
        trip = store.add_participant(trip_id, participant.name)
    except TripsplitError as exc:
        raise http_error(exc)
    return build_trip_detail(trip)


@router.get("/{trip_id}/participants/{participant_id}/orphans", response_model=OrphanedExpensesResponse)
async def get_orphaned_expenses(
    trip_id: str,
    participant_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """List the expenses that removing this participant would drop."""
    try:
        orphans = store.find_orphaned_expenses(trip_id, participant_id)
    except TripsplitError as exc:
        raise http_error(exc)
    return OrphanedExpensesResponse(
        participant_id=participant_id,
        expense_ids=[e.id for e in orphans],
        total_amount=sum((e.amount for e in orphans), Decimal(0))
    )


@router.delete("/{trip_id}/participants/{participant_id}", response_model=TripDetailResponse)
async def remove_participant(
    trip_id: str,
    participant_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """Remove a participant from the trip."""
    try:
        trip = store.remove_participant(trip_id, participant_id)
    except TripsplitError as exc:
        raise http_error(exc)
    return build_trip_detail(trip)
