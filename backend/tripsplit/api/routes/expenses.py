"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, status
from tripsplit.core.exceptions import TripsplitError
from tripsplit.schemas.expense import ExpenseCreate
from tripsplit.schemas.trip import TripDetailResponse
from tripsplit.services.trip_store import TripStore
from tripsplit.api.dependencies import get_trip_store, http_error
from tripsplit.api.routes.trips import build_trip_detail

router = APIRouter(prefix="/trips/{trip_id}/expenses", tags=["expenses"])


@router.post("", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    trip_id: str,
    expense_data: ExpenseCreate,
    store: TripStore = Depends(get_trip_store)
):
    """Record an expense. Without consumer_ids it is split among everyone."""
    try:
        trip = store.add_expense(
            trip_id,
            description=expense_data.description,
            amount=expense_data.amount,
            payer_id=expense_data.payer_id,
            consumer_ids=expense_data.consumer_ids
        )
    except TripsplitError as exc:
        raise http_error(exc)
    return build_trip_detail(trip)


@router.delete("/{expense_id}", response_model=TripDetailResponse)
async def delete_expense(
    trip_id: str,
    expense_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """Delete an expense."""
    try:
        trip = store.delete_expense(trip_id, expense_id)
    except TripsplitError as exc:
        raise http_error(exc)
    return build_trip_detail(trip)
