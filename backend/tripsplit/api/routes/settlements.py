"""
Balance, totals and settlement routes.

Results are recomputed from a fresh snapshot on every request and never
stored.
"""
from fastapi import APIRouter, Depends
from tripsplit.core.exceptions import TripsplitError
from tripsplit.schemas.settlement import (
    BalancesResponse, TotalsResponse, SettlementSummary
)
from tripsplit.services.ledger_service import compute_totals
from tripsplit.services.balance_service import compute_balances
from tripsplit.services.settlement_service import build_balance_items, build_settlement_summary
from tripsplit.services.trip_store import TripStore
from tripsplit.api.dependencies import get_trip_store, http_error

router = APIRouter(prefix="/trips/{trip_id}", tags=["settlement"])


def load_trip(trip_id: str, store: TripStore):
    try:
        return store.get_trip(trip_id)
    except TripsplitError as exc:
        raise http_error(exc)


@router.get("/balances", response_model=BalancesResponse)
async def get_balances(
    trip_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """Net balance per participant."""
    trip = load_trip(trip_id, store)
    net_balances = compute_balances(trip.participants, trip.expenses)
    return BalancesResponse(
        trip_id=trip.id,
        currency=trip.currency,
        balances=build_balance_items(trip, net_balances)
    )


@router.get("/totals", response_model=TotalsResponse)
async def get_totals(
    trip_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """Trip total and amount paid per participant."""
    return compute_totals(load_trip(trip_id, store))


@router.get("/settlement", response_model=SettlementSummary)
async def get_settlement(
    trip_id: str,
    store: TripStore = Depends(get_trip_store)
):
    """Who pays whom to settle the trip."""
    return build_settlement_summary(load_trip(trip_id, store))
