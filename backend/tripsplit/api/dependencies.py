"""
Shared route dependencies and error translation.
"""
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripsplit.db.session import get_db
from tripsplit.core.exceptions import (
    TripsplitError, NotFoundError, LedgerValidationError, ParticipantRemovalRejected
)
from tripsplit.services.trip_store import TripStore


def get_trip_store(db: Session = Depends(get_db)) -> TripStore:
    """Dependency for getting a trip store bound to the request session."""
    return TripStore(db)


def http_error(exc: TripsplitError) -> HTTPException:
    """Map a domain error to the matching HTTP error."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ParticipantRemovalRejected):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": str(exc), "expense_ids": exc.expense_ids}
        )
    if isinstance(exc, LedgerValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
