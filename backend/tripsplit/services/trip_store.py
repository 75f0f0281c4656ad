"""
Trip store: CRUD for trips, participants and expenses.

Every mutation validates through the ledger helpers, commits, and returns a
freshly loaded TripSnapshot. Balance logic lives in the engine services, not
here.
"""
import logging
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
from tripsplit.core.config import settings
from tripsplit.core.exceptions import NotFoundError, ParticipantRemovalRejected
from tripsplit.models.trip import Trip, Participant
from tripsplit.models.expense import Expense, ExpenseConsumer
from tripsplit.schemas.ledger import TripSnapshot
from tripsplit.services.ledger_service import (
    clean_name, clean_currency, validate_expense, orphaned_expenses
)

logger = logging.getLogger(__name__)

CASCADE = "cascade"
REJECT = "reject"


class TripStore:
    """Repository over the trip tables, bound to one database session."""

    def __init__(self, db: Session, removal_policy: Optional[str] = None):
        self.db = db
        self.removal_policy = removal_policy or settings.PARTICIPANT_REMOVAL_POLICY
        if self.removal_policy not in (CASCADE, REJECT):
            raise ValueError(f"Unknown participant removal policy: {self.removal_policy}")

    def _load(self, trip_id: str) -> Trip:
        trip = self.db.query(Trip).options(
            selectinload(Trip.participants),
            selectinload(Trip.expenses).selectinload(Expense.consumers)
        ).filter(Trip.id == trip_id).first()
        if not trip:
            raise NotFoundError("Trip", trip_id)
        return trip

    def _commit(self, trip_id: str) -> TripSnapshot:
        self.db.commit()
        return self.get_trip(trip_id)

    def get_trip(self, trip_id: str) -> TripSnapshot:
        """Load one trip as an immutable snapshot."""
        return TripSnapshot.model_validate(self._load(trip_id))

    def list_trips(self) -> List[TripSnapshot]:
        """All trips, newest first."""
        trips = self.db.query(Trip).options(
            selectinload(Trip.participants),
            selectinload(Trip.expenses).selectinload(Expense.consumers)
        ).order_by(Trip.created_at.desc()).all()
        return [TripSnapshot.model_validate(t) for t in trips]

    def create_trip(self, name: str, currency: Optional[str] = None) -> TripSnapshot:
        """Create an empty trip."""
        trip = Trip(
            name=clean_name(name),
            currency=clean_currency(currency or settings.DEFAULT_CURRENCY)
        )
        self.db.add(trip)
        self.db.flush()
        logger.info(f"Created trip {trip.id} ({trip.name})")
        return self._commit(trip.id)

    def update_trip(
        self,
        trip_id: str,
        name: Optional[str] = None,
        currency: Optional[str] = None
    ) -> TripSnapshot:
        """Rename a trip or change its display currency."""
        trip = self._load(trip_id)
        if name is not None:
            trip.name = clean_name(name)
        if currency is not None:
            trip.currency = clean_currency(currency)
        return self._commit(trip_id)

    def delete_trip(self, trip_id: str) -> None:
        """Delete a trip with its participants and expenses."""
        trip = self._load(trip_id)
        self.db.delete(trip)
        self.db.commit()
        logger.info(f"Deleted trip {trip_id}")

    def add_participant(self, trip_id: str, name: str) -> TripSnapshot:
        """Append a participant to the trip."""
        trip = self._load(trip_id)
        position = max((p.position for p in trip.participants), default=-1) + 1
        participant = Participant(name=clean_name(name), position=position)
        trip.participants.append(participant)
        self.db.flush()
        logger.info(f"Added participant {participant.id} to trip {trip_id}")
        return self._commit(trip_id)

    def find_orphaned_expenses(self, trip_id: str, participant_id: str) -> List[Expense]:
        """Expenses that removing the participant would invalidate."""
        trip = self._load(trip_id)
        self._get_participant(trip, participant_id)
        return orphaned_expenses(trip.expenses, participant_id)

    def remove_participant(self, trip_id: str, participant_id: str) -> TripSnapshot:
        """
        Remove a participant according to the configured policy.

        ``cascade`` deletes every expense the participant paid for or shares;
        ``reject`` raises ParticipantRemovalRejected if any such expense exists.
        """
        trip = self._load(trip_id)
        participant = self._get_participant(trip, participant_id)
        orphans = orphaned_expenses(trip.expenses, participant_id)

        if orphans and self.removal_policy == REJECT:
            logger.warning(
                f"Refused to remove participant {participant_id} from trip {trip_id}: "
                f"{len(orphans)} expense(s) reference them"
            )
            raise ParticipantRemovalRejected(participant_id, [e.id for e in orphans])

        for expense in orphans:
            trip.expenses.remove(expense)
        trip.participants.remove(participant)
        logger.info(
            f"Removed participant {participant_id} from trip {trip_id} "
            f"and {len(orphans)} dependent expense(s)"
        )
        return self._commit(trip_id)

    def add_expense(
        self,
        trip_id: str,
        description: str,
        amount,
        payer_id: str,
        consumer_ids: Optional[List[str]] = None
    ) -> TripSnapshot:
        """Record an expense; without consumers it is shared by everyone."""
        trip = self._load(trip_id)
        consumer_ids = validate_expense(
            trip.participants, description, amount, payer_id, consumer_ids
        )
        position = max((e.position for e in trip.expenses), default=-1) + 1
        expense = Expense(
            description=clean_name(description, "description"),
            amount=amount,
            payer_id=payer_id,
            position=position,
            consumers=[
                ExpenseConsumer(participant_id=cid, position=i)
                for i, cid in enumerate(consumer_ids)
            ]
        )
        trip.expenses.append(expense)
        self.db.flush()
        logger.info(f"Added expense {expense.id} ({amount}) to trip {trip_id}")
        return self._commit(trip_id)

    def delete_expense(self, trip_id: str, expense_id: str) -> TripSnapshot:
        """Delete one expense."""
        trip = self._load(trip_id)
        expense = next((e for e in trip.expenses if e.id == expense_id), None)
        if not expense:
            raise NotFoundError("Expense", expense_id)
        trip.expenses.remove(expense)
        logger.info(f"Deleted expense {expense_id} from trip {trip_id}")
        return self._commit(trip_id)

    @staticmethod
    def _get_participant(trip: Trip, participant_id: str) -> Participant:
        participant = next((p for p in trip.participants if p.id == participant_id), None)
        if not participant:
            raise NotFoundError("Participant", participant_id)
        return participant
