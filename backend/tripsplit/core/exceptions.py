"""
Domain exceptions raised by the ledger helpers and the trip store.
"""
from typing import List


class TripsplitError(Exception):
    """Base class for all application errors."""


class NotFoundError(TripsplitError, LookupError):
    """A trip, participant or expense does not exist."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found")


class LedgerValidationError(TripsplitError, ValueError):
    """Input would break a ledger invariant."""


class ParticipantRemovalRejected(TripsplitError):
    """Removing the participant would orphan expenses under the reject policy."""

    def __init__(self, participant_id: str, expense_ids: List[str]):
        self.participant_id = participant_id
        self.expense_ids = expense_ids
        super().__init__(
            f"Participant is referenced by {len(expense_ids)} expense(s); "
            "delete those expenses first"
        )
