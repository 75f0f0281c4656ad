"""Models package - Import all models for SQLAlchemy registration."""
from tripsplit.models.trip import Trip, Participant
from tripsplit.models.expense import Expense, ExpenseConsumer

__all__ = [
    "Trip",
    "Participant",
    "Expense",
    "ExpenseConsumer",
]
