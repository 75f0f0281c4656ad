"""
Expense model for tracking shared spending.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel


class Expense(BaseModel):
    """Expense paid by one participant and split equally among its consumers."""
    __tablename__ = "expenses"

    trip_id = Column(String(32), ForeignKey("trips.id"), nullable=False, index=True)
    payer_id = Column(String(32), ForeignKey("participants.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # Creation order within the trip

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    consumers = relationship(
        "ExpenseConsumer",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpenseConsumer.position"
    )

    @property
    def consumer_ids(self):
        return [c.participant_id for c in self.consumers]


class ExpenseConsumer(BaseModel):
    """Junction table for Expense and Participant many-to-many relationship."""
    __tablename__ = "expense_consumers"

    expense_id = Column(String(32), ForeignKey("expenses.id"), nullable=False, index=True)
    participant_id = Column(String(32), ForeignKey("participants.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    expense = relationship("Expense", back_populates="consumers")

    __table_args__ = (
        UniqueConstraint('expense_id', 'participant_id', name='uq_expense_participant'),
    )
