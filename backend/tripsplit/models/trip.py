"""
Trip and participant models.
"""
from sqlalchemy import Column, String, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel


class Trip(BaseModel):
    """Trip model owning one ledger of participants and expenses."""
    __tablename__ = "trips"

    name = Column(String(200), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")  # Display only

    # Relationships
    participants = relationship(
        "Participant",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="Participant.position"
    )
    expenses = relationship(
        "Expense",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="Expense.position"
    )


class Participant(BaseModel):
    """A named person sharing the trip's costs."""
    __tablename__ = "participants"

    trip_id = Column(String(32), ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # Insertion order, drives settlement tie-breaks

    # Relationships
    trip = relationship("Trip", back_populates="participants")
