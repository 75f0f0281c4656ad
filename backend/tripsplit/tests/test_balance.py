"""
Tests for net balance calculation.
"""
from datetime import datetime
from decimal import Decimal
from tripsplit.schemas.ledger import ParticipantSnapshot, ExpenseSnapshot
from tripsplit.services.balance_service import compute_balances
from tripsplit.services.settlement_service import SETTLEMENT_EPSILON


def people(*names):
    return [ParticipantSnapshot(id=n, name=n) for n in names]


def expense(payer, amount, consumers, expense_id="e"):
    return ExpenseSnapshot(
        id=expense_id,
        description="Dinner",
        amount=Decimal(amount),
        payer_id=payer,
        consumer_ids=tuple(consumers),
        created_at=datetime(2025, 6, 1)
    )


def test_empty_ledger():
    """No participants means no balances."""
    assert compute_balances([], []) == {}


def test_participants_without_expenses_are_zero():
    assert compute_balances(people("A", "B"), []) == {"A": 0, "B": 0}


def test_single_expense_split_three_ways():
    """A pays 90 for A, B and C."""
    balances = compute_balances(people("A", "B", "C"), [expense("A", "90", "ABC")])
    assert balances == {"A": Decimal(60), "B": Decimal(-30), "C": Decimal(-30)}


def test_mutual_expenses_cancel_out():
    balances = compute_balances(
        people("A", "B"),
        [expense("A", "100", "AB", "e1"), expense("B", "100", "AB", "e2")]
    )
    assert balances == {"A": 0, "B": 0}


def test_payer_not_among_consumers():
    balances = compute_balances(people("A", "B", "C"), [expense("A", "40", "BC")])
    assert balances == {"A": Decimal(40), "B": Decimal(-20), "C": Decimal(-20)}


def test_uneven_division_stays_zero_sum():
    """100 split three ways leaves only negligible drift."""
    balances = compute_balances(
        people("A", "B", "C"),
        [expense("A", "100", "ABC", "e1"), expense("B", "10", "BC", "e2")]
    )
    assert abs(sum(balances.values())) <= SETTLEMENT_EPSILON
    assert abs(balances["A"] - Decimal("66.67")) < Decimal("0.01")


def test_unknown_ids_are_ignored():
    """Dangling payer and consumer references contribute nothing."""
    balances = compute_balances(
        people("A", "B"),
        [expense("ghost", "30", "AB", "e1"), expense("A", "30", ["A", "ghost", "B"], "e2")]
    )
    assert set(balances) == {"A", "B"}
    assert balances["A"] == Decimal(-15) + Decimal(30) - Decimal(10)
    assert balances["B"] == Decimal(-15) - Decimal(10)


def test_expense_without_consumers_only_credits_payer():
    balances = compute_balances(people("A"), [expense("A", "12", [])])
    assert balances == {"A": Decimal(12)}


def test_balances_follow_participant_order():
    balances = compute_balances(people("C", "A", "B"), [expense("A", "9", "ABC")])
    assert list(balances) == ["C", "A", "B"]


def test_works_with_plain_objects():
    """Any object exposing the ledger attributes is accepted."""
    class Row:
        def __init__(self, **kwargs):
            self.__dict__.update(kwargs)

    participants = [Row(id="A"), Row(id="B")]
    expenses = [Row(id="e", amount=10.1, payer_id="B", consumer_ids=["A", "B"])]
    balances = compute_balances(participants, expenses)
    assert balances == {"A": Decimal("-5.05"), "B": Decimal("5.05")}
