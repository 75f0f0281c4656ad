"""
Balance calculation: reduce a ledger to one net balance per participant.
"""
import logging
from typing import Dict, Iterable
from decimal import Decimal

logger = logging.getLogger(__name__)


def to_decimal(value) -> Decimal:
    """Coerce an amount to Decimal without picking up float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def compute_balances(participants: Iterable, expenses: Iterable) -> Dict[str, Decimal]:
    """
    Compute the net balance of every participant.

    Positive means the participant is owed money, negative means they owe.
    The payer is credited the full amount and every consumer is debited an
    equal share. References to ids that are not in ``participants`` are
    ignored rather than raised on; callers validate the ledger upstream.
    """
    net_balances: Dict[str, Decimal] = {p.id: Decimal(0) for p in participants}

    for expense in expenses:
        amount = to_decimal(expense.amount)
        consumer_ids = list(expense.consumer_ids)

        if expense.payer_id in net_balances:
            net_balances[expense.payer_id] += amount
        else:
            logger.debug(f"Expense {expense.id} has unknown payer {expense.payer_id}; ignoring credit")

        if not consumer_ids:
            continue

        share = amount / len(consumer_ids)
        for consumer_id in consumer_ids:
            if consumer_id in net_balances:
                net_balances[consumer_id] -= share

    return net_balances
