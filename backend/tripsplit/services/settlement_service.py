"""
Settlement service: turn net balances into a short list of transfers.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List
from decimal import Decimal, ROUND_HALF_UP
from tripsplit.schemas.ledger import TripSnapshot
from tripsplit.schemas.settlement import SettlementSummary, ParticipantBalance, Transfer as TransferSchema
from tripsplit.services.balance_service import compute_balances, to_decimal

logger = logging.getLogger(__name__)

# Balances at or below half a minor unit count as settled
SETTLEMENT_EPSILON = Decimal("0.005")
MINOR_UNIT = Decimal("0.01")


@dataclass(frozen=True)
class Transfer:
    """Represents a single transfer between participants."""
    from_id: str
    to_id: str
    amount: Decimal


def quantize_amount(amount: Decimal) -> Decimal:
    """Round a money amount to the minor unit."""
    return to_decimal(amount).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def is_settled(balance: Decimal) -> bool:
    return abs(balance) <= SETTLEMENT_EPSILON


def _pick_largest(candidates: List[list]) -> list:
    # First entry wins ties, so the order of the balances mapping decides
    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate[1] > best[1]:
            best = candidate
    return best


def minimize_transfers(balances: Dict[str, Decimal]) -> List[Transfer]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy matching: the largest remaining debtor pays the largest remaining
    creditor as much as both can absorb, until one side runs out. Each step
    clears at least one participant, so at most ``len(balances) - 1``
    transfers are produced. Amounts are left unrounded so that applying them
    settles every balance exactly; rounding to the minor unit is a display
    concern (see build_settlement_summary).
    """
    # [participant_id, outstanding magnitude]
    creditors = [[pid, bal] for pid, bal in balances.items() if bal > SETTLEMENT_EPSILON]
    debtors = [[pid, -bal] for pid, bal in balances.items() if bal < -SETTLEMENT_EPSILON]

    transfers = []
    while creditors and debtors:
        debtor = _pick_largest(debtors)
        creditor = _pick_largest(creditors)

        # Transfer the minimum of what's owed and what's needed
        transfer_amount = min(debtor[1], creditor[1])
        transfers.append(Transfer(debtor[0], creditor[0], transfer_amount))

        debtor[1] -= transfer_amount
        creditor[1] -= transfer_amount

        if debtor[1] <= SETTLEMENT_EPSILON:
            debtors.remove(debtor)
        if creditor[1] <= SETTLEMENT_EPSILON:
            creditors.remove(creditor)

    if debtors or creditors:
        # Only reachable when the ledger is not zero-sum (dangling references)
        logger.warning(
            f"Settlement left {len(debtors)} debtor(s) and {len(creditors)} creditor(s) unmatched"
        )

    return transfers


def compute_settlements(participants: Iterable, expenses: Iterable) -> List[Transfer]:
    """Compute the transfers that settle every participant's balance."""
    return minimize_transfers(compute_balances(participants, expenses))


def build_balance_items(trip: TripSnapshot, net_balances: Dict[str, Decimal]) -> List[ParticipantBalance]:
    """Round balances for display and attach participant names."""
    names = trip.participant_names()
    return [
        ParticipantBalance(
            participant_id=pid,
            name=names.get(pid, ""),
            net=Decimal(0) if is_settled(bal) else quantize_amount(bal)
        )
        for pid, bal in net_balances.items()
    ]


def build_settlement_summary(trip: TripSnapshot) -> SettlementSummary:
    """
    Compute balances and transfers for a trip and resolve ids to names.
    Returns SettlementSummary ready for display, amounts rounded to the
    minor unit.
    """
    net_balances = compute_balances(trip.participants, trip.expenses)
    transfers = minimize_transfers(net_balances)
    names = trip.participant_names()

    balance_items = build_balance_items(trip, net_balances)
    transfer_items = [
        TransferSchema(
            from_participant_id=t.from_id,
            from_name=names.get(t.from_id, ""),
            to_participant_id=t.to_id,
            to_name=names.get(t.to_id, ""),
            amount=quantize_amount(t.amount)
        )
        for t in transfers
    ]
    total_expenses = sum((to_decimal(e.amount) for e in trip.expenses), Decimal(0))

    # Create summary text
    summary_lines = []
    summary_lines.append(f"Total expenses: {total_expenses:.2f} {trip.currency}")
    summary_lines.append(f"Participants: {len(trip.participants)}")
    summary_lines.append("\nNet balances:")
    for item in balance_items:
        summary_lines.append(f"  {item.name}: {item.net:+.2f} {trip.currency}")
    summary_lines.append("\nTransfers:")
    if not transfer_items:
        summary_lines.append("  Everyone is settled up.")
    for transfer in transfer_items:
        summary_lines.append(
            f"  {transfer.from_name} -> {transfer.to_name}: "
            f"{transfer.amount:.2f} {trip.currency}"
        )

    return SettlementSummary(
        trip_id=trip.id,
        currency=trip.currency,
        net_balances=balance_items,
        transfers=transfer_items,
        total_expenses=quantize_amount(total_expenses),
        participant_count=len(trip.participants),
        summary="\n".join(summary_lines)
    )
