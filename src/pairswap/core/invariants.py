"""Invariant checkers for the pool aggregate.

Each function returns True when the invariant holds, and `check_all()` returns
the list of violated invariant IDs (empty = all pass). The ``Pool`` facade
runs `check_all()` at the end of every mutating call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..state.balances import MAX_AMOUNT
from .ledger import ReserveLedger
from .transfer import AssetTransfer


@dataclass(frozen=True)
class PoolObservation:
    """Everything the invariants look at, captured at one point in time."""

    reserve_base: int
    reserve_quote: int
    total_shares: int
    share_sum: int
    base_custody: int
    quote_custody: int
    max_amount: int = MAX_AMOUNT


def observe(ledger: ReserveLedger, base: AssetTransfer, quote: AssetTransfer) -> PoolObservation:
    return PoolObservation(
        reserve_base=ledger.reserve_base,
        reserve_quote=ledger.reserve_quote,
        total_shares=ledger.total_shares,
        share_sum=ledger.share_sum(),
        base_custody=base.pool_custody_balance(),
        quote_custody=quote.pool_custody_balance(),
        max_amount=ledger.max_amount,
    )


def inv_reserves_nonneg(o: PoolObservation) -> bool:
    return o.reserve_base >= 0 and o.reserve_quote >= 0


def inv_reserves_in_domain(o: PoolObservation) -> bool:
    return o.reserve_base <= o.max_amount and o.reserve_quote <= o.max_amount


def inv_share_conservation(o: PoolObservation) -> bool:
    return o.share_sum == o.total_shares


def inv_empty_iff_no_shares(o: PoolObservation) -> bool:
    empty = o.reserve_base == 0 and o.reserve_quote == 0
    return (o.total_shares == 0) == empty


def inv_base_custody_matches(o: PoolObservation) -> bool:
    return o.reserve_base == o.base_custody


def inv_quote_custody_matches(o: PoolObservation) -> bool:
    return o.reserve_quote == o.quote_custody


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[PoolObservation], bool]] = {
    "inv_reserves_nonneg": inv_reserves_nonneg,
    "inv_reserves_in_domain": inv_reserves_in_domain,
    "inv_share_conservation": inv_share_conservation,
    "inv_empty_iff_no_shares": inv_empty_iff_no_shares,
    "inv_base_custody_matches": inv_base_custody_matches,
    "inv_quote_custody_matches": inv_quote_custody_matches,
}


def check_all(obs: PoolObservation) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(obs)
    ]
