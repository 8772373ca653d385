"""
ReserveLedger: the only writer of reserves and share balances.

Every mutation is range-checked against the unsigned 256-bit domain and
raises instead of wrapping. The ledger never moves assets itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..state.balances import Amount, MAX_AMOUNT, PubKey, require_amount
from ..state.lp import ShareTable
from ..state.pools import PoolState
from .errors import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    InsufficientReserve,
    InsufficientShares,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    pool: PoolState
    shares: ShareTable


class ReserveLedger:
    def __init__(self, *, max_amount: Amount = MAX_AMOUNT) -> None:
        if max_amount <= 0:
            raise ValueError(f"max_amount must be positive: {max_amount}")
        self.max_amount = max_amount
        self._pool = PoolState()
        self._shares = ShareTable()

    # -- reads -------------------------------------------------------------

    @property
    def reserve_base(self) -> Amount:
        return self._pool.reserve_base

    @property
    def reserve_quote(self) -> Amount:
        return self._pool.reserve_quote

    @property
    def total_shares(self) -> Amount:
        return self._pool.total_shares

    def shares_of(self, pubkey: PubKey) -> Amount:
        return self._shares.get(pubkey)

    def share_accounts(self) -> dict[PubKey, Amount]:
        return self._shares.get_all_balances()

    def share_sum(self) -> Amount:
        """Sum over every share account; equals total_shares between calls."""
        return self._shares.total()

    def is_empty(self) -> bool:
        return self._pool.is_empty()

    # -- checked helpers ---------------------------------------------------

    def _checked_add(self, name: str, current: Amount, amount: Amount) -> Amount:
        require_amount(name, amount)
        if amount < 0:
            raise ValueError(f"{name}: amount must be non-negative: {amount}")
        result = current + amount
        if result > self.max_amount:
            raise ArithmeticOverflow(f"{name}: {current} + {amount} exceeds {self.max_amount}")
        return result

    def _checked_sub(self, name: str, current: Amount, amount: Amount, exc: type) -> Amount:
        require_amount(name, amount)
        if amount < 0:
            raise ValueError(f"{name}: amount must be non-negative: {amount}")
        if amount > current:
            raise exc(f"{name}: {amount} exceeds {current}")
        return current - amount

    # -- mutations ---------------------------------------------------------

    def credit_base(self, amount: Amount) -> None:
        self._pool.reserve_base = self._checked_add("reserve_base", self._pool.reserve_base, amount)

    def credit_quote(self, amount: Amount) -> None:
        self._pool.reserve_quote = self._checked_add("reserve_quote", self._pool.reserve_quote, amount)

    def debit_base(self, amount: Amount) -> None:
        self._pool.reserve_base = self._checked_sub(
            "reserve_base", self._pool.reserve_base, amount, InsufficientReserve
        )

    def debit_quote(self, amount: Amount) -> None:
        self._pool.reserve_quote = self._checked_sub(
            "reserve_quote", self._pool.reserve_quote, amount, InsufficientReserve
        )

    def mint_shares(self, pubkey: PubKey, amount: Amount) -> None:
        # Both sums are checked before either is written.
        new_total = self._checked_add("total_shares", self._pool.total_shares, amount)
        self._checked_add("shares", self._shares.get(pubkey), amount)
        self._pool.total_shares = new_total
        self._shares.add(pubkey, amount)
        logger.debug("minted %d shares to %s (total %d)", amount, pubkey, new_total)

    def burn_shares(self, pubkey: PubKey, amount: Amount) -> None:
        self._checked_sub("shares", self._shares.get(pubkey), amount, InsufficientShares)
        new_total = self._checked_sub(
            "total_shares", self._pool.total_shares, amount, ArithmeticUnderflow
        )
        self._shares.subtract(pubkey, amount)
        self._pool.total_shares = new_total
        logger.debug("burned %d shares from %s (total %d)", amount, pubkey, new_total)

    # -- call-frame support ------------------------------------------------

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(pool=self._pool.copy(), shares=self._shares.copy())

    def restore(self, snap: LedgerSnapshot) -> None:
        self._pool = snap.pool.copy()
        self._shares = snap.shares.copy()

    def __repr__(self) -> str:
        return f"ReserveLedger({self._pool!r}, {self._shares!r})"
