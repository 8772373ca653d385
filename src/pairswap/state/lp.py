"""
Pool-share balance tracking.

One ShareAccount per liquidity provider; accounts are created lazily on the
first mint and settle at zero rather than being destroyed.
"""

from __future__ import annotations

from typing import Dict

from .balances import Amount, PubKey


class ShareTable:
    """
    Share balance table mapping pubkey -> shares.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted to keep the table sparse; `get` returns 0 for
      both never-minted and fully-burned holders.
    """

    def __init__(self) -> None:
        self._balances: Dict[PubKey, Amount] = {}

    def get(self, pubkey: PubKey) -> Amount:
        """Get share balance for pubkey. Returns 0 if not found."""
        return self._balances.get(pubkey, 0)

    def set(self, pubkey: PubKey, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Share balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(pubkey, None)
        else:
            self._balances[pubkey] = amount

    def add(self, pubkey: PubKey, delta: int) -> None:
        """Add delta to a share balance (delta may be negative)."""
        current = self.get(pubkey)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient share balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(pubkey, new_balance)

    def subtract(self, pubkey: PubKey, delta: Amount) -> None:
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(pubkey, -delta)

    def copy(self) -> "ShareTable":
        out = ShareTable()
        out._balances = dict(self._balances)
        return out

    def get_all_balances(self) -> Dict[PubKey, Amount]:
        return dict(self._balances)

    def total(self) -> Amount:
        return sum(self._balances.values())

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} entries)"
