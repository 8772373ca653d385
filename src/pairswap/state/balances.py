"""
Per-identity custody balances for a single asset.

Implements BalanceTable[PubKey] -> Amount
"""

import re
from typing import Dict


# Type aliases
PubKey = str  # BLS12-381 public key as hex string
Amount = int  # Non-negative integer (arbitrary precision)

# Unsigned 256-bit domain for stored amounts
MAX_AMOUNT: Amount = 2**256 - 1

ZERO_PUBKEY: PubKey = "0x" + "00" * 48

_ZERO_HEX_RE = re.compile(r"^(0x)?0*$")


def is_zero_identity(pubkey: object) -> bool:
    """True for the empty identity or an all-zero hex identity."""
    if not isinstance(pubkey, str):
        return True
    return bool(_ZERO_HEX_RE.fullmatch(pubkey.strip()))


def require_amount(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


class BalanceTable:
    """
    Balance table mapping pubkey -> amount for one asset.

    Zero balances are omitted to keep the table sparse.
    """

    def __init__(self):
        self._balances: Dict[PubKey, Amount] = {}

    def get(self, pubkey: PubKey) -> Amount:
        """Get balance for pubkey. Returns 0 if not found."""
        return self._balances.get(pubkey, 0)

    def set(self, pubkey: PubKey, amount: Amount) -> None:
        """
        Set balance for pubkey.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(pubkey, None)
        else:
            self._balances[pubkey] = amount

    def add(self, pubkey: PubKey, delta: int) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(pubkey)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(pubkey, new_balance)

    def subtract(self, pubkey: PubKey, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(pubkey, -delta)

    def copy(self) -> "BalanceTable":
        out = BalanceTable()
        out._balances = dict(self._balances)
        return out

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
