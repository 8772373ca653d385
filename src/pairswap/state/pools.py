"""
Pool aggregate state.
"""

from __future__ import annotations

from dataclasses import dataclass

from .balances import Amount, MAX_AMOUNT


@dataclass
class PoolState:
    """
    Reserve/share aggregate of the single two-asset pool.

    Attributes:
        reserve_base: Accounted reserve of the base asset
        reserve_quote: Accounted reserve of the quote asset
        total_shares: Total pool-share supply
    """
    reserve_base: Amount = 0
    reserve_quote: Amount = 0
    total_shares: Amount = 0

    def __post_init__(self):
        for name in ("reserve_base", "reserve_quote", "total_shares"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if not (0 <= v <= MAX_AMOUNT):
                raise ValueError(f"{name} out of range: {v}")

    def is_empty(self) -> bool:
        return self.reserve_base == 0 and self.reserve_quote == 0

    def copy(self) -> "PoolState":
        return PoolState(
            reserve_base=self.reserve_base,
            reserve_quote=self.reserve_quote,
            total_shares=self.total_shares,
        )

    def __repr__(self) -> str:
        return (
            f"PoolState(reserves=({self.reserve_base}, {self.reserve_quote}), "
            f"total_shares={self.total_shares})"
        )
