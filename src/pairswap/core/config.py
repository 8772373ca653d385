"""
Runtime configuration for the pool engine.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..state.balances import MAX_AMOUNT
from .cpmm import FEE_DENOMINATOR, FEE_NUMERATOR, validate_fee


@dataclass(frozen=True)
class PoolConfig:
    """Runtime config for a ``Pool``. Defaults are the production constants."""

    fee_numerator: int = FEE_NUMERATOR
    fee_denominator: int = FEE_DENOMINATOR
    max_amount: int = MAX_AMOUNT
    # Binds signed admin commands to one deployment.
    chain_id: str = "pairswap-local"

    def __post_init__(self) -> None:
        validate_fee(self.fee_numerator, self.fee_denominator)
        if not isinstance(self.max_amount, int) or isinstance(self.max_amount, bool):
            raise TypeError("max_amount must be an int")
        if self.max_amount <= 0:
            raise ValueError(f"max_amount must be positive: {self.max_amount}")
        if not isinstance(self.chain_id, str) or not self.chain_id.strip():
            raise ValueError("chain_id must be a non-empty string")
