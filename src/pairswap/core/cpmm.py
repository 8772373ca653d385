"""
Constant-product pricing and share arithmetic.

Pure integer functions with floor rounding throughout; nothing here touches
pool state. The engine modules decide which reserve snapshot to feed in.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per call
- Invariant: After each swap, x' * y' >= x * y (the fee stays in the pool)
"""

from __future__ import annotations

from typing import Tuple

from ..state.balances import Amount, require_amount
from .errors import InvalidOutputAmount

FEE_NUMERATOR = 100
FEE_DENOMINATOR = 10_000


def validate_fee(fee_numerator: int, fee_denominator: int) -> None:
    require_amount("fee_numerator", fee_numerator)
    require_amount("fee_denominator", fee_denominator)
    if fee_denominator <= 0:
        raise ValueError(f"fee_denominator must be positive: {fee_denominator}")
    if not (0 <= fee_numerator < fee_denominator):
        raise ValueError(
            f"fee_numerator must be in [0, {fee_denominator}): {fee_numerator}"
        )


def amount_after_fee(
    amount_in: Amount,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> Amount:
    """
    amount_in * (fee_denominator - fee_numerator) // fee_denominator
    """
    return amount_in * (fee_denominator - fee_numerator) // fee_denominator


def get_input_price(
    amount_in: Amount,
    reserve_in: Amount,
    reserve_out: Amount,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> Amount:
    """
    Output amount for an exact input against pre-trade reserves.

        in_after_fee = floor(amount_in * (den - num) / den)
        amount_out   = floor(in_after_fee * reserve_out / (reserve_in + in_after_fee))

    Args:
        amount_in: Gross input amount (fee included)
        reserve_in: Reserve of the input asset, *excluding* amount_in
        reserve_out: Reserve of the output asset

    Raises:
        InvalidOutputAmount: If amount_out is zero or would drain reserve_out
    """
    if reserve_in < 0 or reserve_out < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve_in}, {reserve_out})")
    in_after_fee = amount_after_fee(amount_in, fee_numerator, fee_denominator)
    denominator = reserve_in + in_after_fee
    if denominator == 0:
        raise InvalidOutputAmount(f"no output for input {amount_in} against empty reserves")
    amount_out = in_after_fee * reserve_out // denominator
    if amount_out == 0 or amount_out >= reserve_out:
        raise InvalidOutputAmount(
            f"amount_out ({amount_out}) must be in (0, {reserve_out})"
        )
    return amount_out


def quote_required(base_in: Amount, reserve_base: Amount, reserve_quote: Amount) -> Amount:
    """
    Quote asset a proportional deposit must supply:

        floor(base_in * reserve_quote / reserve_base)
    """
    if reserve_base <= 0:
        raise ValueError("cannot price a deposit against an empty base reserve")
    return base_in * reserve_quote // reserve_base


def shares_for_deposit(base_in: Amount, reserve_base: Amount, total_shares: Amount) -> Amount:
    """
    Shares minted for a proportional deposit into a non-empty pool:

        floor(total_shares * base_in / reserve_base)
    """
    if reserve_base <= 0:
        raise ValueError("cannot price a deposit against an empty base reserve")
    return total_shares * base_in // reserve_base


def withdrawal_amounts(
    shares_in: Amount,
    reserve_base: Amount,
    reserve_quote: Amount,
    total_shares: Amount,
) -> Tuple[Amount, Amount]:
    """
    Assets returned for burning shares_in:

        base_out  = floor(reserve_base * shares_in / total_shares)
        quote_out = floor(reserve_quote * shares_in / total_shares)
    """
    if total_shares <= 0:
        raise ValueError(f"total_shares must be positive: {total_shares}")
    if shares_in > total_shares:
        raise ValueError(f"Cannot burn more than supply: {shares_in} > {total_shares}")
    base_out = reserve_base * shares_in // total_shares
    quote_out = reserve_quote * shares_in // total_shares
    return base_out, quote_out
