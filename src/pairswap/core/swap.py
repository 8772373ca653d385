"""
SwapEngine: the two swap directions.

The two directions snapshot reserves at different points and must stay that
way, since moving either snapshot changes the effective rate:

- base -> quote: base_in arrives with the call envelope, so the pre-trade
  base reserve is the current base reserve minus base_in.
- quote -> base: quote_in is pulled explicitly *first*; the quote reserve used
  for pricing already includes it.
"""

from __future__ import annotations

from typing import Tuple

from ..state.balances import Amount, PubKey, require_amount
from .cpmm import FEE_DENOMINATOR, FEE_NUMERATOR, get_input_price, validate_fee
from .errors import InsufficientBaseAmount, InsufficientQuoteAmount
from .ledger import ReserveLedger
from .transfer import AssetTransfer, pull_or_raise, push_or_raise
from .types import BaseToQuoteSwap, QuoteToBaseSwap


class SwapEngine:
    def __init__(
        self,
        ledger: ReserveLedger,
        base: AssetTransfer,
        quote: AssetTransfer,
        *,
        fee_numerator: int = FEE_NUMERATOR,
        fee_denominator: int = FEE_DENOMINATOR,
    ) -> None:
        validate_fee(fee_numerator, fee_denominator)
        self.ledger = ledger
        self.base = base
        self.quote = quote
        self.fee_numerator = fee_numerator
        self.fee_denominator = fee_denominator

    def _price(self, amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
        return get_input_price(
            amount_in, reserve_in, reserve_out, self.fee_numerator, self.fee_denominator
        )

    def preview_base_for_quote(self, base_in: Amount) -> Amount:
        require_amount("base_in", base_in)
        if base_in <= 0:
            raise InsufficientBaseAmount(f"base_in must be positive: {base_in}")
        return self._price(base_in, self.ledger.reserve_base, self.ledger.reserve_quote)

    def preview_quote_for_base(self, quote_in: Amount) -> Amount:
        require_amount("quote_in", quote_in)
        if quote_in <= 0:
            raise InsufficientQuoteAmount(f"quote_in must be positive: {quote_in}")
        # Mirrors the live path: the quote reserve already holds quote_in.
        return self._price(quote_in, self.ledger.reserve_quote + quote_in, self.ledger.reserve_base)

    def swap_base_for_quote(self, trader: PubKey, base_in: Amount) -> Tuple[Amount, BaseToQuoteSwap]:
        """
        Sell base_in (already attached) for quote.

            reserve_base = base reserve - base_in
            quote_out = floor(after_fee(base_in) * reserve_quote / (reserve_base + after_fee(base_in)))

        Raises:
            InsufficientBaseAmount: base_in <= 0
            InvalidOutputAmount: quote_out == 0 or quote_out >= reserve_quote
        """
        require_amount("base_in", base_in)
        if base_in <= 0:
            raise InsufficientBaseAmount(f"base_in must be positive: {base_in}")

        reserve_base = self.ledger.reserve_base - base_in
        reserve_quote = self.ledger.reserve_quote
        quote_out = self._price(base_in, reserve_base, reserve_quote)

        self.ledger.debit_quote(quote_out)
        push_or_raise(self.quote, trader, quote_out)

        return quote_out, BaseToQuoteSwap(trader=trader, base_in=base_in, quote_out=quote_out)

    def swap_quote_for_base(self, trader: PubKey, quote_in: Amount) -> Tuple[Amount, QuoteToBaseSwap]:
        """
        Sell quote_in for base; quote_in is pulled before reserves are read.

            reserve_quote = quote reserve (including quote_in)
            base_out = floor(after_fee(quote_in) * reserve_base / (reserve_quote + after_fee(quote_in)))

        Raises:
            InsufficientQuoteAmount: quote_in <= 0
            InvalidOutputAmount: base_out == 0 or base_out >= reserve_base
        """
        require_amount("quote_in", quote_in)
        if quote_in <= 0:
            raise InsufficientQuoteAmount(f"quote_in must be positive: {quote_in}")

        pull_or_raise(self.quote, trader, quote_in)
        self.ledger.credit_quote(quote_in)

        reserve_base = self.ledger.reserve_base
        reserve_quote = self.ledger.reserve_quote
        base_out = self._price(quote_in, reserve_quote, reserve_base)

        self.ledger.debit_base(base_out)
        push_or_raise(self.base, trader, base_out)

        return base_out, QuoteToBaseSwap(trader=trader, quote_in=quote_in, base_out=base_out)
