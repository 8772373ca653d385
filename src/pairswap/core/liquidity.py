"""
Liquidity management: add and remove liquidity.

Both operations run inside a ``Pool`` call frame, so a raise anywhere below
leaves no trace. The ordering of transfers relative to ledger writes is fixed:

add_liquidity:    validate -> pull quote -> mint shares -> memo
remove_liquidity: validate -> burn shares -> push base -> push quote -> memo

Burning before either push means a callback during a push already observes
the reduced share balance.
"""

from __future__ import annotations

from typing import Tuple

from ..state.balances import Amount, PubKey, require_amount
from ..state.memo import MemoTable
from .cpmm import quote_required, shares_for_deposit, withdrawal_amounts
from .errors import (
    InsufficientBaseAmount,
    InsufficientQuoteAmount,
    InsufficientShares,
    InsufficientSharesAmount,
    InsufficientSharesMinted,
)
from .ledger import ReserveLedger
from .transfer import AssetTransfer, pull_or_raise, push_or_raise
from .types import (
    AddLiquidityResult,
    LiquidityAdded,
    LiquidityQuote,
    LiquidityRemoved,
    RemoveLiquidityResult,
)


class LiquidityManager:
    def __init__(
        self,
        ledger: ReserveLedger,
        base: AssetTransfer,
        quote: AssetTransfer,
        memos: MemoTable,
    ) -> None:
        self.ledger = ledger
        self.base = base
        self.quote = quote
        self.memos = memos

    def _pre_deposit_reserves(self, base_in: Amount) -> Tuple[Amount, Amount]:
        # base_in has been received and credited by the call envelope.
        return self.ledger.reserve_base - base_in, self.ledger.reserve_quote

    def preview_add(self, base_in: Amount) -> LiquidityQuote:
        """
        Deposit terms against the current reserves, without attaching base_in.

        Returns quote_required=None for an empty pool (any positive quote is accepted).
        """
        require_amount("base_in", base_in)
        if base_in <= 0:
            raise InsufficientBaseAmount(f"base_in must be positive: {base_in}")
        if self.ledger.is_empty():
            return LiquidityQuote(quote_required=None, shares_minted=base_in)
        reserve_base = self.ledger.reserve_base
        reserve_quote = self.ledger.reserve_quote
        shares = shares_for_deposit(base_in, reserve_base, self.ledger.total_shares)
        if shares == 0:
            raise InsufficientSharesMinted(f"deposit of {base_in} mints no shares")
        return LiquidityQuote(
            quote_required=quote_required(base_in, reserve_base, reserve_quote),
            shares_minted=shares,
        )

    def add_liquidity(
        self, provider: PubKey, base_in: Amount, quote_max: Amount
    ) -> Tuple[AddLiquidityResult, LiquidityAdded]:
        """
        Deposit base_in base (already attached) plus the matching quote.

        Empty pool: the whole quote_max is pulled and base_in shares are minted.
        Otherwise quote_required = floor(base_in * reserve_quote / reserve_base)
        is pulled and floor(total_shares * base_in / reserve_base) shares minted.

        Raises:
            InsufficientBaseAmount: base_in <= 0
            InsufficientQuoteAmount: quote_max <= 0 or quote_max < quote_required
            InsufficientSharesMinted: the deposit rounds to zero shares
        """
        require_amount("base_in", base_in)
        require_amount("quote_max", quote_max)
        if base_in <= 0:
            raise InsufficientBaseAmount(f"base_in must be positive: {base_in}")
        if quote_max <= 0:
            raise InsufficientQuoteAmount(f"quote_max must be positive: {quote_max}")

        reserve_base, reserve_quote = self._pre_deposit_reserves(base_in)

        if reserve_base == 0 and reserve_quote == 0:
            quote_amount = quote_max
            shares_minted = base_in
        else:
            quote_amount = quote_required(base_in, reserve_base, reserve_quote)
            if quote_max < quote_amount:
                raise InsufficientQuoteAmount(
                    f"quote_max ({quote_max}) < quote_required ({quote_amount})"
                )
            shares_minted = shares_for_deposit(base_in, reserve_base, self.ledger.total_shares)
            if shares_minted == 0:
                raise InsufficientSharesMinted(f"deposit of {base_in} mints no shares")

        pull_or_raise(self.quote, provider, quote_amount)
        self.ledger.credit_quote(quote_amount)

        self.ledger.mint_shares(provider, shares_minted)

        self.memos.record_mint(provider, shares_minted)

        result = AddLiquidityResult(quote_transferred=quote_amount, shares_minted=shares_minted)
        event = LiquidityAdded(
            provider=provider,
            base_in=base_in,
            quote_transferred=quote_amount,
            shares_minted=shares_minted,
        )
        return result, event

    def preview_remove(self, shares_in: Amount) -> RemoveLiquidityResult:
        require_amount("shares_in", shares_in)
        if shares_in <= 0:
            raise InsufficientSharesAmount(f"shares_in must be positive: {shares_in}")
        if shares_in > self.ledger.total_shares:
            raise InsufficientShares(f"shares_in ({shares_in}) > total_shares ({self.ledger.total_shares})")
        base_out, quote_out = withdrawal_amounts(
            shares_in,
            self.ledger.reserve_base,
            self.ledger.reserve_quote,
            self.ledger.total_shares,
        )
        return RemoveLiquidityResult(base_out=base_out, quote_out=quote_out)

    def remove_liquidity(
        self, provider: PubKey, shares_in: Amount
    ) -> Tuple[RemoveLiquidityResult, LiquidityRemoved]:
        """
        Burn shares_in of provider's shares for a pro-rata slice of both reserves.

            base_out  = floor(reserve_base * shares_in / total_shares)
            quote_out = floor(reserve_quote * shares_in / total_shares)

        Raises:
            InsufficientSharesAmount: shares_in <= 0
            InsufficientShares: provider holds fewer than shares_in
        """
        require_amount("shares_in", shares_in)
        if shares_in <= 0:
            raise InsufficientSharesAmount(f"shares_in must be positive: {shares_in}")
        held = self.ledger.shares_of(provider)
        if held < shares_in:
            raise InsufficientShares(f"{provider} holds {held} < {shares_in}")

        base_out, quote_out = withdrawal_amounts(
            shares_in,
            self.ledger.reserve_base,
            self.ledger.reserve_quote,
            self.ledger.total_shares,
        )

        self.ledger.burn_shares(provider, shares_in)

        self.ledger.debit_base(base_out)
        push_or_raise(self.base, provider, base_out)

        self.ledger.debit_quote(quote_out)
        push_or_raise(self.quote, provider, quote_out)

        self.memos.record_burn(provider, base_out, quote_out)

        result = RemoveLiquidityResult(base_out=base_out, quote_out=quote_out)
        event = LiquidityRemoved(
            provider=provider,
            base_out=base_out,
            quote_out=quote_out,
            shares_burned=shares_in,
        )
        return result, event
