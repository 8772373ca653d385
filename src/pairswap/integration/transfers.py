"""
In-memory asset-transfer collaborator.

One ``InMemoryAsset`` per asset acts as the ledger of record for holder and
pool custody balances in tests and local runs. It satisfies
``pairswap.core.transfer.AssetTransfer``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..state.balances import Amount, BalanceTable, PubKey, require_amount

logger = logging.getLogger(__name__)

PULL = "pull"
PUSH = "push"

TransferHook = Callable[[str, PubKey, Amount], None]


class InMemoryAsset:
    """
    Single-asset custody ledger.

    ``hook(direction, identity, amount)`` is called after every successful
    movement, which lets callers simulate token callbacks (and reentrancy).
    """

    def __init__(self, symbol: str, *, hook: Optional[TransferHook] = None) -> None:
        if not isinstance(symbol, str) or not symbol:
            raise ValueError("symbol must be a non-empty string")
        self.symbol = symbol
        self.hook = hook
        self._holders = BalanceTable()
        self._custody: Amount = 0

    def mint(self, identity: PubKey, amount: Amount) -> None:
        """Fund a holder out of thin air (test/bootstrap helper)."""
        require_amount("amount", amount)
        self._holders.add(identity, amount)

    def balance_of(self, identity: PubKey) -> Amount:
        return self._holders.get(identity)

    def pool_custody_balance(self) -> Amount:
        return self._custody

    def pull_from(self, identity: PubKey, amount: Amount) -> bool:
        require_amount("amount", amount)
        if amount < 0 or self._holders.get(identity) < amount:
            logger.debug("%s pull of %d from %s refused", self.symbol, amount, identity)
            return False
        self._holders.subtract(identity, amount)
        self._custody += amount
        self._notify(PULL, identity, amount)
        return True

    def push_to(self, identity: PubKey, amount: Amount) -> bool:
        require_amount("amount", amount)
        if amount < 0 or self._custody < amount:
            logger.debug("%s push of %d to %s refused", self.symbol, amount, identity)
            return False
        self._custody -= amount
        self._holders.add(identity, amount)
        self._notify(PUSH, identity, amount)
        return True

    def _notify(self, direction: str, identity: PubKey, amount: Amount) -> None:
        if self.hook is not None:
            self.hook(direction, identity, amount)

    def checkpoint(self) -> object:
        return (self._holders.copy(), self._custody)

    def rollback(self, token: object) -> None:
        holders, custody = token  # type: ignore[misc]
        self._holders = holders.copy()
        self._custody = custody

    def __repr__(self) -> str:
        return f"InMemoryAsset({self.symbol!r}, custody={self._custody}, {self._holders!r})"
