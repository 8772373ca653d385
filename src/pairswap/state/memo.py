"""
Per-identity memo of the most recent liquidity call.

A single overwritten slot per identity, not a history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .balances import Amount, PubKey


@dataclass(frozen=True)
class LastOperationMemo:
    last_shares_minted: Amount = 0
    last_base_returned: Amount = 0
    last_quote_returned: Amount = 0

    def as_tuple(self) -> tuple[Amount, Amount, Amount]:
        return (self.last_shares_minted, self.last_base_returned, self.last_quote_returned)


EMPTY_MEMO = LastOperationMemo()


class MemoTable:
    """QueryCache: pubkey -> LastOperationMemo."""

    def __init__(self) -> None:
        self._memos: Dict[PubKey, LastOperationMemo] = {}

    def get(self, pubkey: PubKey) -> LastOperationMemo:
        return self._memos.get(pubkey, EMPTY_MEMO)

    def record_mint(self, pubkey: PubKey, shares_minted: Amount) -> None:
        self._memos[pubkey] = LastOperationMemo(last_shares_minted=shares_minted)

    def record_burn(self, pubkey: PubKey, base_returned: Amount, quote_returned: Amount) -> None:
        self._memos[pubkey] = LastOperationMemo(
            last_base_returned=base_returned,
            last_quote_returned=quote_returned,
        )

    def restore(self, snap: "MemoTable") -> None:
        self._memos = dict(snap._memos)

    def copy(self) -> "MemoTable":
        out = MemoTable()
        out._memos = dict(self._memos)
        return out

    def __repr__(self) -> str:
        return f"MemoTable({len(self._memos)} entries)"
