"""
Asset-transfer collaborator contract as consumed by the engine.

Collaborators report failure by returning a falsy value; the engine turns
that into ``TransferFailed`` so the whole call aborts.
"""

from __future__ import annotations

from typing import Protocol

from ..state.balances import Amount, PubKey
from .errors import TransferFailed


class AssetTransfer(Protocol):
    def pull_from(self, identity: PubKey, amount: Amount) -> bool:
        """Move amount from identity's custody into pool custody."""
        ...

    def push_to(self, identity: PubKey, amount: Amount) -> bool:
        """Move amount from pool custody to identity."""
        ...

    def pool_custody_balance(self) -> Amount:
        ...

    def checkpoint(self) -> object:
        ...

    def rollback(self, token: object) -> None:
        ...


def pull_or_raise(asset: AssetTransfer, identity: PubKey, amount: Amount) -> None:
    if not asset.pull_from(identity, amount):
        raise TransferFailed(f"pull of {amount} from {identity} failed")


def push_or_raise(asset: AssetTransfer, identity: PubKey, amount: Amount) -> None:
    if not asset.push_to(identity, amount):
        raise TransferFailed(f"push of {amount} to {identity} failed")
