from __future__ import annotations

import pytest

from pairswap.integration.transfers import PULL, PUSH, InMemoryAsset

ALICE = "0x" + "aa" * 48


def test_pull_and_push_move_custody() -> None:
    asset = InMemoryAsset("BASE")
    asset.mint(ALICE, 100)
    assert asset.pull_from(ALICE, 40)
    assert asset.balance_of(ALICE) == 60
    assert asset.pool_custody_balance() == 40
    assert asset.push_to(ALICE, 15)
    assert asset.balance_of(ALICE) == 75
    assert asset.pool_custody_balance() == 25


def test_refusals_leave_balances() -> None:
    asset = InMemoryAsset("BASE")
    asset.mint(ALICE, 10)
    assert not asset.pull_from(ALICE, 11)
    assert not asset.push_to(ALICE, 1)
    assert not asset.pull_from(ALICE, -1)
    assert asset.balance_of(ALICE) == 10
    assert asset.pool_custody_balance() == 0


def test_hook_sees_completed_movements() -> None:
    calls = []
    asset = InMemoryAsset("QUOTE", hook=lambda *args: calls.append(args))
    asset.mint(ALICE, 10)
    asset.pull_from(ALICE, 4)
    asset.push_to(ALICE, 1)
    asset.pull_from(ALICE, 100)
    assert calls == [(PULL, ALICE, 4), (PUSH, ALICE, 1)]


def test_checkpoint_rollback() -> None:
    asset = InMemoryAsset("BASE")
    asset.mint(ALICE, 10)
    token = asset.checkpoint()
    asset.pull_from(ALICE, 10)
    asset.rollback(token)
    assert asset.balance_of(ALICE) == 10
    assert asset.pool_custody_balance() == 0
    # The token stays usable after a rollback.
    asset.pull_from(ALICE, 5)
    asset.rollback(token)
    assert asset.balance_of(ALICE) == 10


def test_symbol_required() -> None:
    with pytest.raises(ValueError):
        InMemoryAsset("")
