from __future__ import annotations

import pytest

from pairswap.state.balances import (
    MAX_AMOUNT,
    ZERO_PUBKEY,
    BalanceTable,
    is_zero_identity,
    require_amount,
)
from pairswap.state.lp import ShareTable
from pairswap.state.memo import EMPTY_MEMO, MemoTable
from pairswap.state.pools import PoolState

ALICE = "0x" + "aa" * 48


class TestZeroIdentity:
    @pytest.mark.parametrize("value", ["", "0x", "0", "0x00", ZERO_PUBKEY, None, 0])
    def test_zero_forms(self, value):
        assert is_zero_identity(value)

    @pytest.mark.parametrize("value", [ALICE, "0x01", "alice"])
    def test_nonzero_forms(self, value):
        assert not is_zero_identity(value)


class TestRequireAmount:
    def test_accepts_int(self) -> None:
        require_amount("x", 0)
        require_amount("x", MAX_AMOUNT)

    @pytest.mark.parametrize("value", [True, 1.0, "1", None])
    def test_rejects_non_int(self, value) -> None:
        with pytest.raises(TypeError):
            require_amount("x", value)


class TestBalanceTable:
    def test_sparse(self) -> None:
        t = BalanceTable()
        t.add(ALICE, 5)
        t.subtract(ALICE, 5)
        assert t.get(ALICE) == 0
        assert repr(t) == "BalanceTable(0 entries)"
        t.set(ALICE, 7)
        assert t.get(ALICE) == 7

    def test_negative_rejected(self) -> None:
        t = BalanceTable()
        with pytest.raises(ValueError):
            t.subtract(ALICE, 1)
        with pytest.raises(ValueError):
            t.set(ALICE, -1)

    def test_copy_is_detached(self) -> None:
        t = BalanceTable()
        t.set(ALICE, 3)
        c = t.copy()
        t.set(ALICE, 4)
        assert c.get(ALICE) == 3


class TestShareTable:
    def test_add_subtract(self) -> None:
        t = ShareTable()
        t.add(ALICE, 10)
        t.subtract(ALICE, 4)
        assert t.get(ALICE) == 6
        assert t.total() == 6
        assert t.get_all_balances() == {ALICE: 6}

    def test_underflow(self) -> None:
        t = ShareTable()
        with pytest.raises(ValueError):
            t.add(ALICE, -1)


class TestMemoTable:
    def test_default_is_empty(self) -> None:
        assert MemoTable().get(ALICE) is EMPTY_MEMO
        assert EMPTY_MEMO.as_tuple() == (0, 0, 0)

    def test_record_overwrites_whole_slot(self) -> None:
        m = MemoTable()
        m.record_burn(ALICE, 3, 30)
        m.record_mint(ALICE, 9)
        assert m.get(ALICE).as_tuple() == (9, 0, 0)
        m.record_burn(ALICE, 1, 2)
        assert m.get(ALICE).as_tuple() == (0, 1, 2)

    def test_restore(self) -> None:
        m = MemoTable()
        m.record_mint(ALICE, 1)
        snap = m.copy()
        m.record_mint(ALICE, 2)
        m.restore(snap)
        assert m.get(ALICE).last_shares_minted == 1


class TestPoolState:
    def test_defaults_empty(self) -> None:
        s = PoolState()
        assert s.is_empty()
        assert not PoolState(reserve_quote=1).is_empty()

    def test_range_checked(self) -> None:
        with pytest.raises(ValueError):
            PoolState(reserve_base=-1)
        with pytest.raises(ValueError):
            PoolState(total_shares=MAX_AMOUNT + 1)
        with pytest.raises(TypeError):
            PoolState(reserve_quote=1.5)
