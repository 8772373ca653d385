"""
Pool facade: the public entry points of the accounting engine.

Every mutating entry point runs in a call frame that:

1. rejects re-entry (``ReentrancyDetected``) before touching anything,
2. consults the AccessGuard (pause flag / roles) and rejects the zero identity,
3. snapshots the ledger, the memo table and both asset collaborators,
4. runs the operation, then checks every invariant on the result,
5. on any exception restores the snapshot and re-raises unchanged,
6. on success publishes the call's events.

Read-only queries never take the frame and may be called from inside
transfer callbacks.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from ..state.balances import Amount, PubKey, is_zero_identity, require_amount
from ..state.memo import MemoTable
from .access import AccessGuard, PermissionState, require_not_paused, require_role
from .config import PoolConfig
from .errors import (
    InsufficientBaseAmount,
    InvariantViolation,
    PoolNotPaused,
    PoolPaused,
    ReentrancyDetected,
    ZeroIdentity,
)
from .events import EventLog
from .invariants import check_all, observe
from .ledger import ReserveLedger
from .liquidity import LiquidityManager
from .swap import SwapEngine
from .transfer import AssetTransfer, pull_or_raise
from .types import (
    AddLiquidityResult,
    Event,
    LiquidityQuote,
    PauseToggled,
    PoolEvent,
    RemoveLiquidityResult,
    Role,
    RoleChanged,
)

logger = logging.getLogger(__name__)


def _require_identity(name: str, identity: PubKey) -> None:
    if is_zero_identity(identity):
        raise ZeroIdentity(f"{name} must not be the zero identity")


class Pool:
    """
    Two-asset constant-product pool.

    Args:
        base: Asset-transfer collaborator for the base asset
        quote: Asset-transfer collaborator for the quote asset
        deployer: Identity granted ADMIN and PAUSER at construction
        config: Fee and range configuration
        permissions: Permission store; a fresh ``PermissionState`` by default
        events: Committed-event log; a fresh ``EventLog`` by default
    """

    def __init__(
        self,
        base: AssetTransfer,
        quote: AssetTransfer,
        *,
        deployer: PubKey,
        config: Optional[PoolConfig] = None,
        permissions: Optional[PermissionState] = None,
        events: Optional[EventLog] = None,
    ) -> None:
        _require_identity("deployer", deployer)
        self.config = config if config is not None else PoolConfig()
        self.base = base
        self.quote = quote
        self.permissions = permissions if permissions is not None else PermissionState()
        self.guard: AccessGuard = self.permissions
        self.events = events if events is not None else EventLog()

        self._ledger = ReserveLedger(max_amount=self.config.max_amount)
        self._memos = MemoTable()
        self._liquidity = LiquidityManager(self._ledger, base, quote, self._memos)
        self._swaps = SwapEngine(
            self._ledger,
            base,
            quote,
            fee_numerator=self.config.fee_numerator,
            fee_denominator=self.config.fee_denominator,
        )
        self._entered = False

        self.permissions.grant(Role.ADMIN, deployer)
        self.permissions.grant(Role.PAUSER, deployer)

    # ------------------------------------------------------------------
    # Call frame
    # ------------------------------------------------------------------

    @contextmanager
    def _frame(self, op: str) -> Iterator[List[PoolEvent]]:
        if self._entered:
            raise ReentrancyDetected(f"{op} re-entered while a call is in progress")
        self._entered = True
        ledger_snap = self._ledger.snapshot()
        memo_snap = self._memos.copy()
        base_cp = self.base.checkpoint()
        quote_cp = self.quote.checkpoint()
        pending: List[PoolEvent] = []
        try:
            yield pending
            violations = check_all(observe(self._ledger, self.base, self.quote))
            if violations:
                raise InvariantViolation(violations)
        except Exception as exc:
            self._ledger.restore(ledger_snap)
            self._memos.restore(memo_snap)
            self.base.rollback(base_cp)
            self.quote.rollback(quote_cp)
            logger.warning("%s rejected: %s: %s", op, type(exc).__name__, exc)
            raise
        finally:
            self._entered = False
        self.events.publish(pending)

    def _attach_base(self, sender: PubKey, base_in: Amount) -> None:
        """Receive the base asset that accompanies the call, before the body runs."""
        require_amount("base_in", base_in)
        if base_in <= 0:
            raise InsufficientBaseAmount(f"base_in must be positive: {base_in}")
        pull_or_raise(self.base, sender, base_in)
        self._ledger.credit_base(base_in)

    # ------------------------------------------------------------------
    # Liquidity
    # ------------------------------------------------------------------

    def add_liquidity(self, provider: PubKey, base_in: Amount, quote_max: Amount) -> AddLiquidityResult:
        with self._frame("add_liquidity") as pending:
            require_not_paused(self.guard)
            _require_identity("provider", provider)
            self._attach_base(provider, base_in)
            result, event = self._liquidity.add_liquidity(provider, base_in, quote_max)
            pending.append(event)
        logger.debug("add_liquidity %s: %s", provider, result)
        return result

    def remove_liquidity(self, provider: PubKey, shares_in: Amount) -> RemoveLiquidityResult:
        with self._frame("remove_liquidity") as pending:
            require_not_paused(self.guard)
            _require_identity("provider", provider)
            result, event = self._liquidity.remove_liquidity(provider, shares_in)
            pending.append(event)
        logger.debug("remove_liquidity %s: %s", provider, result)
        return result

    # ------------------------------------------------------------------
    # Swaps
    # ------------------------------------------------------------------

    def swap_base_for_quote(self, trader: PubKey, base_in: Amount) -> Amount:
        with self._frame("swap_base_for_quote") as pending:
            require_not_paused(self.guard)
            _require_identity("trader", trader)
            self._attach_base(trader, base_in)
            quote_out, event = self._swaps.swap_base_for_quote(trader, base_in)
            pending.append(event)
        logger.debug("swap_base_for_quote %s: %d -> %d", trader, base_in, quote_out)
        return quote_out

    def swap_quote_for_base(self, trader: PubKey, quote_in: Amount) -> Amount:
        with self._frame("swap_quote_for_base") as pending:
            require_not_paused(self.guard)
            _require_identity("trader", trader)
            base_out, event = self._swaps.swap_quote_for_base(trader, quote_in)
            pending.append(event)
        logger.debug("swap_quote_for_base %s: %d -> %d", trader, quote_in, base_out)
        return base_out

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def pause(self, caller: PubKey) -> None:
        with self._frame("pause") as pending:
            _require_identity("caller", caller)
            require_role(self.guard, caller, Role.PAUSER)
            if self.guard.is_paused():
                raise PoolPaused("pool is already paused")
            self.permissions.set_paused(True)
            pending.append(PauseToggled(caller=caller, event=Event.PAUSED))
        logger.info("pool paused by %s", caller)

    def unpause(self, caller: PubKey) -> None:
        with self._frame("unpause") as pending:
            _require_identity("caller", caller)
            require_role(self.guard, caller, Role.PAUSER)
            if not self.guard.is_paused():
                raise PoolNotPaused("pool is not paused")
            self.permissions.set_paused(False)
            pending.append(PauseToggled(caller=caller, event=Event.UNPAUSED))
        logger.info("pool unpaused by %s", caller)

    def grant_role(self, caller: PubKey, role: Role, identity: PubKey) -> bool:
        """Returns True if the assignment changed (and an event was emitted)."""
        with self._frame("grant_role") as pending:
            _require_identity("caller", caller)
            _require_identity("identity", identity)
            require_role(self.guard, caller, Role.ADMIN)
            role = Role(role)
            changed = self.permissions.grant(role, identity)
            if changed:
                pending.append(RoleChanged(caller=caller, role=role, identity=identity, event=Event.ROLE_GRANTED))
        if changed:
            logger.info("role %s granted to %s by %s", role.value, identity, caller)
        return changed

    def revoke_role(self, caller: PubKey, role: Role, identity: PubKey) -> bool:
        """Returns True if the assignment changed (and an event was emitted)."""
        with self._frame("revoke_role") as pending:
            _require_identity("caller", caller)
            _require_identity("identity", identity)
            require_role(self.guard, caller, Role.ADMIN)
            role = Role(role)
            changed = self.permissions.revoke(role, identity)
            if changed:
                pending.append(RoleChanged(caller=caller, role=role, identity=identity, event=Event.ROLE_REVOKED))
        if changed:
            logger.info("role %s revoked from %s by %s", role.value, identity, caller)
        return changed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_role(self, role: Role, identity: PubKey) -> bool:
        return self.guard.check_permission(identity, role)

    def is_paused(self) -> bool:
        return self.guard.is_paused()

    def pending_memo(self, identity: PubKey) -> Tuple[Amount, Amount, Amount]:
        """(last_shares_minted, last_base_returned, last_quote_returned) for identity."""
        return self._memos.get(identity).as_tuple()

    def total_base_custody(self) -> Amount:
        return self.base.pool_custody_balance()

    def total_quote_custody(self) -> Amount:
        return self.quote.pool_custody_balance()

    def shares_of(self, identity: PubKey) -> Amount:
        return self._ledger.shares_of(identity)

    def total_shares(self) -> Amount:
        return self._ledger.total_shares

    def reserves(self) -> Tuple[Amount, Amount]:
        return self._ledger.reserve_base, self._ledger.reserve_quote

    def share_accounts(self) -> dict[PubKey, Amount]:
        return self._ledger.share_accounts()

    # -- previews --------------------------------------------------------

    def quote_base_for_quote(self, base_in: Amount) -> Amount:
        return self._swaps.preview_base_for_quote(base_in)

    def quote_quote_for_base(self, quote_in: Amount) -> Amount:
        return self._swaps.preview_quote_for_base(quote_in)

    def quote_add_liquidity(self, base_in: Amount) -> LiquidityQuote:
        return self._liquidity.preview_add(base_in)

    def quote_remove_liquidity(self, shares_in: Amount) -> RemoveLiquidityResult:
        return self._liquidity.preview_remove(shares_in)

    def __repr__(self) -> str:
        return f"Pool({self._ledger!r}, paused={self.is_paused()})"
