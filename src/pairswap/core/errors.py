"""Exception types for the pool accounting engine.

Every failure aborts the whole call; the ``Pool`` facade restores the
pre-call state and re-raises the exception unchanged.
"""

from __future__ import annotations


class PoolError(Exception):
    """Base class for all pool failures."""


class Unauthorized(PoolError):
    """Raised when the caller lacks the role an operation requires."""

    def __init__(self, identity: str, requirement: object) -> None:
        self.identity = identity
        self.requirement = requirement
        super().__init__(f"{identity} not authorized: {requirement}")


class PoolPaused(PoolError):
    """Raised by mutating operations while the pool is paused."""


class PoolNotPaused(PoolError):
    """Raised by ``unpause()`` when the pool is already active."""


class ZeroIdentity(PoolError):
    """Raised when an operation is given the zero identity."""


class InsufficientBaseAmount(PoolError):
    """Raised when a base-asset input amount is not positive."""


class InsufficientQuoteAmount(PoolError):
    """Raised when a quote-asset input is not positive or below what a deposit requires."""


class InsufficientSharesAmount(PoolError):
    """Raised when a share amount to remove is not positive."""


class InsufficientSharesMinted(PoolError):
    """Raised when a deposit would mint zero shares."""


class InvalidOutputAmount(PoolError):
    """Raised when a swap would output nothing or drain the opposing reserve."""


class CheckedArithmeticError(PoolError):
    """Base for stored-value range failures."""


class ArithmeticOverflow(CheckedArithmeticError):
    """Raised when a stored value would exceed ``MAX_AMOUNT``."""


class ArithmeticUnderflow(CheckedArithmeticError):
    """Raised when a stored value would drop below zero."""


class InsufficientReserve(ArithmeticUnderflow):
    """Raised when a debit exceeds the named reserve."""


class InsufficientShares(ArithmeticUnderflow):
    """Raised when a burn exceeds the holder's share balance."""


class TransferFailed(PoolError):
    """Raised when the asset-transfer collaborator cannot move funds."""


class ReentrancyDetected(PoolError):
    """Raised when a mutating entry point is re-entered mid-call."""


class InvariantViolation(PoolError):
    """Raised when a post-call state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
