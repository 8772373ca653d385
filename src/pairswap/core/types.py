"""Data types for the pool engine.

Events are frozen dataclasses tagged with an ``Event`` member; the field
names carry the literal amounts computed by the operation that emitted them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, unique
from typing import Any, Optional, Union


@unique
class Role(Enum):
    ADMIN = "ADMIN"
    PAUSER = "PAUSER"


@unique
class Event(Enum):
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    BASE_TO_QUOTE_SWAP = "BaseToQuoteSwap"
    QUOTE_TO_BASE_SWAP = "QuoteToBaseSwap"
    PAUSED = "Paused"
    UNPAUSED = "Unpaused"
    ROLE_GRANTED = "RoleGranted"
    ROLE_REVOKED = "RoleRevoked"


@dataclass(frozen=True)
class LiquidityAdded:
    provider: str
    base_in: int
    quote_transferred: int
    shares_minted: int
    event: Event = Event.LIQUIDITY_ADDED


@dataclass(frozen=True)
class LiquidityRemoved:
    provider: str
    base_out: int
    quote_out: int
    shares_burned: int
    event: Event = Event.LIQUIDITY_REMOVED


@dataclass(frozen=True)
class BaseToQuoteSwap:
    trader: str
    base_in: int
    quote_out: int
    event: Event = Event.BASE_TO_QUOTE_SWAP


@dataclass(frozen=True)
class QuoteToBaseSwap:
    trader: str
    quote_in: int
    base_out: int
    event: Event = Event.QUOTE_TO_BASE_SWAP


@dataclass(frozen=True)
class PauseToggled:
    caller: str
    event: Event = Event.PAUSED


@dataclass(frozen=True)
class RoleChanged:
    caller: str
    role: Role
    identity: str
    event: Event = Event.ROLE_GRANTED


PoolEvent = Union[
    LiquidityAdded,
    LiquidityRemoved,
    BaseToQuoteSwap,
    QuoteToBaseSwap,
    PauseToggled,
    RoleChanged,
]


def event_to_dict(ev: PoolEvent) -> dict[str, Any]:
    """Plain-dict form for off-process observers (enum members by value)."""
    out: dict[str, Any] = {}
    for k, v in asdict(ev).items():
        out[k] = v.value if isinstance(v, Enum) else v
    return out


@dataclass(frozen=True)
class AddLiquidityResult:
    quote_transferred: int
    shares_minted: int


@dataclass(frozen=True)
class RemoveLiquidityResult:
    base_out: int
    quote_out: int


@dataclass(frozen=True)
class LiquidityQuote:
    """Preview of a deposit. ``quote_required`` is None for an empty pool."""

    quote_required: Optional[int]
    shares_minted: int
