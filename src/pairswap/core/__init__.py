"""
Pool accounting engine
"""

from .access import AccessGuard, PermissionState
from .config import PoolConfig
from .cpmm import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    get_input_price,
    quote_required,
    shares_for_deposit,
    withdrawal_amounts,
)
from .errors import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    CheckedArithmeticError,
    InsufficientBaseAmount,
    InsufficientQuoteAmount,
    InsufficientReserve,
    InsufficientShares,
    InsufficientSharesAmount,
    InsufficientSharesMinted,
    InvalidOutputAmount,
    InvariantViolation,
    PoolError,
    PoolNotPaused,
    PoolPaused,
    ReentrancyDetected,
    TransferFailed,
    Unauthorized,
    ZeroIdentity,
)
from .events import EventLog
from .ledger import ReserveLedger
from .liquidity import LiquidityManager
from .pool import Pool
from .swap import SwapEngine
from .types import (
    AddLiquidityResult,
    BaseToQuoteSwap,
    Event,
    LiquidityAdded,
    LiquidityQuote,
    LiquidityRemoved,
    PauseToggled,
    QuoteToBaseSwap,
    RemoveLiquidityResult,
    Role,
    RoleChanged,
)

__all__ = [
    "AccessGuard",
    "PermissionState",
    "PoolConfig",
    "FEE_DENOMINATOR",
    "FEE_NUMERATOR",
    "get_input_price",
    "quote_required",
    "shares_for_deposit",
    "withdrawal_amounts",
    "ArithmeticOverflow",
    "ArithmeticUnderflow",
    "CheckedArithmeticError",
    "InsufficientBaseAmount",
    "InsufficientQuoteAmount",
    "InsufficientReserve",
    "InsufficientShares",
    "InsufficientSharesAmount",
    "InsufficientSharesMinted",
    "InvalidOutputAmount",
    "InvariantViolation",
    "PoolError",
    "PoolNotPaused",
    "PoolPaused",
    "ReentrancyDetected",
    "TransferFailed",
    "Unauthorized",
    "ZeroIdentity",
    "EventLog",
    "ReserveLedger",
    "LiquidityManager",
    "Pool",
    "SwapEngine",
    "AddLiquidityResult",
    "BaseToQuoteSwap",
    "Event",
    "LiquidityAdded",
    "LiquidityQuote",
    "LiquidityRemoved",
    "PauseToggled",
    "QuoteToBaseSwap",
    "RemoveLiquidityResult",
    "Role",
    "RoleChanged",
]
