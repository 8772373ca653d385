"""
State holders for the pairswap pool
"""

from .balances import BalanceTable, MAX_AMOUNT, is_zero_identity
from .lp import ShareTable
from .memo import LastOperationMemo, MemoTable
from .pools import PoolState

__all__ = [
    "BalanceTable",
    "MAX_AMOUNT",
    "is_zero_identity",
    "ShareTable",
    "LastOperationMemo",
    "MemoTable",
    "PoolState",
]
