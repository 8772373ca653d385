"""
AccessGuard: role and pause predicates consulted before every mutation.

The guard is an injected capability. ``PermissionState`` is the in-memory
permission store; the engine only calls the predicate half of it except for
the administrative operations, which are the sole writers.
"""

from __future__ import annotations

from typing import Dict, Protocol, Set

from ..state.balances import PubKey
from .errors import PoolPaused, Unauthorized
from .types import Role


class AccessGuard(Protocol):
    def check_permission(self, identity: PubKey, role: Role) -> bool:
        ...

    def is_paused(self) -> bool:
        ...


def _as_role(role: object) -> Role:
    # Role members and their string values are accepted; anything else is a ValueError.
    return Role(role)


class PermissionState:
    """Role assignments plus the pause flag."""

    def __init__(self) -> None:
        self._roles: Dict[Role, Set[PubKey]] = {role: set() for role in Role}
        self._paused = False

    def check_permission(self, identity: PubKey, role: Role) -> bool:
        return identity in self._roles[_as_role(role)]

    def is_paused(self) -> bool:
        return self._paused

    def members(self, role: Role) -> frozenset[PubKey]:
        return frozenset(self._roles[_as_role(role)])

    def grant(self, role: Role, identity: PubKey) -> bool:
        """Returns True if the assignment changed."""
        role = _as_role(role)
        if identity in self._roles[role]:
            return False
        self._roles[role].add(identity)
        return True

    def revoke(self, role: Role, identity: PubKey) -> bool:
        """Returns True if the assignment changed."""
        role = _as_role(role)
        if identity not in self._roles[role]:
            return False
        self._roles[role].discard(identity)
        return True

    def set_paused(self, paused: bool) -> None:
        self._paused = bool(paused)

    def __repr__(self) -> str:
        counts = ", ".join(f"{r.value}={len(m)}" for r, m in self._roles.items())
        return f"PermissionState({counts}, paused={self._paused})"


def require_not_paused(guard: AccessGuard) -> None:
    if guard.is_paused():
        raise PoolPaused("pool is paused")


def require_role(guard: AccessGuard, identity: PubKey, role: Role) -> None:
    if not guard.check_permission(identity, role):
        raise Unauthorized(identity, role)
