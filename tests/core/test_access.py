"""Tests for pairswap/core/access.py: permission store and guard helpers."""

import pytest

from pairswap.core.access import PermissionState, require_not_paused, require_role
from pairswap.core.errors import PoolPaused, Unauthorized
from pairswap.core.types import Role

ALICE = "0x" + "aa" * 48


class TestPermissionState:
    def test_role_values_accepted(self):
        perms = PermissionState()
        assert perms.grant("PAUSER", ALICE) is True
        assert perms.check_permission(ALICE, Role.PAUSER)
        assert perms.check_permission(ALICE, "PAUSER")
        assert perms.members(Role.PAUSER) == frozenset({ALICE})
        assert perms.revoke("PAUSER", ALICE) is True
        assert not perms.check_permission(ALICE, Role.PAUSER)

    @pytest.mark.parametrize("role", ["OWNER", "admin", None, 1])
    def test_unknown_role_is_value_error(self, role):
        perms = PermissionState()
        with pytest.raises(ValueError):
            perms.check_permission(ALICE, role)
        with pytest.raises(ValueError):
            perms.grant(role, ALICE)
        with pytest.raises(ValueError):
            perms.revoke(role, ALICE)
        assert perms.members(Role.ADMIN) == frozenset()


def test_guard_helpers():
    perms = PermissionState()
    require_not_paused(perms)
    perms.set_paused(True)
    with pytest.raises(PoolPaused):
        require_not_paused(perms)
    with pytest.raises(Unauthorized) as excinfo:
        require_role(perms, ALICE, Role.ADMIN)
    assert excinfo.value.identity == ALICE
