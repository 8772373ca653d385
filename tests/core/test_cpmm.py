from __future__ import annotations

import pytest

from pairswap.core.cpmm import (
    amount_after_fee,
    get_input_price,
    quote_required,
    shares_for_deposit,
    validate_fee,
    withdrawal_amounts,
)
from pairswap.core.errors import InvalidOutputAmount


def test_amount_after_fee_floors_one_percent() -> None:
    assert amount_after_fee(100) == 99
    assert amount_after_fee(1) == 0
    assert amount_after_fee(10_000) == 9_900
    assert amount_after_fee(101) == 99  # 101 * 9900 // 10000 = 99


def test_input_price_matches_integer_formula() -> None:
    # after_fee = 99; 99 * 100 // (10 + 99) = 90
    assert get_input_price(100, 10, 100) == 90
    # after_fee = 99; 99 * 1000 // 1099 = 90
    assert get_input_price(100, 1000, 1000) == 90


def test_input_price_rejects_zero_output() -> None:
    # One unit of input is eaten entirely by the floor of the fee adjustment.
    with pytest.raises(InvalidOutputAmount):
        get_input_price(1, 10, 100)


def test_input_price_rejects_full_drain() -> None:
    # With an empty input reserve the whole output reserve would go out.
    with pytest.raises(InvalidOutputAmount):
        get_input_price(100, 0, 50)


def test_input_price_rejects_empty_denominator() -> None:
    with pytest.raises(InvalidOutputAmount):
        get_input_price(1, 0, 50)


def test_zero_fee_config_prices_without_haircut() -> None:
    assert get_input_price(100, 100, 1000, 0, 10_000) == 500


def test_validate_fee_bounds() -> None:
    validate_fee(0, 1)
    validate_fee(100, 10_000)
    with pytest.raises(ValueError):
        validate_fee(10_000, 10_000)
    with pytest.raises(ValueError):
        validate_fee(-1, 10_000)
    with pytest.raises(ValueError):
        validate_fee(0, 0)
    with pytest.raises(TypeError):
        validate_fee(True, 10_000)


def test_deposit_terms_floor() -> None:
    assert quote_required(20, 10, 100) == 200
    assert quote_required(3, 7, 100) == 42
    assert shares_for_deposit(20, 10, 10) == 20
    assert shares_for_deposit(100, 1010, 10) == 0


def test_deposit_terms_reject_empty_base_reserve() -> None:
    with pytest.raises(ValueError):
        quote_required(1, 0, 100)
    with pytest.raises(ValueError):
        shares_for_deposit(1, 0, 100)


def test_withdrawal_amounts_pro_rata_floor() -> None:
    assert withdrawal_amounts(5, 10, 100, 10) == (5, 50)
    assert withdrawal_amounts(3, 10, 142, 10) == (3, 42)
    assert withdrawal_amounts(10, 10, 100, 10) == (10, 100)


def test_withdrawal_amounts_reject_bad_supply() -> None:
    with pytest.raises(ValueError):
        withdrawal_amounts(1, 10, 10, 0)
    with pytest.raises(ValueError):
        withdrawal_amounts(11, 10, 10, 10)
