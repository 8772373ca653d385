from __future__ import annotations

import pytest

from pairswap.core.config import PoolConfig
from pairswap.integration.config import (
    apply_env,
    config_from_mapping,
    load_config,
    load_yaml_config,
)

_ENV = ("PAIRSWAP_FEE_NUMERATOR", "PAIRSWAP_FEE_DENOMINATOR", "PAIRSWAP_CHAIN_ID")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    cfg = load_config()
    assert cfg == PoolConfig()
    assert (cfg.fee_numerator, cfg.fee_denominator) == (100, 10_000)
    assert cfg.max_amount == 2**256 - 1


def test_yaml_overrides(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("fee_numerator: 30\nchain_id: testnet\n", encoding="utf-8")
    cfg = load_yaml_config(path)
    assert cfg.fee_numerator == 30
    assert cfg.fee_denominator == 10_000
    assert cfg.chain_id == "testnet"


def test_empty_yaml_is_defaults(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml_config(path) == PoolConfig()


def test_yaml_unknown_key(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("fee_bps: 30\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unknown keys"):
        load_yaml_config(path)


def test_yaml_not_a_mapping(tmp_path) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml_config(path)


def test_invalid_fee_rejected() -> None:
    with pytest.raises(ValueError):
        config_from_mapping({"fee_numerator": 10_000})
    with pytest.raises(TypeError):
        config_from_mapping({"max_amount": "big"})


def test_env_wins_over_yaml(tmp_path, monkeypatch) -> None:
    path = tmp_path / "pool.yaml"
    path.write_text("fee_numerator: 30\nchain_id: testnet\n", encoding="utf-8")
    monkeypatch.setenv("PAIRSWAP_FEE_NUMERATOR", "5")
    monkeypatch.setenv("PAIRSWAP_CHAIN_ID", "mainnet")
    cfg = load_config(path)
    assert cfg.fee_numerator == 5
    assert cfg.chain_id == "mainnet"


def test_env_values_clamped(monkeypatch) -> None:
    monkeypatch.setenv("PAIRSWAP_FEE_DENOMINATOR", "1000")
    monkeypatch.setenv("PAIRSWAP_FEE_NUMERATOR", "5000")
    cfg = apply_env(PoolConfig())
    assert (cfg.fee_numerator, cfg.fee_denominator) == (999, 1000)


def test_env_garbage_ignored(monkeypatch) -> None:
    monkeypatch.setenv("PAIRSWAP_FEE_NUMERATOR", "lots")
    monkeypatch.setenv("PAIRSWAP_CHAIN_ID", "   ")
    assert apply_env(PoolConfig()) == PoolConfig()
