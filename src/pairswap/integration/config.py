"""
PoolConfig loading for deployments.

Sources, later wins:
- dataclass defaults
- an optional YAML mapping file
- environment variables (PAIRSWAP_FEE_NUMERATOR, PAIRSWAP_FEE_DENOMINATOR,
  PAIRSWAP_CHAIN_ID)
"""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..core.config import PoolConfig

_FIELDS = frozenset(f.name for f in dataclasses.fields(PoolConfig))


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _require_mapping(obj: Any, *, name: str) -> Dict[str, Any]:
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"{name} must be a mapping")
    unknown = sorted(set(obj) - _FIELDS)
    if unknown:
        raise ValueError(f"{name}: unknown keys {unknown}")
    return dict(obj)


def config_from_mapping(values: Mapping[str, Any], *, base: Optional[PoolConfig] = None) -> PoolConfig:
    """Overlay values on base (defaults if None). Unknown keys are rejected."""
    overrides = _require_mapping(dict(values), name="config")
    return dataclasses.replace(base if base is not None else PoolConfig(), **overrides)


def load_yaml_config(path: Union[str, Path], *, base: Optional[PoolConfig] = None) -> PoolConfig:
    raw = Path(path).read_text(encoding="utf-8")
    obj = yaml.safe_load(raw)
    overrides = _require_mapping(obj, name=str(path))
    return dataclasses.replace(base if base is not None else PoolConfig(), **overrides)


def apply_env(config: PoolConfig) -> PoolConfig:
    # Out-of-range values are clamped; PoolConfig still rejects an inconsistent pair.
    denominator = _env_int(
        "PAIRSWAP_FEE_DENOMINATOR", config.fee_denominator, lo=1, hi=10**18
    )
    numerator = _env_int(
        "PAIRSWAP_FEE_NUMERATOR", config.fee_numerator, lo=0, hi=denominator - 1
    )
    return dataclasses.replace(
        config,
        fee_numerator=numerator,
        fee_denominator=denominator,
        chain_id=_env_str("PAIRSWAP_CHAIN_ID", config.chain_id),
    )


def load_config(path: Optional[Union[str, Path]] = None) -> PoolConfig:
    """Defaults, then the YAML file at path (if given), then the environment."""
    config = PoolConfig()
    if path is not None:
        config = load_yaml_config(path, base=config)
    return apply_env(config)
