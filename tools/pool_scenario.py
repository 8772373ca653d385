#!/usr/bin/env python3
"""
Offline pool scenario runner.

Replays a YAML (or JSON) scenario against a fresh in-memory pool and prints
one canonical JSON line per step plus a final summary line.

Scenario format:

    config:            # optional PoolConfig overrides
      fee_numerator: 30
    holders:           # funding per named holder
      alice: {base: 1000, quote: 1000}
      bob:   {base: 500,  quote: 500}
    steps:
      - {op: add_liquidity, who: alice, base_in: 10, quote_max: 100}
      - {op: swap_base_for_quote, who: bob, base_in: 100}
      - {op: pause, who: deployer}
      - {op: grant_role, who: deployer, role: PAUSER, identity: bob}

Names are mapped to identities by hashing; `deployer` is the pool deployer.

Example:
  python3 tools/pool_scenario.py scenario.yaml --strict
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from pairswap.core import Pool, PoolError, Role
from pairswap.core.types import event_to_dict
from pairswap.integration.config import config_from_mapping
from pairswap.integration.transfers import InMemoryAsset
from pairswap.state.canonical import canonical_json_bytes

DEPLOYER = "deployer"

_AMOUNT_ARGS = {
    "add_liquidity": ("base_in", "quote_max"),
    "remove_liquidity": ("shares_in",),
    "swap_base_for_quote": ("base_in",),
    "swap_quote_for_base": ("quote_in",),
    "pause": (),
    "unpause": (),
}
_ROLE_OPS = ("grant_role", "revoke_role")


class ScenarioError(Exception):
    pass


def identity_for(name: str) -> str:
    return "0x" + hashlib.sha256(f"pairswap-scenario:{name}".encode("utf-8")).hexdigest()


def _require_mapping(obj: Any, *, name: str) -> Dict[str, Any]:
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ScenarioError(f"{name} must be a mapping")
    return obj


def load_scenario(path: Path) -> Dict[str, Any]:
    obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    scenario = _require_mapping(obj, name="scenario")
    unknown = sorted(set(scenario) - {"config", "holders", "steps"})
    if unknown:
        raise ScenarioError(f"scenario has unknown keys: {unknown}")
    if not isinstance(scenario.get("steps", []), list):
        raise ScenarioError("steps must be a list")
    return scenario


def build_pool(scenario: Dict[str, Any]) -> Pool:
    try:
        config = config_from_mapping(_require_mapping(scenario.get("config"), name="config"))
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"bad config: {exc}") from exc
    base = InMemoryAsset("BASE")
    quote = InMemoryAsset("QUOTE")
    for name, funding in _require_mapping(scenario.get("holders"), name="holders").items():
        funding = _require_mapping(funding, name=f"holders.{name}")
        base.mint(identity_for(name), int(funding.get("base", 0)))
        quote.mint(identity_for(name), int(funding.get("quote", 0)))
    return Pool(base, quote, deployer=identity_for(DEPLOYER), config=config)


def _plain(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    return value


def run_step(pool: Pool, step: Dict[str, Any]) -> Any:
    op = step.get("op")
    who = step.get("who")
    if not isinstance(who, str):
        raise ScenarioError(f"step {step!r}: 'who' must be a name")
    caller = identity_for(who)
    if op in _ROLE_OPS:
        role = Role(step.get("role"))
        target = identity_for(str(step.get("identity")))
        return getattr(pool, op)(caller, role, target)
    if op not in _AMOUNT_ARGS:
        raise ScenarioError(f"unknown op: {op!r}")
    args = [step.get(name) for name in _AMOUNT_ARGS[op]]
    return _plain(getattr(pool, op)(caller, *args))


def run_scenario(scenario: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Run every step; a rejected step is reported and the run continues."""
    pool = build_pool(scenario)
    report: List[Dict[str, Any]] = []
    for i, step in enumerate(scenario.get("steps", [])):
        step = _require_mapping(step, name=f"steps[{i}]")
        seen = len(pool.events)
        line: Dict[str, Any] = {"step": i, "op": step.get("op")}
        try:
            line["result"] = run_step(pool, step)
            line["ok"] = True
        except PoolError as exc:
            line["ok"] = False
            line["error"] = type(exc).__name__
        line["events"] = [event_to_dict(ev) for ev in pool.events.events[seen:]]
        report.append(line)
    reserve_base, reserve_quote = pool.reserves()
    report.append(
        {
            "summary": True,
            "reserve_base": reserve_base,
            "reserve_quote": reserve_quote,
            "total_shares": pool.total_shares(),
            "paused": pool.is_paused(),
        }
    )
    return report


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a pool scenario offline")
    parser.add_argument("scenario", type=Path, help="YAML or JSON scenario file")
    parser.add_argument("--strict", action="store_true", help="Exit 1 if any step is rejected")
    args = parser.parse_args(argv)

    try:
        report = run_scenario(load_scenario(args.scenario))
    except (ScenarioError, TypeError, ValueError) as exc:
        print(f"[pool-scenario] FAIL: {exc}", file=sys.stderr)
        return 2

    for line in report:
        print(canonical_json_bytes(line).decode("utf-8"))

    rejected = [line for line in report if line.get("ok") is False]
    if args.strict and rejected:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
