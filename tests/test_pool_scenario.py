from __future__ import annotations

import json

SCENARIO = """
holders:
  alice: {base: 1000, quote: 1000}
  bob: {base: 1000, quote: 1000}
steps:
  - {op: add_liquidity, who: alice, base_in: 10, quote_max: 100}
  - {op: swap_base_for_quote, who: bob, base_in: 100}
  - {op: swap_base_for_quote, who: bob, base_in: 1}
  - {op: pause, who: bob}
  - {op: grant_role, who: deployer, role: PAUSER, identity: bob}
  - {op: pause, who: bob}
"""


def test_run_scenario_reports_each_step(tmp_path) -> None:
    from tools.pool_scenario import load_scenario, run_scenario

    path = tmp_path / "scenario.yaml"
    path.write_text(SCENARIO, encoding="utf-8")
    report = run_scenario(load_scenario(path))

    assert [line.get("ok") for line in report[:-1]] == [True, True, False, False, True, True]
    assert report[0]["result"] == {"quote_transferred": 100, "shares_minted": 10}
    assert report[1]["result"] == 90
    assert report[2]["error"] == "InvalidOutputAmount"
    assert report[2]["events"] == []
    assert report[3]["error"] == "Unauthorized"
    assert report[4]["events"][0]["event"] == "RoleGranted"
    assert report[4]["events"][0]["role"] == "PAUSER"
    assert report[-1] == {
        "summary": True,
        "reserve_base": 110,
        "reserve_quote": 10,
        "total_shares": 10,
        "paused": True,
    }


def test_main_strict_exit_code(tmp_path, capsys) -> None:
    from tools.pool_scenario import main

    path = tmp_path / "scenario.yaml"
    path.write_text(SCENARIO, encoding="utf-8")
    assert main([str(path)]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 7
    assert json.loads(lines[-1])["reserve_quote"] == 10
    assert main([str(path), "--strict"]) == 1


def test_main_rejects_unknown_keys(tmp_path, capsys) -> None:
    from tools.pool_scenario import main

    path = tmp_path / "scenario.yaml"
    path.write_text("pools: []\n", encoding="utf-8")
    assert main([str(path)]) == 2
    assert "unknown keys" in capsys.readouterr().err
