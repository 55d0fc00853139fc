import json

import pytest

from drca import cli
from drca.cli import handle


def _out(capsys, engine, line):
    handle(engine, line)
    return capsys.readouterr().out.strip()


def test_simple_queries(engine, capsys) -> None:
    assert _out(capsys, engine, "closed") == "4"
    assert _out(capsys, engine, "handler-claims 3") == "3"
    assert _out(capsys, engine, "handler-avg 3") == "20.33"
    assert _out(capsys, engine, 'state-disasters "Texas"') == "3"
    assert _out(capsys, engine, "most-state") == "Florida"
    assert _out(capsys, engine, "least-state") == "Maine"
    assert _out(capsys, engine, "late-declared") == "2"
    assert _out(capsys, engine, "disaster-cost 1") == "315.01"
    assert _out(capsys, engine, "density 1") == "0.01273"
    assert _out(capsys, engine, "region south") == "6"
    assert _out(capsys, engine, 'language "Texas"') == "Spanish"


def test_absent_results_print_na(engine, capsys) -> None:
    assert _out(capsys, engine, "handler-avg 42") == "n/a"
    assert _out(capsys, engine, "disaster-cost 8") == "n/a"
    assert _out(capsys, engine, "density 404") == "n/a"
    assert _out(capsys, engine, "open-claims 5 3") == "n/a"
    assert _out(capsys, engine, 'language "Ohio"') == "(none)"


def test_open_claims(engine, capsys) -> None:
    assert _out(capsys, engine, "open-claims 1 5") == "1"
    assert "between 1 and 10" in _out(capsys, engine, "open-claims 1 11")


def test_top_months_and_summary(engine, capsys) -> None:
    assert _out(capsys, engine, "top-months").splitlines() == [
        "1. June 2023",
        "2. March 2023",
        "3. May 2023",
    ]
    summary = _out(capsys, engine, "summary")
    assert "closed_claims: 4" in summary
    assert "top_three_months: June 2023, March 2023, May 2023" in summary


def test_agent_costs(engine, capsys) -> None:
    lines = _out(capsys, engine, "agent-costs 2").splitlines()
    assert lines[0] == "[1] Ana Diaz: 515.01"
    assert lines[1] == "[2] Agent 2: 300.00"
    assert lines[2] == "... (7 agents, showing 2)"


def test_states_and_stats(engine, capsys) -> None:
    assert _out(capsys, engine, "states").splitlines()[0] == "Florida: 3"
    assert "Claims: 10" in _out(capsys, engine, "stats")


def test_bad_usage_raises(engine) -> None:
    with pytest.raises(ValueError):
        handle(engine, "density")
    with pytest.raises(ValueError):
        handle(engine, "region atlantis")


def test_unknown_command(engine, capsys) -> None:
    assert "Unknown command" in _out(capsys, engine, "frobnicate")


def test_main_runs_repl(tmp_path, monkeypatch, capsys) -> None:
    rows = {
        "disasters": [{"id": 1, "state": "Utah", "declared_date": "2023-01-05",
                       "end_date": "2023-01-09", "radius_miles": 2}],
        "claims": [{"id": 1, "disaster_id": 1, "status": "Closed", "agent_assigned_id": 1,
                    "claim_handler_assigned_id": 1, "estimate_cost": 12.5, "severity_rating": 3}],
        "agents": [{"id": 1, "state": "Utah", "secondary_language": "Navajo"}],
        "claim_handlers": [{"id": 1}],
    }
    for name, data in rows.items():
        (tmp_path / f"sfcc_2023_{name}.json").write_text(json.dumps(data), encoding="utf-8")

    commands = iter(["closed", "bogus 1", "most-state", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))

    cli.main(["--data-dir", str(tmp_path)])

    out = capsys.readouterr().out
    assert "Loaded 1 disasters, 1 claims, 1 agents." in out
    assert "Unknown command" in out
    assert "Utah" in out
