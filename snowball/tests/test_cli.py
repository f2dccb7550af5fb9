from __future__ import annotations

import io
import json
import logging

import pytest

from snowball.app import build_parser, main


@pytest.fixture(autouse=True)
def isolate(monkeypatch):
    """Keep env overrides and the root logger untouched between runs."""
    for name in ["SNOWBALL_LOG_LEVEL", "SNOWBALL_LOG_FORMAT", "SNOWBALL_MODE"]:
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def run(*argv: str) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    code = main(list(argv), out=out, err=err)
    return code, out.getvalue(), err.getvalue()


def test_default_run_prints_summary_and_table():
    code, out, err = run("--log-level", "WARNING")

    assert code == 0
    assert err == ""
    assert out.startswith("30-year plan | Principal: 1200万円")
    assert "Total contributed:  ¥11,999,880" in out
    # header plus one row per year
    table_rows = [line for line in out.splitlines() if line.strip() and line.split()[0].isdigit()]
    assert len(table_rows) == 30


def test_json_output_matches_camel_case_shape():
    code, out, _ = run("--monthly-amount", "10000", "--annual-rate", "0.05", "--years", "10", "--json")

    assert code == 0
    payload = json.loads(out)
    assert payload["mode"] == "annual"
    assert payload["params"] == {"monthlyAmount": 10000.0, "annualRate": 0.05, "years": 10}
    assert payload["result"]["totalContributed"] == 1_200_000
    assert [row["year"] for row in payload["result"]["yearlyContributions"]] == list(range(1, 11))


def test_monthly_mode_gives_larger_total():
    _, annual_out, _ = run("--years", "10", "--json")
    _, monthly_out, _ = run("--years", "10", "--mode", "monthly", "--json")

    annual_total = json.loads(annual_out)["result"]["totalValue"]
    monthly_total = json.loads(monthly_out)["result"]["totalValue"]
    assert monthly_total > annual_total


def test_mode_can_come_from_environment(monkeypatch):
    monkeypatch.setenv("SNOWBALL_MODE", "monthly")
    _, out, _ = run("--json")

    assert json.loads(out)["mode"] == "monthly"


def test_rate_percent_is_normalised():
    _, out, _ = run("--rate-percent", "７%", "--json")

    assert json.loads(out)["params"]["annualRate"] == pytest.approx(0.07)


def test_preset_values_with_override():
    _, out, _ = run("--preset", "aggressive", "--years", "20", "--json")
    params = json.loads(out)["params"]

    assert params == {"monthlyAmount": 50000.0, "annualRate": 0.07, "years": 20}


def test_invalid_years_exit_with_issues():
    code, out, err = run("--years", "0")

    assert code == 2
    assert out == ""
    assert "[error] years:" in err


def test_warnings_are_reported_but_do_not_block():
    code, out, err = run("--annual-rate", "0.2")

    assert code == 0
    assert "[warning] annualRate:" in err
    assert "Total value:" in out


def test_list_presets():
    code, out, _ = run("--list-presets")

    assert code == 0
    keys = [line.split()[0] for line in out.splitlines()]
    assert keys == ["conservative", "standard", "aggressive", "young_starter", "middle_age"]


def test_bad_environment_config(monkeypatch):
    monkeypatch.setenv("SNOWBALL_MODE", "hourly")
    code, _, err = run()

    assert code == 2
    assert "configuration error" in err


def test_rate_options_are_mutually_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--annual-rate", "0.05", "--rate-percent", "5"])


def test_json_logs_go_to_err_with_plan_fields(monkeypatch):
    monkeypatch.setenv("SNOWBALL_LOG_FORMAT", "json")
    code, out, err = run("--years", "10", "--log-level", "INFO", "--json")

    assert code == 0
    json.loads(out)
    records = [json.loads(line) for line in err.splitlines()]
    calculated = [record for record in records if record["logger"] == "snowball.app.commands"]
    assert len(calculated) == 1
    assert calculated[0]["mode"] == "annual"
    assert calculated[0]["years"] == 10
    assert calculated[0]["total_value"] > 0


def test_rejected_fields_are_logged(monkeypatch):
    monkeypatch.setenv("SNOWBALL_LOG_FORMAT", "json")
    code, _, err = run("--years", "0", "--log-level", "INFO")

    assert code == 2
    records = [json.loads(line) for line in err.splitlines() if line.startswith("{")]
    assert records[0]["fields"] == ["years"]
