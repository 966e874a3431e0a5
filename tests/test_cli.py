import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from chatter_earnings.cli import app

runner = CliRunner()


@pytest.fixture
def ledger_file(tmp_path: Path, ledger_text: str) -> Path:
    p = tmp_path / "ledger.txt"
    p.write_text(ledger_text + "\nTotal $92.51\n", encoding="utf-8")
    return p


def test_parse_prints_tab_separated_rows(ledger_file: Path):
    result = runner.invoke(app, ["parse", "--input", str(ledger_file)])
    assert result.exit_code == 0
    first = result.stdout.splitlines()[0].split("\t")
    assert first == [
        "Oct 8, 2025",
        "11:54 am",
        "$14.99",
        "$3.00",
        "$11.99",
        "Subscription",
        "11",
        "Recurring subscription from BootyLover",
    ]
    assert "Parsed 6 transactions, skipped 1 invalid line." in result.output
    assert "Skipped: Total $92.51" in result.output


def test_parse_reads_stdin():
    line = "Oct 8, 2025 1:00 pm $5.00 $1.00 $4.00 Tip from B\n"
    result = runner.invoke(app, ["parse", "--input", "-"], input=line)
    assert result.exit_code == 0
    assert "\tTip\t13\tTip from B" in result.stdout


def test_missing_file_exits_with_error(tmp_path: Path):
    result = runner.invoke(app, ["parse", "--input", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_invalid_configuration_exits_with_error(ledger_file: Path, monkeypatch):
    monkeypatch.setenv("CHATTER_EARNINGS_TIMEZONE", "Mars/Olympus_Mons")
    result = runner.invoke(app, ["stats", "--input", str(ledger_file)])
    assert result.exit_code == 1
    assert "invalid configuration" in result.output


def test_stats_outputs_json(ledger_file: Path):
    result = runner.invoke(app, ["stats", "--input", str(ledger_file)])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["stats"]["chatter_sales"]["count"] == 2
    assert data["summary"]["total_transactions"] == 6
    assert data["skipped_lines"] == ["Total $92.51"]


def test_export_csv_to_file(ledger_file: Path, tmp_path: Path):
    out = tmp_path / "out.csv"
    result = runner.invoke(app, ["export-csv", "--input", str(ledger_file), "--output", str(out)])
    assert result.exit_code == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Date,Time,Gross,Fee,Net,Category,Description"
    assert len(lines) == 7


def test_export_csv_without_transactions_fails(tmp_path: Path):
    p = tmp_path / "empty.txt"
    p.write_text("nothing to see\n", encoding="utf-8")
    result = runner.invoke(app, ["export-csv", "--input", str(p)])
    assert result.exit_code == 1


def test_daily_sales_json(ledger_file: Path):
    result = runner.invoke(
        app,
        [
            "daily-sales",
            "--input",
            str(ledger_file),
            "--model-id",
            "m1",
            "--model-name",
            "Mia",
        ],
    )
    assert result.exit_code == 0
    [day] = json.loads(result.stdout)
    assert day["sale_date"] == "2025-10-08"
    assert day["week_start"] == "2025-10-04"
    assert day["transaction_count"] == 6
    assert day["model_id"] == "m1"


def test_daily_sales_rejects_bad_date(ledger_file: Path):
    result = runner.invoke(
        app,
        [
            "daily-sales",
            "--input",
            str(ledger_file),
            "--model-id",
            "m1",
            "--model-name",
            "Mia",
            "--sale-date",
            "10/08/2025",
        ],
    )
    assert result.exit_code == 1
    assert "YYYY-MM-DD" in result.output


def test_log_level_from_environment_reaches_stderr(ledger_file: Path, monkeypatch):
    monkeypatch.setenv("CHATTER_EARNINGS_LOG_LEVEL", "debug")
    result = runner.invoke(app, ["parse", "--input", str(ledger_file)])
    assert result.exit_code == 0
    assert "chatter_earnings.parser DEBUG parsed 6 transaction(s)" in result.output
