"""Tests for the report command line entry point."""

import logging
from pathlib import Path

import pytest

from census_report import generate_report as cli


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_parse_cli_args_defaults():
    args = cli.parse_cli_args([])
    assert args.income_csv == cli.INCOME_CSV_PATH
    assert args.output == cli.OUTPUT_HTML_FILE
    assert args.log_level == "INFO"
    assert args.quiet is False


def test_main_writes_report_quietly(tmp_path: Path, capsys, restore_logging):
    output = tmp_path / "index.html"
    assert cli.main(["--output", str(output), "--quiet"]) == 0
    assert output.exists()
    assert "Households by annual income" not in capsys.readouterr().out


def test_main_prints_income_table(tmp_path: Path, capsys, restore_logging):
    output = tmp_path / "index.html"
    assert cli.main(["--output", str(output), "--log-level", "WARNING"]) == 0
    out = capsys.readouterr().out
    assert "Households by annual income" in out
    assert "$234,000 or more" in out


def test_main_returns_error_status_for_missing_extract(tmp_path: Path, restore_logging):
    output = tmp_path / "index.html"
    code = cli.main(
        ["--income-csv", str(tmp_path / "missing.csv"), "--output", str(output), "--quiet"]
    )
    assert code == 1
    assert not output.exists()


def test_main_returns_error_status_for_malformed_extract(
    tmp_path: Path, write_extract, restore_logging
):
    income, _ = write_extract(
        "income.csv", ["income_label", "count"], [("$1-$149 ($1-$7,799)", "lots")] * 23
    )
    code = cli.main(["--income-csv", str(income), "--output", str(tmp_path / "x.html")])
    assert code == 1


def test_configure_logging_falls_back_to_console(tmp_path: Path, monkeypatch, restore_logging):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(cli, "LOG_DIR", blocker / "logs")
    cli.configure_logging("DEBUG", enable_file=True)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)


def test_income_summary_table_rows():
    from census_report.pipeline.income import IncomeTableRow

    table = cli.income_summary_table([IncomeTableRow("$0-$25,999", 1200, 100.0)])
    assert table.row_count == 1
    assert [column.header for column in table.columns] == [
        "Annual household income",
        "Households",
        "Share",
    ]
