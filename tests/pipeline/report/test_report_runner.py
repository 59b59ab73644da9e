"""End-to-end tests for the report runner."""

from pathlib import Path

import pandas as pd
import pytest

from census_report.config import INCOME_CSV_PATH, NO_DATA_HTML, REPORT_TITLE
from census_report.exceptions import IncomeLabelParseError
from census_report.pipeline.income import IncomeTableRow
from census_report.pipeline.report import runner


def _sections(income_rows):
    age = pd.DataFrame(
        {
            "label": ["0-14", "15-24"],
            "male": [2, 3],
            "female": [2, 3],
            "total_count": [4, 6],
            "percentage": [40.0, 60.0],
        }
    )
    categories = pd.DataFrame(
        {"label": ["a", "b"], "total_count": [1, 3], "percentage": [25.0, 75.0]}
    )
    return runner.ReportSections(
        income_rows=income_rows,
        high_income_share=12.5,
        age_by_sex=age,
        education=categories,
        dwelling_size=categories,
    )


def test_build_report_context_values():
    rows = [
        IncomeTableRow("$0-$25,999", 30, 37.5),
        IncomeTableRow("$26,000 or more", 50, 62.5),
    ]
    context = runner.build_report_context(_sections(rows), high_income_threshold=156000)
    assert context["TotalHouseholds"] == "80"
    assert context["ModalIncomeBracket"] == "$26,000 or more"
    assert context["HighIncomeThreshold"] == "$156,000"
    assert context["HighIncomeShare"] == "12.50%"
    assert context["TotalPersons"] == "10"
    assert context["MedianAgeBracket"] == "15-24"
    assert context["ModalEducation"] == "b"
    assert "| $26,000 or more | 50 | 62.50% |" in context["IncomeTable"]


def test_build_report_with_bundled_extracts(tmp_path: Path):
    output = tmp_path / "site" / "index.html"
    sections = runner.build_report(output_file=output)
    html = output.read_text(encoding="utf-8")
    assert REPORT_TITLE in html
    assert html.count("<table") == 4
    assert "$104,000-$155,999" in html
    assert "$234,000 or more" in html
    assert [row.label for row in sections.income_rows][0] == "-$1 or less"
    assert sum(row.total_count for row in sections.income_rows) == 8189350
    assert sections.high_income_share == pytest.approx(22.77)


def test_compute_sections_propagates_parse_errors(tmp_path: Path):
    broken = tmp_path / "income.csv"
    text = INCOME_CSV_PATH.read_text(encoding="utf-8")
    broken.write_text(text.replace("($1-$7,799)", "($1-$7,7x99)"), encoding="utf-8")
    with pytest.raises(IncomeLabelParseError):
        runner.build_report(income_csv=broken, output_file=tmp_path / "index.html")
    assert not (tmp_path / "index.html").exists()


def test_run_from_config_reports_failure_without_writing(tmp_path: Path, caplog):
    output = tmp_path / "index.html"
    ok = runner.run_from_config(income_csv=tmp_path / "missing.csv", output_file=output)
    assert ok is False
    assert not output.exists()
    assert "Failed to generate census report" in caplog.text


def test_run_from_config_success(tmp_path: Path):
    output = tmp_path / "index.html"
    assert runner.run_from_config(output_file=output) is True
    assert output.exists()


def test_no_numeric_income_rows_writes_placeholder_page(tmp_path: Path, write_extract):
    income, _ = write_extract(
        "income.csv", ["income_label", "count"], [("Not applicable", "5")] * 23
    )
    output = tmp_path / "index.html"
    sections = runner.build_report(income_csv=income, output_file=output)
    assert sections.income_rows == []
    assert output.read_text(encoding="utf-8") == NO_DATA_HTML
