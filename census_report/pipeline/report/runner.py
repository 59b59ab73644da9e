"""Build the static census report from the four TableBuilder extracts.

This module provides the headless runner for the whole report: it loads the
extracts, computes the income table and the other summaries, fills the
narrative template and writes the final HTML page. It is intended for
programmatic invocation; the CLI in ``census_report.generate_report`` is a
thin layer over it.

Usage Examples
--------------
Typical programmatic usage with config defaults::

    from census_report.pipeline.report.runner import run_from_config
    assert run_from_config() is True

Explicit path usage::

    from pathlib import Path
    from census_report.pipeline.report.runner import run_from_config

    run_from_config(
        income_csv=Path("exports/hind_2021.csv"),
        output_file=Path("site/index.html"),
    )
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from census_report.config import (
    AGE_SEX_CSV_PATH,
    DWELLING_SIZE_CSV_PATH,
    EDUCATION_CSV_PATH,
    HIGH_INCOME_THRESHOLD,
    INCOME_CSV_PATH,
    INCOME_THRESHOLDS,
    NARRATIVE_TEMPLATE_PATH,
    OUTPUT_HTML_FILE,
    REPORT_TEMPLATE_PATH,
    REPORT_TITLE,
)
from census_report.pipeline.income import (
    IncomeTableRow,
    aggregate_buckets,
    build_income_buckets,
    income_table_frame,
    share_at_or_above,
)
from census_report.pipeline.income.aggregator import format_amount
from census_report.pipeline.summaries import (
    load_age_sex_table,
    load_dwelling_size_table,
    load_education_table,
    load_income_table,
    median_bracket,
    modal_label,
    summarise_age_by_sex,
    summarise_dwelling_size,
    summarise_education,
)

from .renderer import (
    generate_final_html,
    markdown_to_html,
    write_html_output,
    write_no_data_html,
)
from .tables import dataframe_to_markdown, format_count, format_percentage
from .templating import load_template_and_placeholders, render_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportSections:
    """Computed tables for one report run."""

    income_rows: list[IncomeTableRow]
    high_income_share: float
    age_by_sex: pd.DataFrame
    education: pd.DataFrame
    dwelling_size: pd.DataFrame


def compute_sections(
    income_csv: Path,
    age_sex_csv: Path,
    education_csv: Path,
    dwelling_csv: Path,
    thresholds: Sequence[int] = INCOME_THRESHOLDS,
    high_income_threshold: int = HIGH_INCOME_THRESHOLD,
) -> ReportSections:
    """Load every extract and compute all report tables.

    Raises
    ------
    FileNotFoundError
        If an extract is missing.
    census_report.exceptions.DataValidationError
        If an extract is malformed or an income label cannot be parsed.
    """
    buckets = build_income_buckets(load_income_table(income_csv), thresholds)
    return ReportSections(
        income_rows=aggregate_buckets(buckets),
        high_income_share=share_at_or_above(buckets, high_income_threshold),
        age_by_sex=summarise_age_by_sex(load_age_sex_table(age_sex_csv)),
        education=summarise_education(load_education_table(education_csv)),
        dwelling_size=summarise_dwelling_size(load_dwelling_size_table(dwelling_csv)),
    )


def build_report_context(
    sections: ReportSections, high_income_threshold: int = HIGH_INCOME_THRESHOLD
) -> dict[str, str]:
    """Map narrative placeholders to rendered values and Markdown tables."""
    income = income_table_frame(sections.income_rows)
    age = sections.age_by_sex
    return {
        "TotalHouseholds": format_count(income["total_count"].sum()),
        "ModalIncomeBracket": modal_label(income) or "",
        "HighIncomeThreshold": format_amount(high_income_threshold),
        "HighIncomeShare": format_percentage(sections.high_income_share),
        "IncomeTable": dataframe_to_markdown(income, label_header="Annual household income"),
        "TotalPersons": format_count(age["total_count"].sum()),
        "MedianAgeBracket": median_bracket(age) or "",
        "AgeTable": dataframe_to_markdown(age, label_header="Age"),
        "ModalEducation": modal_label(sections.education) or "",
        "EducationTable": dataframe_to_markdown(
            sections.education, label_header="Highest qualification"
        ),
        "ModalDwellingSize": modal_label(sections.dwelling_size) or "",
        "DwellingTable": dataframe_to_markdown(
            sections.dwelling_size, label_header="Persons usually resident"
        ),
    }


def render_report(
    sections: ReportSections,
    narrative_template: Path = NARRATIVE_TEMPLATE_PATH,
    page_template: Path = REPORT_TEMPLATE_PATH,
    title: str = REPORT_TITLE,
) -> str:
    """Render the full HTML page for ``sections``."""
    template_content, placeholders = load_template_and_placeholders(narrative_template)
    context = build_report_context(sections)
    unused = sorted(set(context) - set(placeholders))
    if unused:
        logger.debug("Narrative template does not use: %s", unused)
    body_markdown = render_template(template_content, context)
    return generate_final_html(markdown_to_html(body_markdown), title, page_template)


def build_report(
    income_csv: Path | None = None,
    age_sex_csv: Path | None = None,
    education_csv: Path | None = None,
    dwelling_csv: Path | None = None,
    output_file: Path | None = None,
) -> ReportSections:
    """Compute, render and write the report page.

    If any argument is ``None``, the project default from
    ``census_report.config`` is used. When the income extract has no
    numeric rows the minimal 'no data' page is written instead.

    Parameters
    ----------
    income_csv, age_sex_csv, education_csv, dwelling_csv : Path or None, optional
        TableBuilder extracts for each report section.
    output_file : Path or None, optional
        Destination of the rendered HTML page.

    Returns
    -------
    ReportSections
        The computed tables, for callers that also want to display them.

    Raises
    ------
    FileNotFoundError
        If an extract is missing.
    census_report.exceptions.AppError
        If an extract fails validation or the configuration is invalid.
    OSError
        If a template cannot be read or the page cannot be written.
    """
    income_csv = Path(income_csv) if income_csv is not None else INCOME_CSV_PATH
    age_sex_csv = Path(age_sex_csv) if age_sex_csv is not None else AGE_SEX_CSV_PATH
    education_csv = (
        Path(education_csv) if education_csv is not None else EDUCATION_CSV_PATH
    )
    dwelling_csv = (
        Path(dwelling_csv) if dwelling_csv is not None else DWELLING_SIZE_CSV_PATH
    )
    output_file = Path(output_file) if output_file is not None else OUTPUT_HTML_FILE
    sections = compute_sections(income_csv, age_sex_csv, education_csv, dwelling_csv)
    if not sections.income_rows:
        write_no_data_html(output_file)
        return sections
    write_html_output(render_report(sections), output_file)
    return sections


def run_from_config(
    income_csv: Path | None = None,
    age_sex_csv: Path | None = None,
    education_csv: Path | None = None,
    dwelling_csv: Path | None = None,
    output_file: Path | None = None,
) -> bool:
    """Generate the report page, returning ``True`` on success.

    Arguments are as for :func:`build_report`. Any failure is logged with
    its traceback and reported as ``False``; no partial page is written.

    Examples
    --------
    >>> from census_report.pipeline.report.runner import run_from_config
    >>> result = run_from_config()  # doctest: +SKIP
    >>> assert result in (True, False)  # doctest: +SKIP
    """
    try:
        build_report(income_csv, age_sex_csv, education_csv, dwelling_csv, output_file)
    except Exception:
        logger.exception("Failed to generate census report")
        return False
    return True


__all__ = [
    "ReportSections",
    "build_report",
    "build_report_context",
    "compute_sections",
    "render_report",
    "run_from_config",
]
