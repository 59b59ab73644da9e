"""Command line entry point: generate the static census report.

Loads the four TableBuilder extracts, writes the HTML report and prints the
reconciled income table to the terminal.

Usage
-----
python -m census_report.generate_report --income-csv ... --output ... [--log-level ...]
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

from census_report.config import (
    AGE_SEX_CSV_PATH,
    DWELLING_SIZE_CSV_PATH,
    EDUCATION_CSV_PATH,
    INCOME_CSV_PATH,
    LOG_DIR,
    LOG_FILENAME_GENERATE_REPORT,
    LOG_FORMAT,
    OUTPUT_HTML_FILE,
)
from census_report.exceptions import AppError
from census_report.pipeline.income import IncomeTableRow
from census_report.pipeline.report import build_report
from census_report.pipeline.report.tables import format_count, format_percentage

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure console and optional file logging for a report run.

    Clears existing root handlers, then installs a stream handler and, when
    ``enable_file`` is set, a file handler under ``LOG_DIR``. Safe to call
    repeatedly.

    Parameters
    ----------
    log_level : str, optional
        The logging level name (e.g. "INFO", "DEBUG"). Defaults to "INFO".
    enable_file : bool, optional
        Whether to also append to ``LOG_DIR / LOG_FILENAME_GENERATE_REPORT``.
        If the log directory cannot be created, console logging is kept and
        a warning is emitted.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0,
                logging.FileHandler(LOG_DIR / LOG_FILENAME_GENERATE_REPORT, mode="a"),
            )
        except OSError as exc:
            file_error = exc
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning("File logging disabled: %s", file_error)


def income_summary_table(rows: list[IncomeTableRow]) -> Table:
    """Build a rich table of the reconciled income buckets."""
    table = Table(title="Households by annual income")
    table.add_column("Annual household income")
    table.add_column("Households", justify="right")
    table.add_column("Share", justify="right")
    for row in rows:
        table.add_row(
            row.label, format_count(row.total_count), format_percentage(row.percentage)
        )
    return table


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional argv to parse. When ``None`` the real CLI args are used.
    """
    parser = argparse.ArgumentParser(
        description="Generate a static HTML report from ABS census extracts."
    )
    parser.add_argument("--income-csv", type=Path, default=INCOME_CSV_PATH)
    parser.add_argument("--age-sex-csv", type=Path, default=AGE_SEX_CSV_PATH)
    parser.add_argument("--education-csv", type=Path, default=EDUCATION_CSV_PATH)
    parser.add_argument("--dwelling-csv", type=Path, default=DWELLING_SIZE_CSV_PATH)
    parser.add_argument("--output", type=Path, default=OUTPUT_HTML_FILE)
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument(
        "--quiet", action="store_true", help="Do not print the income table"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for report generation.

    Returns
    -------
    int
        Process exit status: 0 on success, 1 if the report could not be built.
    """
    args = parse_cli_args(argv)
    configure_logging(
        args.log_level, enable_file=not bool(os.environ.get("DISABLE_FILE_LOGS"))
    )
    try:
        sections = build_report(
            income_csv=args.income_csv,
            age_sex_csv=args.age_sex_csv,
            education_csv=args.education_csv,
            dwelling_csv=args.dwelling_csv,
            output_file=args.output,
        )
    except (AppError, OSError):
        logger.exception("Failed to generate census report")
        return 1
    if not args.quiet and sections.income_rows:
        Console().print(income_summary_table(sections.income_rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
