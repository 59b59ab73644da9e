"""Global configuration constants for the census report.

Defines paths, CSV layouts of the ABS TableBuilder extracts, income
thresholds and category mappings used across the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
PACKAGE_DIR: Path = PROJECT_ROOT / "census_report"
DATA_DIR: Path = PROJECT_ROOT / "data"
LOG_DIR: Path = PROJECT_ROOT / "logs"
TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"


@dataclass(frozen=True)
class TableLayout:
    """Fixed position of the data block inside an ABS TableBuilder export.

    ``skiprows`` counts the preamble lines (title, dataset, filters and the
    column header row); ``nrows`` the data rows that follow, including the
    trailing ``Total`` row.
    """

    skiprows: int
    nrows: int
    names: tuple[str, ...]


# Input extracts
INCOME_CSV_PATH: Path = DATA_DIR / "household_income.csv"
AGE_SEX_CSV_PATH: Path = DATA_DIR / "age_by_sex.csv"
EDUCATION_CSV_PATH: Path = DATA_DIR / "education.csv"
DWELLING_SIZE_CSV_PATH: Path = DATA_DIR / "dwelling_size.csv"

INCOME_LAYOUT = TableLayout(skiprows=10, nrows=23, names=("income_label", "count"))
AGE_SEX_LAYOUT = TableLayout(
    skiprows=10, nrows=102, names=("age_label", "male", "female", "persons")
)
EDUCATION_LAYOUT = TableLayout(
    skiprows=10, nrows=12, names=("education_label", "count")
)
DWELLING_SIZE_LAYOUT = TableLayout(
    skiprows=10, nrows=10, names=("dwelling_label", "count")
)

# Income reconciliation
INCOME_THRESHOLDS: tuple[int, ...] = (0, 26000, 52000, 78000, 104000, 156000, 234000)
INCOME_LABEL_SUBSTITUTIONS: dict[str, str] = {
    "Negative income": "less than $0 ($-1 or less)",
    "Nil income": "$0 ($0-$0)",
}
HIGH_INCOME_THRESHOLD: int = 156000

# Other summaries: (label, lower bound inclusive); the last bracket is open
AGE_BRACKETS: tuple[tuple[str, int], ...] = (
    ("0-14", 0),
    ("15-24", 15),
    ("25-44", 25),
    ("45-64", 45),
    ("65-84", 65),
    ("85 and over", 85),
)

EDUCATION_CATEGORIES: dict[str, str] = {
    "Postgraduate Degree Level": "Postgraduate",
    "Graduate Diploma and Graduate Certificate Level": "Postgraduate",
    "Bachelor Degree Level": "Bachelor degree",
    "Advanced Diploma and Diploma Level": "Diploma",
    "Certificate III & IV Level": "Certificate",
    "Certificate I & II Level": "Certificate",
    "Secondary Education - Years 10 and above": "Secondary",
    "Secondary Education - Years 9 and below": "Secondary",
}

DWELLING_SIZE_CATEGORIES: dict[str, str] = {
    "One person": "1",
    "Two persons": "2",
    "Three persons": "3",
    "Four persons": "4",
    "Five persons": "5 or more",
    "Six persons": "5 or more",
    "Seven persons": "5 or more",
    "Eight or more persons": "5 or more",
}

# Formatting
PERCENTAGE_DECIMALS: int = 2
MISSING_DATA_PLACEHOLDER: str = "[Data not available]"

# Report generation
REPORT_TITLE: str = "Census 2021: Households and People"
REPORT_TEMPLATE_PATH: Path = TEMPLATES_DIR / "report_template.html"
NARRATIVE_TEMPLATE_PATH: Path = TEMPLATES_DIR / "report_narrative.md"
OUTPUT_HTML_FILE: Path = PROJECT_ROOT / "output" / "index.html"
NO_DATA_HTML: str = "<html><body><h1>No census data available</h1></body></html>"

# Logging
LOG_FILENAME_GENERATE_REPORT: str = "generate_report.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
