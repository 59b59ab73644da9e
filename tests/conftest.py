"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides ``write_extract`` for building TableBuilder-style CSV files.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from census_report.config import TableLayout  # noqa: E402

PREAMBLE_LINES = [
    '"Australian Bureau of Statistics"',
    '"Census of Population and Housing, 2021, TableBuilder"',
    '"Test extract"',
    '"Counting: Households Location on Census Night"',
    '"Filters:"',
    '"Default Summation","Households Location on Census Night"',
    '"Geography: Australia"',
    '"Data Source: Census of Population and Housing, 2021"',
    '"INFO","Cells in this table have been randomly adjusted."',
]
FOOTER_LINES = ['"Data Source: Census of Population and Housing, 2021"', '"Copyright"']


def _quote(value: object) -> str:
    return '"' + str(value) + '"'


@pytest.fixture
def write_extract(tmp_path: Path):
    """Return a factory writing rows as a TableBuilder export.

    The factory returns ``(path, layout)`` where the layout matches the
    written preamble and row count.
    """

    def factory(name: str, header: list[str], rows: list[tuple]) -> tuple[Path, TableLayout]:
        lines = PREAMBLE_LINES + [",".join(_quote(h) for h in header)]
        lines += [",".join(_quote(value) for value in row) for row in rows]
        lines += FOOTER_LINES
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        layout = TableLayout(
            skiprows=len(PREAMBLE_LINES) + 1, nrows=len(rows), names=tuple(header)
        )
        return path, layout

    return factory
