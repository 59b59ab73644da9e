"""Format summary DataFrames as Markdown tables.

Counts get thousands separators and percentages a fixed number of decimals
with a trailing ``%``. The tables are later converted to HTML together with
the narrative by markdown2.
"""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from census_report.config import PERCENTAGE_DECIMALS

DEFAULT_HEADERS: dict[str, str] = {
    "label": "Category",
    "male": "Male",
    "female": "Female",
    "total_count": "Total",
    "percentage": "Share",
}


def format_count(value: float) -> str:
    """Format a count with thousands separators (``12345`` -> ``'12,345'``)."""
    return f"{int(value):,}"


def format_percentage(value: float, decimals: int = PERCENTAGE_DECIMALS) -> str:
    """Format an already rounded percentage (``12.5`` -> ``'12.50%'``)."""
    return f"{value:.{decimals}f}%"


def _format_cell(column: str, value: object) -> str:
    if column == "percentage":
        return format_percentage(float(value))
    if column == "label":
        return str(value).replace("|", "\\|")
    return format_count(float(value))


def dataframe_to_markdown(
    dataframe: pd.DataFrame,
    headers: Mapping[str, str] = DEFAULT_HEADERS,
    label_header: str | None = None,
) -> str:
    """Render ``dataframe`` as a pipe table.

    Parameters
    ----------
    dataframe : pd.DataFrame
        Summary with a ``label`` column, count columns and ``percentage``.
    headers : Mapping[str, str], optional
        Display names for known columns; unknown columns keep their name.
    label_header : str or None, optional
        Overrides the header of the ``label`` column.

    Returns
    -------
    str
        Markdown table text ending with a newline. Numeric columns are
        right-aligned.

    Examples
    --------
    >>> frame = pd.DataFrame({"label": ["A"], "total_count": [1200], "percentage": [100.0]})
    >>> print(dataframe_to_markdown(frame), end="")
    | Category | Total | Share |
    | :--- | ---: | ---: |
    | A | 1,200 | 100.00% |
    """
    columns = list(dataframe.columns)
    titles = [headers.get(column, column) for column in columns]
    if label_header is not None and "label" in columns:
        titles[columns.index("label")] = label_header
    alignment = [":---" if column == "label" else "---:" for column in columns]
    lines = [
        "| " + " | ".join(titles) + " |",
        "| " + " | ".join(alignment) + " |",
    ]
    for record in dataframe.itertuples(index=False):
        cells = [_format_cell(column, value) for column, value in zip(columns, record)]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines) + "\n"
