"""Loaders for ABS TableBuilder CSV extracts.

TableBuilder exports wrap the data block in a preamble (title, dataset,
filters, column header) and a footer (source and copyright lines). The
position of the block is fixed for each extract and described by a
:class:`census_report.config.TableLayout`, so loading is a matter of
skipping the preamble, reading exactly ``nrows`` rows and validating that
every count column is numeric.

Missing files propagate as ``FileNotFoundError``; anything that reads but
does not look like the expected extract raises ``DataValidationError``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from census_report.config import (
    AGE_SEX_CSV_PATH,
    AGE_SEX_LAYOUT,
    DWELLING_SIZE_CSV_PATH,
    DWELLING_SIZE_LAYOUT,
    EDUCATION_CSV_PATH,
    EDUCATION_LAYOUT,
    INCOME_CSV_PATH,
    INCOME_LAYOUT,
    TableLayout,
)
from census_report.exceptions import DataValidationError

logger = logging.getLogger(__name__)


def load_abs_table(csv_path: Path, layout: TableLayout) -> pd.DataFrame:
    """Read the data block of a TableBuilder export.

    The first column of ``layout.names`` is the label column; all others are
    counts and are converted to integers.

    Parameters
    ----------
    csv_path : Path
        Path to the comma-delimited export.
    layout : TableLayout
        Preamble length, data row count and column names.

    Returns
    -------
    pd.DataFrame
        One row per non-blank label, columns ``layout.names``.

    Raises
    ------
    FileNotFoundError
        If ``csv_path`` does not exist.
    DataValidationError
        If the block has too few columns or a count is not a non-negative
        number.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Census extract not found: {csv_path}")
    names = list(layout.names)
    try:
        dataframe = pd.read_csv(
            csv_path,
            skiprows=layout.skiprows,
            nrows=layout.nrows,
            header=None,
            names=names,
            usecols=list(range(len(names))),
            dtype={names[0]: str},
            thousands=",",
            skip_blank_lines=False,
        )
    except (ValueError, pd.errors.ParserError) as exc:
        raise DataValidationError(
            f"Cannot read census extract {csv_path.name}: {exc}",
            context={"path": str(csv_path)},
        ) from exc

    label_column, count_columns = names[0], names[1:]
    dataframe[label_column] = dataframe[label_column].fillna("").str.strip()
    dataframe = dataframe[dataframe[label_column] != ""].reset_index(drop=True)
    for column in count_columns:
        values = dataframe[column]
        if values.dtype == object:
            values = values.str.replace(",", "", regex=False)
        numeric = pd.to_numeric(values, errors="coerce")
        if numeric.isna().any():
            bad_labels = dataframe.loc[numeric.isna(), label_column].tolist()
            raise DataValidationError(
                f"Non-numeric counts in column {column!r} of {csv_path.name}",
                context={"path": str(csv_path), "labels": bad_labels},
            )
        if (numeric < 0).any():
            bad_labels = dataframe.loc[numeric < 0, label_column].tolist()
            raise DataValidationError(
                f"Negative counts in column {column!r} of {csv_path.name}",
                context={"path": str(csv_path), "labels": bad_labels},
            )
        dataframe[column] = numeric.astype(int)
    logger.debug("Loaded %d rows from %s", len(dataframe), csv_path)
    return dataframe


def load_income_table(csv_path: Path = INCOME_CSV_PATH) -> pd.DataFrame:
    """Load the total household income (weekly) extract."""
    return load_abs_table(csv_path, INCOME_LAYOUT)


def load_age_sex_table(csv_path: Path = AGE_SEX_CSV_PATH) -> pd.DataFrame:
    """Load the single-year age by sex extract."""
    return load_abs_table(csv_path, AGE_SEX_LAYOUT)


def load_education_table(csv_path: Path = EDUCATION_CSV_PATH) -> pd.DataFrame:
    """Load the highest educational attainment extract."""
    return load_abs_table(csv_path, EDUCATION_LAYOUT)


def load_dwelling_size_table(csv_path: Path = DWELLING_SIZE_CSV_PATH) -> pd.DataFrame:
    """Load the number of persons usually resident extract."""
    return load_abs_table(csv_path, DWELLING_SIZE_LAYOUT)
