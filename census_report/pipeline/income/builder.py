"""Run the income pipeline end to end on a loaded extract.

Chains parser, reconciler and aggregator over the ``(income_label, count)``
frame returned by :func:`census_report.pipeline.summaries.data_loader.load_income_table`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import pandas as pd

from census_report.config import INCOME_LABEL_SUBSTITUTIONS, INCOME_THRESHOLDS

from .aggregator import IncomeTableRow, aggregate_buckets
from .parser import Number, RawIncomeRow, parse_income_rows
from .reconciler import ReconciledBucket, reconcile_intervals

logger = logging.getLogger(__name__)


def raw_rows_from_frame(dataframe: pd.DataFrame) -> list[RawIncomeRow]:
    """Convert the loaded income frame into :class:`RawIncomeRow` records."""
    return [
        RawIncomeRow(label=str(label), count=int(count))
        for label, count in zip(dataframe["income_label"], dataframe["count"])
    ]


def build_income_buckets(
    dataframe: pd.DataFrame,
    thresholds: Sequence[Number] = INCOME_THRESHOLDS,
    substitutions: Mapping[str, str] = INCOME_LABEL_SUBSTITUTIONS,
) -> list[ReconciledBucket]:
    """Parse and reconcile the income extract, returning the buckets.

    Returns an empty list if the extract has no numeric income rows.
    """
    raw_rows = raw_rows_from_frame(dataframe)
    intervals = parse_income_rows(raw_rows, substitutions)
    if not intervals:
        logger.warning("Income extract contains no numeric income rows")
        return []
    buckets = reconcile_intervals(intervals, thresholds)
    logger.info(
        "Income table: %d export rows, %d intervals, %d buckets, %d households",
        len(raw_rows),
        len(intervals),
        len(buckets),
        sum(bucket.count for bucket in buckets),
    )
    return buckets


def build_income_table(
    dataframe: pd.DataFrame,
    thresholds: Sequence[Number] = INCOME_THRESHOLDS,
    substitutions: Mapping[str, str] = INCOME_LABEL_SUBSTITUTIONS,
) -> list[IncomeTableRow]:
    """Parse, reconcile and aggregate the household income extract.

    Parameters
    ----------
    dataframe : pd.DataFrame
        Frame with ``income_label`` and ``count`` columns in export order.
    thresholds : Sequence[Number], optional
        Strictly ascending income cut-points.
    substitutions : Mapping[str, str], optional
        Literal label rewrites applied before parsing.

    Returns
    -------
    list[IncomeTableRow]
        Display rows in ascending income order; empty if no row is numeric.

    Raises
    ------
    census_report.exceptions.IncomeLabelParseError
        If a numeric label cannot be parsed.
    census_report.exceptions.DataValidationError
        If the rows are not in ascending income order.
    """
    return aggregate_buckets(build_income_buckets(dataframe, thresholds, substitutions))
