"""Group-by-sum-percentage summaries for the non-income report sections.

Each summary maps raw census labels onto a short list of reporting
categories, sums counts per category and adds the category's share of the
total. Labels without a category (not stated, not applicable, totals) are
excluded before the total is taken.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence

import pandas as pd

from census_report.config import (
    AGE_BRACKETS,
    DWELLING_SIZE_CATEGORIES,
    EDUCATION_CATEGORIES,
)
from census_report.pipeline.income.aggregator import share_of_total

logger = logging.getLogger(__name__)

_LEADING_AGE = re.compile(r"^(\d+)")


def parse_age_label(label: str) -> int | None:
    """Return the age in years for labels like ``"42"`` or ``"100 years and over"``.

    >>> parse_age_label("100 years and over")
    100
    >>> parse_age_label("Total") is None
    True
    """
    match = _LEADING_AGE.match(str(label).strip())
    return int(match.group(1)) if match else None


def add_percentages(dataframe: pd.DataFrame, count_column: str = "total_count") -> pd.DataFrame:
    """Return a copy of ``dataframe`` with a rounded ``percentage`` column."""
    result = dataframe.copy()
    total = result[count_column].sum()
    result["percentage"] = [share_of_total(count, total) for count in result[count_column]]
    return result


def summarise_categories(
    dataframe: pd.DataFrame,
    label_column: str,
    categories: Mapping[str, str],
) -> pd.DataFrame:
    """Sum ``count`` per category and add percentages.

    Categories appear in the order of their first occurrence in
    ``categories``; categories with no rows are reported with a zero count.

    Returns
    -------
    pd.DataFrame
        Columns ``label``, ``total_count``, ``percentage``.
    """
    mapped = dataframe.assign(label=dataframe[label_column].map(categories))
    excluded = mapped.loc[mapped["label"].isna(), label_column].tolist()
    if excluded:
        logger.debug("Excluded uncategorised rows: %s", excluded)
    order = list(dict.fromkeys(categories.values()))
    grouped = (
        mapped.dropna(subset=["label"])
        .groupby("label")["count"]
        .sum()
        .reindex(order, fill_value=0)
        .rename("total_count")
        .reset_index()
    )
    grouped["total_count"] = grouped["total_count"].astype(int)
    return add_percentages(grouped)


def summarise_education(
    dataframe: pd.DataFrame, categories: Mapping[str, str] = EDUCATION_CATEGORIES
) -> pd.DataFrame:
    """Summarise highest educational attainment into broad levels."""
    return summarise_categories(dataframe, "education_label", categories)


def summarise_dwelling_size(
    dataframe: pd.DataFrame, categories: Mapping[str, str] = DWELLING_SIZE_CATEGORIES
) -> pd.DataFrame:
    """Summarise households by number of usual residents."""
    return summarise_categories(dataframe, "dwelling_label", categories)


def summarise_age_by_sex(
    dataframe: pd.DataFrame,
    brackets: Sequence[tuple[str, int]] = AGE_BRACKETS,
) -> pd.DataFrame:
    """Bucket single-year ages into brackets and sum by sex.

    Parameters
    ----------
    dataframe : pd.DataFrame
        Columns ``age_label``, ``male``, ``female``, ``persons``.
    brackets : Sequence[tuple[str, int]], optional
        ``(label, lower bound)`` pairs in ascending order; the last bracket
        has no upper bound.

    Returns
    -------
    pd.DataFrame
        Columns ``label``, ``male``, ``female``, ``total_count`` and
        ``percentage`` (persons share), one row per bracket.
    """
    labels = [label for label, _ in brackets]
    edges = [lower for _, lower in brackets] + [float("inf")]
    ages = dataframe.assign(age=dataframe["age_label"].map(parse_age_label))
    ages = ages.dropna(subset=["age"]).astype({"age": int})
    ages = ages.assign(label=pd.cut(ages["age"], bins=edges, labels=labels, right=False))
    grouped = (
        ages.groupby("label", observed=False)[["male", "female", "persons"]]
        .sum()
        .reindex(labels, fill_value=0)
        .rename(columns={"persons": "total_count"})
        .reset_index()
    )
    grouped["label"] = grouped["label"].astype(str)
    for column in ("male", "female", "total_count"):
        grouped[column] = grouped[column].astype(int)
    return add_percentages(grouped)


def median_bracket(summary: pd.DataFrame) -> str | None:
    """Return the label of the bracket containing the median person."""
    total = summary["total_count"].sum()
    if not total:
        return None
    cumulative = summary["total_count"].cumsum()
    position = int((cumulative >= total / 2).to_numpy().argmax())
    return str(summary["label"].iloc[position])


def modal_label(summary: pd.DataFrame) -> str | None:
    """Return the label with the largest count, or ``None`` when empty."""
    if summary.empty:
        return None
    return str(summary.loc[summary["total_count"].idxmax(), "label"])
