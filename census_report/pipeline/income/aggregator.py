"""Aggregate reconciled income buckets into display rows.

Computes each bucket's share of all households and renders its range as a
currency label. Percentages are rounded with :func:`round_percentage`, the
same routine every other report section uses.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

from census_report.config import PERCENTAGE_DECIMALS

from .parser import Number
from .reconciler import ReconciledBucket


@dataclass(frozen=True)
class IncomeTableRow:
    """One line of the rendered income table."""

    label: str
    total_count: int
    percentage: float


def round_percentage(value: float, decimals: int = PERCENTAGE_DECIMALS) -> float:
    """Round half up to ``decimals`` places.

    Examples
    --------
    >>> round_percentage(12.345)
    12.35
    >>> round_percentage(0.125, 2)
    0.13
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def share_of_total(count: float, total: float) -> float:
    """Return ``count`` as a rounded percentage of ``total`` (0.0 if empty)."""
    if not total:
        return 0.0
    return round_percentage(100 * count / total)


def format_amount(amount: Number) -> str:
    """Format a dollar amount with thousands separators.

    >>> format_amount(52000)
    '$52,000'
    >>> format_amount(-1)
    '-$1'
    """
    sign = "-" if amount < 0 else ""
    magnitude = abs(amount)
    if isinstance(magnitude, float) and magnitude.is_integer():
        magnitude = int(magnitude)
    return f"{sign}${magnitude:,}"


def format_bucket_label(bucket: ReconciledBucket) -> str:
    """Render a bucket's range for display.

    >>> format_bucket_label(ReconciledBucket(None, -1, 5))
    '-$1 or less'
    >>> format_bucket_label(ReconciledBucket(78000, None, 20))
    '$78,000 or more'
    >>> format_bucket_label(ReconciledBucket(0, 12999, 60))
    '$0-$12,999'
    """
    if bucket.low is None and bucket.high is None:
        return "All incomes"
    if bucket.low is None:
        return f"{format_amount(bucket.high)} or less"
    if bucket.high is None:
        return f"{format_amount(bucket.low)} or more"
    return f"{format_amount(bucket.low)}-{format_amount(bucket.high)}"


def aggregate_buckets(buckets: Sequence[ReconciledBucket]) -> list[IncomeTableRow]:
    """Turn buckets into labelled rows with their percentage of the total.

    Row order follows ``buckets``, which is ascending income order.
    """
    total = sum(bucket.count for bucket in buckets)
    return [
        IncomeTableRow(
            label=format_bucket_label(bucket),
            total_count=bucket.count,
            percentage=share_of_total(bucket.count, total),
        )
        for bucket in buckets
    ]


def share_at_or_above(buckets: Sequence[ReconciledBucket], threshold: Number) -> float:
    """Percentage of households in buckets starting at or above ``threshold``.

    Only whole buckets count, so a threshold that is not a bucket edge gives
    the share from the next edge up.
    """
    total = sum(bucket.count for bucket in buckets)
    above = sum(
        bucket.count
        for bucket in buckets
        if bucket.low is not None and bucket.low >= threshold
    )
    return share_of_total(above, total)


def income_table_frame(rows: Sequence[IncomeTableRow]) -> pd.DataFrame:
    """Return the rows as a DataFrame with ``label``, ``total_count``, ``percentage``."""
    return pd.DataFrame(
        [(row.label, row.total_count, row.percentage) for row in rows],
        columns=["label", "total_count", "percentage"],
    )
