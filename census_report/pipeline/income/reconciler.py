"""Threshold reconciler: coarsen parsed income intervals to policy cut-points.

The census export uses finer income bands than the thresholds the report is
written against. This module merges consecutive intervals so that every
bucket edge falls on a threshold, without losing or double-counting any
household.

Runs are formed by a single grouping pass over the intervals in source
order. Each threshold places at most one cut. When some interval's low
bound equals the threshold, a new run opens at that interval; otherwise,
when some interval's high bound equals it, the open run closes after that
interval. Each run collapses into one bucket spanning its first low bound
to its last high bound.

Thresholds that match neither bound of any interval do not split anything.
They are skipped without error, which yields a coarser table than
requested; the skipped values are reported at DEBUG level.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from census_report.config import INCOME_THRESHOLDS
from census_report.exceptions import ConfigurationError, DataValidationError

from .parser import Number, ParsedInterval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciledBucket:
    """Income bucket whose edges are thresholds or open ends."""

    low: Number | None
    high: Number | None
    count: int


def validate_thresholds(thresholds: Sequence[Number]) -> frozenset[Number]:
    """Check thresholds are strictly ascending and return them as a set.

    Raises
    ------
    ConfigurationError
        If the thresholds are empty, unsorted or contain duplicates.
    """
    if not thresholds:
        raise ConfigurationError("At least one income threshold is required")
    for previous, current in zip(thresholds, thresholds[1:]):
        if current <= previous:
            raise ConfigurationError(
                "Income thresholds must be strictly ascending",
                context={"thresholds": list(thresholds)},
            )
    return frozenset(thresholds)


def check_ascending_order(intervals: Sequence[ParsedInterval]) -> None:
    """Verify the intervals are in ascending income order.

    Low bounds must be non-decreasing. Only the first interval may have an
    open low bound and only the last an open high bound.

    Raises
    ------
    DataValidationError
        If the export rows are out of order.
    """
    last = len(intervals) - 1
    previous_low: Number | None = None
    for position, interval in enumerate(intervals):
        if interval.low is None and interval.high is None:
            raise DataValidationError(
                "Income interval has neither a low nor a high bound",
                context={"position": position},
            )
        if interval.low is None and position != 0:
            raise DataValidationError(
                "Only the first income interval may be open below",
                context={"position": position, "high": interval.high},
            )
        if interval.high is None and position != last:
            raise DataValidationError(
                "Only the last income interval may be open above",
                context={"position": position, "low": interval.low},
            )
        if interval.low is not None:
            if previous_low is not None and interval.low < previous_low:
                raise DataValidationError(
                    "Income rows are not in ascending order",
                    context={
                        "position": position,
                        "low": interval.low,
                        "previous_low": previous_low,
                    },
                )
            previous_low = interval.low


def is_boundary_row(interval: ParsedInterval, thresholds: Iterable[Number]) -> bool:
    """Return True if either bound of ``interval`` is a threshold value."""
    threshold_set = set(thresholds)
    return interval.low in threshold_set or interval.high in threshold_set


def partition_runs(
    intervals: Sequence[ParsedInterval], thresholds: Iterable[Number]
) -> list[list[ParsedInterval]]:
    """Group consecutive intervals into runs whose edges fall on thresholds.

    A run opens at an interval whose low bound is a threshold. A threshold
    that is no interval's low bound but is some interval's high bound closes
    the run after that interval instead.

    Examples
    --------
    >>> rows = [
    ...     ParsedInterval(None, -1, 5),
    ...     ParsedInterval(0, 0, 10),
    ...     ParsedInterval(1, 12999, 50),
    ...     ParsedInterval(78000, None, 20),
    ... ]
    >>> [len(run) for run in partition_runs(rows, [0, 78000])]
    [1, 2, 1]
    """
    threshold_set = set(thresholds)
    low_matches = {interval.low for interval in intervals} & threshold_set
    cuts = {
        position
        for position, interval in enumerate(intervals)
        if interval.low in threshold_set
    }
    cuts |= {
        position + 1
        for position, interval in enumerate(intervals)
        if interval.high in threshold_set and interval.high not in low_matches
    }
    runs: list[list[ParsedInterval]] = []
    for position, interval in enumerate(intervals):
        if not runs or position in cuts:
            runs.append([interval])
        else:
            runs[-1].append(interval)
    return runs


def unmatched_thresholds(
    intervals: Sequence[ParsedInterval], thresholds: Iterable[Number]
) -> list[Number]:
    """Return the thresholds that no interval bound coincides with."""
    edges = {interval.low for interval in intervals} | {
        interval.high for interval in intervals
    }
    return [threshold for threshold in thresholds if threshold not in edges]


def merge_run(run: Sequence[ParsedInterval]) -> ReconciledBucket:
    """Collapse one run of intervals into a single bucket."""
    return ReconciledBucket(
        low=run[0].low,
        high=run[-1].high,
        count=sum(interval.count for interval in run),
    )


def reconcile_intervals(
    intervals: Sequence[ParsedInterval],
    thresholds: Sequence[Number] = INCOME_THRESHOLDS,
) -> list[ReconciledBucket]:
    """Re-bucket parsed intervals so their edges fall on ``thresholds``.

    Parameters
    ----------
    intervals : Sequence[ParsedInterval]
        Intervals in source (ascending income) order.
    thresholds : Sequence[Number], optional
        Strictly ascending cut-points. Defaults to ``INCOME_THRESHOLDS``.

    Returns
    -------
    list[ReconciledBucket]
        Buckets in ascending order. Their counts sum to the input counts.

    Raises
    ------
    ConfigurationError
        If ``thresholds`` is not strictly ascending.
    DataValidationError
        If ``intervals`` are not in ascending order.
    """
    threshold_set = validate_thresholds(thresholds)
    check_ascending_order(intervals)
    skipped = unmatched_thresholds(intervals, thresholds)
    if skipped:
        logger.debug("Thresholds absent from the data: %s", skipped)
    buckets = [merge_run(run) for run in partition_runs(intervals, threshold_set)]
    logger.debug(
        "Reconciled %d income intervals (%d on a threshold) into %d buckets",
        len(intervals),
        sum(is_boundary_row(interval, threshold_set) for interval in intervals),
        len(buckets),
    )
    return buckets
