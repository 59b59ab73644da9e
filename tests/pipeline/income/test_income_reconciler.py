"""Tests for reconciling parsed income intervals onto thresholds."""

import logging

import pytest

from census_report.exceptions import ConfigurationError, DataValidationError
from census_report.pipeline.income.parser import ParsedInterval
from census_report.pipeline.income.reconciler import (
    ReconciledBucket,
    check_ascending_order,
    is_boundary_row,
    partition_runs,
    reconcile_intervals,
    unmatched_thresholds,
    validate_thresholds,
)

SCENARIO = [
    ParsedInterval(None, -1, 5),
    ParsedInterval(0, 0, 10),
    ParsedInterval(1, 12999, 50),
    ParsedInterval(78000, None, 20),
]

FULL_EXPORT = [
    ParsedInterval(None, -1, 10714),
    ParsedInterval(0, 0, 121853),
    ParsedInterval(1, 7799, 52487),
    ParsedInterval(7800, 15599, 117340),
    ParsedInterval(15600, 20799, 245068),
    ParsedInterval(20800, 25999, 374395),
    ParsedInterval(26000, 33799, 470182),
    ParsedInterval(33800, 41599, 468990),
    ParsedInterval(41600, 51999, 597606),
    ParsedInterval(52000, 64999, 625174),
    ParsedInterval(65000, 77999, 565718),
    ParsedInterval(78000, 90999, 577812),
    ParsedInterval(91000, 103999, 502934),
    ParsedInterval(104000, 129999, 910456),
    ParsedInterval(130000, 155999, 684031),
    ParsedInterval(156000, 181999, 507712),
    ParsedInterval(182000, 207999, 344507),
    ParsedInterval(208000, 233999, 225916),
    ParsedInterval(234000, None, 786455),
]
THRESHOLDS = (0, 26000, 52000, 78000, 104000, 156000, 234000)


def test_worked_scenario():
    out = reconcile_intervals(SCENARIO, [0, 78000])
    assert out == [
        ReconciledBucket(None, -1, 5),
        ReconciledBucket(0, 12999, 60),
        ReconciledBucket(78000, None, 20),
    ]
    assert sum(b.count for b in out) == 85


def test_full_export_aligns_every_inner_edge_to_a_threshold():
    out = reconcile_intervals(FULL_EXPORT, THRESHOLDS)
    assert [(b.low, b.high) for b in out] == [
        (None, -1),
        (0, 25999),
        (26000, 51999),
        (52000, 77999),
        (78000, 103999),
        (104000, 155999),
        (156000, 233999),
        (234000, None),
    ]
    for bucket in out[1:]:
        assert bucket.low in THRESHOLDS


def test_conservation_of_counts():
    out = reconcile_intervals(FULL_EXPORT, THRESHOLDS)
    assert sum(b.count for b in out) == sum(i.count for i in FULL_EXPORT)


def test_buckets_are_ascending_and_contiguous():
    out = reconcile_intervals(FULL_EXPORT, THRESHOLDS)
    lows = [b.low for b in out[1:]]
    assert lows == sorted(lows)
    for previous, current in zip(out, out[1:]):
        assert current.low == previous.high + 1


def test_absent_threshold_is_skipped_giving_coarser_buckets():
    out = reconcile_intervals(SCENARIO, [0, 50000, 78000])
    assert len(out) == 3
    assert out[1] == ReconciledBucket(0, 12999, 60)


def test_absent_thresholds_are_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="census_report.pipeline.income.reconciler"):
        reconcile_intervals(SCENARIO, [0, 50000, 78000])
    assert "50000" in caplog.text


def test_no_matching_threshold_collapses_to_single_bucket():
    out = reconcile_intervals(SCENARIO, [123456])
    assert out == [ReconciledBucket(None, None, 85)]


def test_single_row_run_passes_through_unchanged():
    rows = [ParsedInterval(0, 99, 1), ParsedInterval(100, 199, 2), ParsedInterval(200, None, 3)]
    out = reconcile_intervals(rows, [0, 100, 200])
    assert out == [
        ReconciledBucket(0, 99, 1),
        ReconciledBucket(100, 199, 2),
        ReconciledBucket(200, None, 3),
    ]


def test_empty_input_gives_no_buckets():
    assert reconcile_intervals([], THRESHOLDS) == []


def test_is_boundary_row_checks_both_bounds():
    assert is_boundary_row(ParsedInterval(0, 5, 1), [0])
    assert is_boundary_row(ParsedInterval(1, 25999, 1), [25999])
    assert not is_boundary_row(ParsedInterval(1, 7799, 1), [0, 26000])
    assert not is_boundary_row(ParsedInterval(None, -1, 1), [0])


def test_partition_runs_groups_in_source_order():
    runs = partition_runs(SCENARIO, {0, 78000})
    assert runs == [[SCENARIO[0]], SCENARIO[1:3], [SCENARIO[3]]]


def test_unmatched_thresholds():
    assert unmatched_thresholds(SCENARIO, [0, 26000, 78000]) == [26000]


@pytest.mark.parametrize("thresholds", [[], [10, 5], [5, 5]])
def test_invalid_thresholds_raise(thresholds):
    with pytest.raises(ConfigurationError):
        validate_thresholds(thresholds)


def test_descending_rows_are_rejected():
    rows = [ParsedInterval(100, 199, 1), ParsedInterval(0, 99, 1)]
    with pytest.raises(DataValidationError):
        reconcile_intervals(rows, [0, 100])


def test_open_low_bound_only_first():
    rows = [ParsedInterval(0, 99, 1), ParsedInterval(None, 199, 1)]
    with pytest.raises(DataValidationError):
        check_ascending_order(rows)


def test_open_high_bound_only_last():
    rows = [ParsedInterval(0, None, 1), ParsedInterval(100, 199, 1)]
    with pytest.raises(DataValidationError):
        check_ascending_order(rows)


def test_interval_without_bounds_is_rejected():
    with pytest.raises(DataValidationError):
        check_ascending_order([ParsedInterval(None, None, 1)])


def test_equal_low_bounds_are_allowed():
    check_ascending_order([ParsedInterval(0, 0, 1), ParsedInterval(0, 10, 1)])


HIGH_EDGE_ROWS = [
    ParsedInterval(0, 0, 1),
    ParsedInterval(1, 12999, 2),
    ParsedInterval(13000, 20000, 3),
    ParsedInterval(20001, None, 4),
]


def test_threshold_on_high_bound_closes_the_run():
    out = reconcile_intervals(HIGH_EDGE_ROWS, [0, 12999])
    assert out == [
        ReconciledBucket(0, 12999, 3),
        ReconciledBucket(13000, None, 7),
    ]
    assert unmatched_thresholds(HIGH_EDGE_ROWS, [0, 12999]) == []


def test_threshold_matching_low_bound_takes_precedence_over_high():
    # 0 is both the high of the Nil row and its low; the cut falls before it.
    runs = partition_runs(SCENARIO, {0})
    assert runs == [[SCENARIO[0]], SCENARIO[1:]]


def test_high_bound_threshold_on_last_row_adds_no_empty_run():
    rows = [ParsedInterval(0, 99, 1), ParsedInterval(100, 199, 2)]
    assert reconcile_intervals(rows, [0, 199]) == [ReconciledBucket(0, 199, 3)]


def test_every_inner_edge_is_a_threshold_when_all_are_matched():
    thresholds = [0, 12999, 20001]
    out = reconcile_intervals(HIGH_EDGE_ROWS, thresholds)
    for previous, current in zip(out, out[1:]):
        assert current.low in thresholds or previous.high in thresholds
