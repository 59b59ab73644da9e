"""Income bucket reconciliation pipeline.

Parses ABS household income labels into annual intervals, merges them onto
fixed policy thresholds and aggregates the result into display rows. All
logic lives in the submodules; this initialiser only defines the public
surface.

Examples
--------
>>> from census_report.pipeline.income import build_income_table
>>> rows = build_income_table(income_frame)  # doctest: +SKIP
"""

from .aggregator import (
    IncomeTableRow,
    aggregate_buckets,
    format_bucket_label,
    income_table_frame,
    round_percentage,
    share_at_or_above,
    share_of_total,
)
from .builder import build_income_buckets, build_income_table
from .parser import ParsedInterval, RawIncomeRow, parse_income_label, parse_income_rows
from .reconciler import (
    ReconciledBucket,
    check_ascending_order,
    is_boundary_row,
    partition_runs,
    reconcile_intervals,
)

__all__ = [
    "IncomeTableRow",
    "ParsedInterval",
    "RawIncomeRow",
    "ReconciledBucket",
    "aggregate_buckets",
    "build_income_buckets",
    "build_income_table",
    "check_ascending_order",
    "format_bucket_label",
    "income_table_frame",
    "is_boundary_row",
    "parse_income_label",
    "parse_income_rows",
    "partition_runs",
    "reconcile_intervals",
    "round_percentage",
    "share_at_or_above",
    "share_of_total",
]
