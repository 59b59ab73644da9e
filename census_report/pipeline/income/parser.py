"""Income label parser for the ABS total household income extract.

Turns the textual ranges of the ``HIND`` variable into numeric intervals.
Each numeric label carries a weekly range followed by the annual range in
parentheses, e.g. ``"$1,000-$1,249 ($52,000-$64,999)"``; only the annual
range is kept. Summary rows ("Partial income stated", "Not applicable",
"Total") are not intervals and are discarded.

The literals ``"Negative income"`` and ``"Nil income"`` have no range of
their own. They are rewritten through a substitution table into labels the
generic rule understands before any parsing happens.

Examples
--------
>>> parse_income_label("$1-$149 ($1-$7,799)", 12)
ParsedInterval(low=1, high=7799, count=12)
>>> parse_income_label("Negative income", 3)
ParsedInterval(low=None, high=-1, count=3)
>>> parse_income_label("Not applicable", 40) is None
True
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Union

from census_report.config import INCOME_LABEL_SUBSTITUTIONS
from census_report.exceptions import IncomeLabelParseError

logger = logging.getLogger(__name__)

Number = Union[int, float]

_NUMERIC_LABEL = re.compile(r"^(\$|less)")
_ANNUAL_RANGE = re.compile(r"\(([^()]*)\)\s*$")
_RANGE_SEPARATOR = re.compile(r"-(?=\$)| or ")
_AMOUNT = re.compile(r"^-?\d+(\.\d+)?$")


@dataclass(frozen=True)
class RawIncomeRow:
    """One row of the income extract as exported."""

    label: str
    count: int


@dataclass(frozen=True)
class ParsedInterval:
    """Annual income interval; ``None`` marks an open bound."""

    low: Number | None
    high: Number | None
    count: int


def _parse_amount(text: str, label: str) -> Number:
    """Strip currency formatting from ``text`` and return it as a number."""
    cleaned = text.replace("$", "").replace(",", "").strip()
    match = _AMOUNT.match(cleaned)
    if match is None:
        raise IncomeLabelParseError(
            f"Cannot parse amount {text!r} in income label {label!r}",
            context={"label": label, "amount": text},
        )
    return float(cleaned) if match.group(1) else int(cleaned)


def _split_annual_range(annual: str, label: str) -> tuple[Number | None, Number | None]:
    """Split an annual range into its low and high bounds.

    Handles ``"$X-$Y"``, ``"$X or more"`` and ``"$X or less"``.
    """
    parts = [part.strip() for part in _RANGE_SEPARATOR.split(annual, maxsplit=1)]
    if len(parts) != 2 or not parts[0]:
        raise IncomeLabelParseError(
            f"Unrecognised income range {annual!r} in label {label!r}",
            context={"label": label, "range": annual},
        )
    first, second = parts
    if second == "more":
        return _parse_amount(first, label), None
    if second == "less":
        return None, _parse_amount(first, label)
    return _parse_amount(first, label), _parse_amount(second, label)


def parse_income_label(
    label: str,
    count: int,
    substitutions: Mapping[str, str] = INCOME_LABEL_SUBSTITUTIONS,
) -> ParsedInterval | None:
    """Parse one income label and its household count.

    Parameters
    ----------
    label : str
        Label as exported, e.g. ``"$4,500 or more ($234,000 or more)"``.
    count : int
        Number of households in the row.
    substitutions : Mapping[str, str], optional
        Literal labels rewritten before parsing. Defaults to
        ``INCOME_LABEL_SUBSTITUTIONS``.

    Returns
    -------
    ParsedInterval or None
        The annual interval, or ``None`` for non-numeric summary rows.

    Raises
    ------
    IncomeLabelParseError
        If a numeric-looking label has no annual range, an amount that is
        not a number, or a low bound above its high bound.
    """
    text = substitutions.get(label.strip(), label.strip())
    if not _NUMERIC_LABEL.match(text):
        logger.debug("Discarding non-numeric income row %r", label)
        return None
    match = _ANNUAL_RANGE.search(text)
    if match is None:
        raise IncomeLabelParseError(
            f"Income label {label!r} has no annual range in parentheses",
            context={"label": label},
        )
    low, high = _split_annual_range(match.group(1), label)
    if low is not None and high is not None and low > high:
        raise IncomeLabelParseError(
            f"Income label {label!r} has low bound {low} above high bound {high}",
            context={"label": label, "low": low, "high": high},
        )
    return ParsedInterval(low=low, high=high, count=int(count))


def parse_income_rows(
    rows: Iterable[RawIncomeRow],
    substitutions: Mapping[str, str] = INCOME_LABEL_SUBSTITUTIONS,
) -> list[ParsedInterval]:
    """Parse every row, keeping source order and dropping summary rows."""
    intervals: list[ParsedInterval] = []
    for row in rows:
        interval = parse_income_label(row.label, row.count, substitutions)
        if interval is not None:
            intervals.append(interval)
    return intervals
