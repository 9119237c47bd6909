"""UK tax year helpers.

The UK tax year runs from 6 April to 5 April and is identified by the calendar
year in which it starts, e.g. ``2023/24`` starts on 6 April 2023.
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Iterable
from numbers import Real

TAX_YEAR_START_MONTH = 4
TAX_YEAR_START_DAY = 6


def format_tax_year(year_start: int) -> str:
    """Return the ``YYYY/YY`` label for the tax year starting in ``year_start``."""

    return f"{year_start}/{(year_start + 1) % 100:02d}"


def tax_year_for(day: dt.date) -> int:
    """Return the start year of the tax year containing ``day``."""

    if (day.month, day.day) >= (TAX_YEAR_START_MONTH, TAX_YEAR_START_DAY):
        return day.year
    return day.year - 1


def current_tax_year(today: dt.date) -> int:
    """Return the start year of the tax year in progress on ``today``."""

    return tax_year_for(today)


def aggregate_by_tax_year(payments: Iterable[tuple[dt.date, float]]) -> dict[int, float]:
    """Sum dated payments into per-tax-year totals.

    Non-positive or non-numeric amounts are ignored, matching how contribution
    statements are summarised before they reach the ledger.
    """

    totals: dict[int, float] = {}
    for day, amount in payments:
        if isinstance(amount, bool) or not isinstance(amount, Real):
            continue
        try:
            value = float(amount)
        except OverflowError:
            continue
        if not math.isfinite(value) or value <= 0:
            continue
        year = tax_year_for(day)
        totals[year] = totals.get(year, 0.0) + value
    return dict(sorted(totals.items()))


__all__ = [
    "aggregate_by_tax_year",
    "current_tax_year",
    "format_tax_year",
    "tax_year_for",
]
