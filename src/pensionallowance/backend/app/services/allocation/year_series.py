"""Normalise raw contribution totals into an ascending series of tax years."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Any, Callable

from pensionallowance.backend.config.allowance_config import allowance_for
from pensionallowance.backend.config.schema import MAX_TAX_YEAR, MIN_TAX_YEAR

from .calendar import format_tax_year
from .records import InvalidLedgerInput, TaxYearRecord

_LOGGER = logging.getLogger(__name__)

# Exactly four leading digits: "2023", "2023/24", "2023-24 tax year".
_YEAR_PATTERN = re.compile(r"^(\d{4})(?!\d)")
_AMOUNT_NOISE = re.compile(r"[£,\s_]")


def parse_year_key(key: Any) -> int | None:
    """Return the tax year start encoded in ``key`` or ``None`` when unparsable."""

    if isinstance(key, bool):
        return None

    if isinstance(key, int):
        year = key
    elif isinstance(key, str):
        match = _YEAR_PATTERN.match(key.strip())
        if match is None:
            return None
        year = int(match.group(1))
    else:
        return None

    if not MIN_TAX_YEAR <= year <= MAX_TAX_YEAR:
        return None
    return year


def coerce_amount(value: Any) -> float:
    """Convert a raw contribution total to a non-negative float."""

    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        cleaned = _AMOUNT_NOISE.sub("", value)
        if not cleaned:
            return 0.0
        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            return 0.0

    if not isinstance(value, (Real, Decimal)):
        return 0.0

    try:
        amount = float(value)
    except (OverflowError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def normalize(
    raw_totals: Mapping[Any, Any] | None,
    *,
    allowance_lookup: Callable[[int], float] | None = None,
    dropped: list[str] | None = None,
) -> list[TaxYearRecord]:
    """Build ascending :class:`TaxYearRecord` entries from ``raw_totals``.

    Unparsable keys are skipped with a warning and, when ``dropped`` is given,
    appended to it. Duplicate years keep the last value seen.
    """

    if raw_totals is None:
        return []
    if not isinstance(raw_totals, Mapping):
        raise InvalidLedgerInput(
            "Contributions must be a mapping of tax year to amount", field="contributions"
        )

    lookup = allowance_lookup or allowance_for
    amounts: dict[int, float] = {}

    for key, value in raw_totals.items():
        year = parse_year_key(key)
        if year is None:
            _LOGGER.warning("Ignoring contribution with unrecognised tax year %r", key)
            if dropped is not None:
                dropped.append(str(key))
            continue

        if year in amounts:
            _LOGGER.warning(
                "Duplicate entries for tax year %s; keeping the last value", format_tax_year(year)
            )
        amounts[year] = coerce_amount(value)

    return [
        TaxYearRecord(
            year_start=year,
            label=format_tax_year(year),
            allowance=float(lookup(year)),
            used=used,
        )
        for year, used in sorted(amounts.items())
    ]


__all__ = ["coerce_amount", "normalize", "parse_year_key"]
