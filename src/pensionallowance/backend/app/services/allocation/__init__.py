"""Annual allowance allocation pipeline."""

from .availability import is_lost, remaining, summarise, year_positions
from .calendar import aggregate_by_tax_year, current_tax_year, format_tax_year, tax_year_for
from .carry_forward import DEFAULT_CARRY_FORWARD_YEARS, allocate, allocate_year
from .consumption import ConsumptionIndex, consumed_by_future
from .drilldown import (
    Drilldown,
    Overview,
    ViewState,
    YearSegments,
    drilldown_segments,
    drilldown_state,
)
from .records import (
    AllocationBreakdown,
    CarryForwardClaim,
    ConsumerClaim,
    InvalidLedgerInput,
    Ledger,
    LedgerSummary,
    TaxYearRecord,
    YearPosition,
)
from .year_series import coerce_amount, normalize, parse_year_key

__all__ = [
    "AllocationBreakdown",
    "CarryForwardClaim",
    "ConsumerClaim",
    "ConsumptionIndex",
    "DEFAULT_CARRY_FORWARD_YEARS",
    "Drilldown",
    "InvalidLedgerInput",
    "Ledger",
    "LedgerSummary",
    "Overview",
    "TaxYearRecord",
    "ViewState",
    "YearPosition",
    "YearSegments",
    "aggregate_by_tax_year",
    "allocate",
    "allocate_year",
    "coerce_amount",
    "consumed_by_future",
    "current_tax_year",
    "drilldown_segments",
    "drilldown_state",
    "format_tax_year",
    "is_lost",
    "normalize",
    "parse_year_key",
    "remaining",
    "summarise",
    "tax_year_for",
    "year_positions",
]
