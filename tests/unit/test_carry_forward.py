"""Unit tests for the carry-forward allocator."""

from __future__ import annotations

import pytest

from pensionallowance.backend.app.services.allocation import (
    AllocationBreakdown,
    CarryForwardClaim,
    TaxYearRecord,
    allocate,
    normalize,
)


def _records(*pairs: tuple[int, float]) -> list[TaxYearRecord]:
    return normalize({year: used for year, used in pairs})


def test_allocate_empty_series_returns_empty_list() -> None:
    assert allocate([]) == []


def test_years_within_allowance_only_use_current_year() -> None:
    breakdowns = allocate(_records((2020, 10_000), (2021, 40_000), (2022, 0)))

    assert breakdowns == [
        AllocationBreakdown(current_year_portion=10_000.0),
        AllocationBreakdown(current_year_portion=40_000.0),
        AllocationBreakdown(current_year_portion=0.0),
    ]


def test_reference_series_draws_from_nearest_year_with_headroom(
    six_year_contributions: dict[str, int],
) -> None:
    breakdowns = allocate(normalize(six_year_contributions))

    assert breakdowns[3].current_year_portion == 40_000.0
    assert breakdowns[3].carry_forward == (CarryForwardClaim(from_year=2020, amount=10_000.0),)

    assert breakdowns[4].current_year_portion == 52_000.0
    assert breakdowns[4].carry_forward == ()

    # 2023/24 has 8000 headroom, 2022/23 and 2021/22 have none; 10000 is unallocated.
    assert breakdowns[5].current_year_portion == 60_000.0
    assert breakdowns[5].carry_forward == (CarryForwardClaim(from_year=2023, amount=8_000.0),)


def test_nearest_year_is_exhausted_before_older_years() -> None:
    breakdowns = allocate(_records((2018, 0), (2019, 0), (2020, 0), (2021, 100_000)))

    assert [claim.from_year for claim in breakdowns[3].carry_forward] == [2020, 2019]
    assert [claim.amount for claim in breakdowns[3].carry_forward] == [40_000.0, 20_000.0]


def test_claim_order_follows_draw_order_not_amount() -> None:
    breakdowns = allocate(_records((2019, 0), (2020, 35_000), (2021, 0), (2022, 90_000)))

    claims = breakdowns[3].carry_forward
    assert [(claim.from_year, claim.amount) for claim in claims] == [
        (2021, 40_000.0),
        (2020, 5_000.0),
        (2019, 5_000.0),
    ]


def test_lookback_is_limited_to_three_preceding_years() -> None:
    breakdowns = allocate(
        _records((2017, 0), (2018, 40_000), (2019, 40_000), (2020, 40_000), (2021, 60_000))
    )

    assert breakdowns[4].carry_forward == ()


def test_allowance_claimed_by_an_intermediate_year_is_not_reused() -> None:
    breakdowns = allocate(_records((2019, 0), (2020, 70_000), (2021, 70_000)))

    assert breakdowns[1].carry_forward == (CarryForwardClaim(from_year=2019, amount=30_000.0),)
    # 2020/21 has no headroom and only 10000 remains from 2019/20.
    assert breakdowns[2].carry_forward == (CarryForwardClaim(from_year=2019, amount=10_000.0),)


def test_custom_window_changes_lookback() -> None:
    records = _records((2018, 0), (2019, 40_000), (2020, 80_000))

    assert allocate(records, window=1)[2].carry_forward == ()
    assert allocate(records, window=2)[2].carry_forward == (
        CarryForwardClaim(from_year=2018, amount=40_000.0),
    )


def test_lookback_is_positional_across_gaps_in_the_series() -> None:
    breakdowns = allocate(_records((2010, 0), (2020, 50_000)))

    assert breakdowns[1].carry_forward == (CarryForwardClaim(from_year=2010, amount=10_000.0),)


def test_first_year_excess_has_nothing_to_draw_on() -> None:
    breakdowns = allocate(_records((2023, 75_000)))

    assert breakdowns == [AllocationBreakdown(current_year_portion=60_000.0)]


def test_allocation_is_idempotent(six_year_contributions: dict[str, int]) -> None:
    records = normalize(six_year_contributions)

    assert allocate(records) == allocate(records)


@pytest.mark.parametrize(
    "contributions",
    [
        {2015: 0, 2016: 55_000, 2017: 10_000, 2018: 95_000, 2019: 20_000, 2020: 70_000},
        {2019: 5_000, 2020: 48_000, 2021: 0, 2022: 130_000, 2023: 61_000, 2024: 90_000},
        {2020: 0, 2021: 0, 2022: 0, 2023: 200_000, 2024: 0, 2025: 61_000},
    ],
)
def test_conservation_and_no_double_spend(contributions: dict[int, int]) -> None:
    records = normalize(contributions)
    breakdowns = allocate(records)

    for record, breakdown in zip(records, breakdowns):
        attributed = breakdown.current_year_portion + breakdown.carry_forward_total
        assert attributed <= record.used + 1e-9
        assert breakdown.current_year_portion == min(record.used, record.allowance)
        if record.used <= record.allowance:
            assert breakdown.carry_forward == ()

    for index, record in enumerate(records):
        claimed = sum(
            claim.amount
            for later in breakdowns[index + 1 :]
            for claim in later.carry_forward
            if claim.from_year == record.year_start
        )
        assert 0 <= claimed <= max(0.0, record.allowance - record.used) + 1e-9
