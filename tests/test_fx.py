"""Tests for FX conversion aggregation and entry."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from pantagon.errors import ValidationError
from pantagon.services.fx import (
    ALL,
    AveragingPolicy,
    FxFilters,
    analytics_view,
    default_period,
    derive_rate,
    filter_conversions,
    monthly_view,
    record_conversion,
    shift_month,
    simple_average_rate,
    summarize,
    weighted_average_rate,
)
from tests.conftest import assert_float_equal


@pytest.fixture
def conversions(make_fx):
    return [
        make_fx(thb_amount=3500.0, foreign_amount=100.0, at=datetime(2024, 3, 10, 9, 0)),
        make_fx(
            thb_amount=1800.0,
            foreign_amount=50.0,
            from_currency="USD",
            to_currency="THB",
            at=datetime(2024, 4, 2, 16, 45),
        ),
        make_fx(
            thb_amount=240.0,
            foreign_amount=1000.0,
            to_currency="JPY",
            at=datetime(2023, 11, 20, 8, 15),
        ),
    ]


def test_derive_rate():
    assert derive_rate(3500.0, 100.0, None) == 35.0
    assert derive_rate(3500.0, 100.0, 0) == 35.0
    assert derive_rate(3500.0, 100.0, 34.9) == 34.9
    assert derive_rate(0.0, 100.0, None) == 0.0


def test_weighted_average_is_volume_weighted(make_fx):
    items = [make_fx(thb_amount=3400.0, foreign_amount=100.0), make_fx(thb_amount=36000.0, foreign_amount=1000.0)]

    assert_float_equal(weighted_average_rate(items), 39400.0 / 1100.0, tolerance=1e-9)
    assert_float_equal(simple_average_rate(items), (34.0 + 36.0) / 2, tolerance=1e-9)


def test_weighted_average_is_scale_invariant(make_fx):
    base = [make_fx(thb_amount=3400.0, foreign_amount=100.0), make_fx(thb_amount=1790.0, foreign_amount=50.0)]
    scaled = [
        make_fx(thb_amount=item.thb_amount * 7.5, foreign_amount=item.foreign_amount * 7.5)
        for item in base
    ]
    assert weighted_average_rate(scaled) == pytest.approx(weighted_average_rate(base))


def test_averages_of_empty_set_are_zero():
    assert weighted_average_rate([]) == 0.0
    assert simple_average_rate([]) == 0.0
    summary = summarize([])
    assert (summary.inflow, summary.outflow, summary.average_rate, summary.count) == (0.0, 0.0, 0.0, 0)


def test_summarize_splits_home_currency_flows(conversions):
    summary = summarize(conversions, "THB")

    assert summary.inflow == 1800.0
    assert summary.outflow == 3500.0 + 240.0
    assert summary.count == 3
    assert_float_equal(summary.average_rate, (3500.0 + 1800.0 + 240.0) / 1150.0, tolerance=1e-9)


def test_summarize_simple_policy_is_opt_in(conversions):
    summary = summarize(conversions, "THB", policy=AveragingPolicy.SIMPLE)
    assert_float_equal(summary.average_rate, (35.0 + 36.0 + 0.24) / 3, tolerance=1e-9)


def test_filter_conversions_combines_predicates(conversions):
    assert len(filter_conversions(conversions, FxFilters())) == 3
    assert len(filter_conversions(conversions, FxFilters(year=ALL, month=ALL))) == 3
    assert len(filter_conversions(conversions, FxFilters(year=2024))) == 2
    only_april = filter_conversions(conversions, FxFilters(year=2024, month=4))
    assert [c.from_currency for c in only_april] == ["USD"]
    assert filter_conversions(conversions, FxFilters(year=2024, to_currency="JPY")) == []


def test_default_period_uses_latest_or_today(conversions):
    assert default_period(conversions) == (2024, 4)
    assert default_period([], today=date(2025, 7, 3)) == (2025, 7)


@pytest.mark.parametrize(
    "year, month, delta, expected",
    [
        (2024, 1, -1, (2023, 12)),
        (2024, 12, 1, (2025, 1)),
        (2024, 6, 0, (2024, 6)),
        (2024, 3, -14, (2023, 1)),
    ],
)
def test_shift_month(year, month, delta, expected):
    assert shift_month(year, month, delta) == expected


def test_monthly_view_defaults_to_latest_month(conversions):
    view = monthly_view(conversions, home_currency="THB")

    assert (view.year, view.month) == (2024, 4)
    assert len(view.conversions) == 1
    assert view.summary.inflow == 1800.0
    assert view.available_years == [2024, 2023]
    assert view.from_currencies == ["THB", "USD"]
    assert view.to_currencies == ["JPY", "THB", "USD"]


def test_monthly_view_all_months_newest_first(conversions):
    view = monthly_view(conversions, FxFilters(year=2024, month=ALL))

    assert [c.transaction_at.month for c in view.conversions] == [4, 3]
    assert view.summary.count == 2


def test_monthly_view_empty_store():
    view = monthly_view([], today=date(2025, 1, 9))
    assert (view.year, view.month) == (2025, 1)
    assert view.conversions == []
    assert view.available_years == [2025]


def test_analytics_for_one_currency(conversions):
    view = analytics_view(conversions, year=None, currency="USD", home_currency="THB")

    assert view.count == 2
    assert view.year == ALL
    assert view.home_in == 1800.0
    assert view.home_out == 3500.0
    assert view.foreign_in == 100.0
    assert view.foreign_out == 50.0
    assert_float_equal(view.average_rate, 5300.0 / 150.0, tolerance=1e-9)
    assert view.currencies == ["JPY", "USD"]


def test_analytics_all_currencies(conversions):
    view = analytics_view(conversions, year=ALL, currency=ALL, home_currency="THB")

    assert view.count == 3
    assert view.home_in == 1800.0
    assert view.home_out == 3740.0
    assert (view.foreign_in, view.foreign_out) == (0.0, 0.0)


def test_analytics_year_without_matches(conversions):
    view = analytics_view(conversions, year=2023, currency="USD")
    assert view.count == 0
    assert view.average_rate == 0.0


def test_record_conversion_derives_rate(fx_repo):
    created = record_conversion(
        fx_repo,
        {
            "transaction_at": "2024-06-01T10:00:00+07:00",
            "from_currency": "thb",
            "to_currency": "usd",
            "thb_amount": "36,500",
            "foreign_amount": "1000",
        },
    )

    assert created.id is not None
    assert (created.from_currency, created.to_currency) == ("THB", "USD")
    assert created.exchange_rate == pytest.approx(36.5)
    assert created.transaction_at == datetime(2024, 6, 1, 3, 0)


def test_record_conversion_keeps_supplied_rate(fx_repo):
    created = record_conversion(
        fx_repo,
        {
            "transaction_at": "2024-06-01T10:00",
            "from_currency": "USD",
            "to_currency": "THB",
            "thb_amount": "3600",
            "foreign_amount": "100",
            "exchange_rate": "35.95",
        },
    )
    assert created.exchange_rate == 35.95


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"to_currency": "THB"}, "to_currency"),
        ({"thb_amount": "-5"}, "thb_amount"),
        ({"foreign_amount": ""}, "foreign_amount"),
        ({"transaction_at": "yesterday"}, "transaction_at"),
    ],
)
def test_record_conversion_rejects_invalid_input(fx_repo, overrides, field):
    payload = {
        "transaction_at": "2024-06-01T10:00",
        "from_currency": "THB",
        "to_currency": "USD",
        "thb_amount": "3600",
        "foreign_amount": "100",
        **overrides,
    }
    with pytest.raises(ValidationError) as excinfo:
        record_conversion(fx_repo, payload)

    assert field in excinfo.value.errors
    assert fx_repo.list_all() == []
