"""Currency conversion aggregation: filters, flow totals and average rates.

Every view in the application averages rates by volume,
``sum(thb_amount) / sum(foreign_amount)``. The arithmetic mean of stored rates
is only used when a caller asks for ``AveragingPolicy.SIMPLE`` explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from ..domain.repositories import FxConversionRepository
from ..errors import ValidationError
from ..forms.fx import FxEntryForm
from ..models.fx_conversion import FxConversion

logger = logging.getLogger(__name__)

ALL = "All"

FilterValue = Union[int, str, None]


class AveragingPolicy(str, Enum):
    WEIGHTED = "weighted"
    SIMPLE = "simple"


@dataclass(frozen=True)
class FxFilters:
    """Optional predicates; ``None`` or ``"All"`` leaves a dimension unfiltered."""

    year: FilterValue = None
    month: FilterValue = None
    from_currency: Optional[str] = None
    to_currency: Optional[str] = None


@dataclass(frozen=True)
class FxSummary:
    inflow: float
    outflow: float
    average_rate: float
    count: int
    local_volume: float = 0.0
    foreign_volume: float = 0.0


@dataclass(frozen=True)
class FxMonthlyView:
    year: int
    month: int
    filters: FxFilters
    conversions: list[FxConversion]
    summary: FxSummary
    available_years: list[int]
    from_currencies: list[str]
    to_currencies: list[str]


@dataclass(frozen=True)
class FxAnalytics:
    year: FilterValue
    currency: str
    home_in: float
    home_out: float
    foreign_in: float
    foreign_out: float
    average_rate: float
    count: int
    available_years: list[int]
    currencies: list[str]


def _active(value: FilterValue) -> bool:
    return value is not None and value != ALL


def _local(item: FxConversion) -> float:
    return float(item.thb_amount or 0.0)


def _foreign(item: FxConversion) -> float:
    return float(item.foreign_amount or 0.0)


def derive_rate(thb_amount: float, foreign_amount: float, exchange_rate: float | None) -> float:
    """Return the supplied rate, or ``thb / foreign`` when it is blank or zero."""

    if exchange_rate:
        return float(exchange_rate)
    if foreign_amount > 0 and thb_amount > 0:
        return thb_amount / foreign_amount
    return 0.0


def default_period(conversions: Iterable[FxConversion], today: date | None = None) -> tuple[int, int]:
    """Year and month of the latest conversion, or of ``today`` when there is none."""

    latest = max((item.transaction_at for item in conversions), default=None)
    anchor = latest or today or date.today()
    return anchor.year, anchor.month


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (negative moves back) across year bounds."""

    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def filter_conversions(
    conversions: Iterable[FxConversion], filters: FxFilters
) -> list[FxConversion]:
    """Keep records that satisfy every active predicate."""

    def matches(item: FxConversion) -> bool:
        when = item.transaction_at
        if _active(filters.year) and when.year != int(filters.year):
            return False
        if _active(filters.month) and when.month != int(filters.month):
            return False
        if _active(filters.from_currency) and item.from_currency != filters.from_currency:
            return False
        if _active(filters.to_currency) and item.to_currency != filters.to_currency:
            return False
        return True

    return [item for item in conversions if matches(item)]


def weighted_average_rate(conversions: Iterable[FxConversion]) -> float:
    items = list(conversions)
    foreign_volume = sum(_foreign(item) for item in items)
    if foreign_volume <= 0:
        return 0.0
    return sum(_local(item) for item in items) / foreign_volume


def simple_average_rate(conversions: Iterable[FxConversion]) -> float:
    rates = [float(item.exchange_rate or 0.0) for item in conversions]
    return sum(rates) / len(rates) if rates else 0.0


def average_rate(
    conversions: Iterable[FxConversion], policy: AveragingPolicy = AveragingPolicy.WEIGHTED
) -> float:
    if policy is AveragingPolicy.SIMPLE:
        return simple_average_rate(conversions)
    return weighted_average_rate(conversions)


def summarize(
    conversions: Iterable[FxConversion],
    home_currency: str = "THB",
    policy: AveragingPolicy = AveragingPolicy.WEIGHTED,
) -> FxSummary:
    """Home-currency inflow/outflow and the average rate of a filtered set."""

    items = list(conversions)
    inflow = sum(_local(item) for item in items if item.to_currency == home_currency)
    outflow = sum(_local(item) for item in items if item.from_currency == home_currency)
    return FxSummary(
        inflow=inflow,
        outflow=outflow,
        average_rate=average_rate(items, policy),
        count=len(items),
        local_volume=sum(_local(item) for item in items),
        foreign_volume=sum(_foreign(item) for item in items),
    )


def available_years(conversions: Iterable[FxConversion]) -> list[int]:
    return sorted({item.transaction_at.year for item in conversions}, reverse=True)


def resolve_filters(
    conversions: Iterable[FxConversion], filters: FxFilters | None, today: date | None = None
) -> FxFilters:
    """Fill an unset year or month from the latest conversion."""

    filters = filters or FxFilters()
    if filters.year is not None and filters.month is not None:
        return filters
    year, month = default_period(conversions, today)
    return replace(
        filters,
        year=year if filters.year is None else filters.year,
        month=month if filters.month is None else filters.month,
    )


def monthly_view(
    conversions: Iterable[FxConversion],
    filters: FxFilters | None = None,
    home_currency: str = "THB",
    today: date | None = None,
) -> FxMonthlyView:
    """Month-at-a-time list of conversions with their summary."""

    items = list(conversions)
    resolved = resolve_filters(items, filters, today)
    selected = filter_conversions(items, resolved)
    selected.sort(key=lambda item: item.transaction_at, reverse=True)

    fallback_year, fallback_month = default_period(items, today)
    year = int(resolved.year) if _active(resolved.year) else fallback_year
    month = int(resolved.month) if _active(resolved.month) else fallback_month

    return FxMonthlyView(
        year=year,
        month=month,
        filters=resolved,
        conversions=selected,
        summary=summarize(selected, home_currency),
        available_years=available_years(items) or [year],
        from_currencies=sorted({item.from_currency for item in items}),
        to_currencies=sorted({item.to_currency for item in items}),
    )


def analytics_view(
    conversions: Iterable[FxConversion],
    year: FilterValue = None,
    currency: str = "USD",
    home_currency: str = "THB",
) -> FxAnalytics:
    """Flows of one foreign currency against the home currency.

    A conversion is included when either leg is ``currency`` (or always, for
    ``"All"``). Selling the foreign currency brings home currency in; buying
    it sends home currency out.
    """

    items = list(conversions)
    by_year = filter_conversions(items, FxFilters(year=year))
    if _active(currency):
        selected = [
            item for item in by_year
            if item.from_currency == currency or item.to_currency == currency
        ]
    else:
        selected = by_year

    home_in = home_out = foreign_in = foreign_out = 0.0
    specific = _active(currency)
    for item in selected:
        selling_foreign = specific and item.from_currency == currency
        buying_foreign = specific and item.to_currency == currency
        if item.to_currency == home_currency or selling_foreign:
            home_in += _local(item)
        if item.from_currency == home_currency or buying_foreign:
            home_out += _local(item)
        if buying_foreign:
            foreign_in += _foreign(item)
        if selling_foreign:
            foreign_out += _foreign(item)

    currencies = sorted(
        {item.from_currency for item in items} | {item.to_currency for item in items}
    )
    return FxAnalytics(
        year=year if _active(year) else ALL,
        currency=currency,
        home_in=home_in,
        home_out=home_out,
        foreign_in=foreign_in,
        foreign_out=foreign_out,
        average_rate=weighted_average_rate(selected),
        count=len(selected),
        available_years=available_years(items),
        currencies=[code for code in currencies if code != home_currency],
    )


def build_conversion(form: FxEntryForm) -> FxConversion:
    return FxConversion(
        transaction_at=form.transaction_at,
        from_currency=form.from_currency,
        to_currency=form.to_currency,
        thb_amount=form.thb_amount,
        foreign_amount=form.foreign_amount,
        exchange_rate=derive_rate(form.thb_amount, form.foreign_amount, form.exchange_rate),
    )


def record_conversion(repo: FxConversionRepository, data: Mapping[str, Any]) -> FxConversion:
    """Validate and store a conversion, deriving the rate when omitted."""

    form = FxEntryForm.from_mapping(data)
    if not form.validate():
        raise ValidationError.from_errors(form.errors)

    created = repo.create(build_conversion(form))
    logger.info(
        "FX conversion recorded",
        extra={
            "id": created.id,
            "pair": f"{created.from_currency}/{created.to_currency}",
            "rate": created.exchange_rate,
        },
    )
    return created
