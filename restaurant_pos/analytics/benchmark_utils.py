"""
Benchmark comparison engine.

Pure lookups and percentage arithmetic over the static catalog in
``restaurant_pos.analytics.benchmarks``. Nothing here raises on malformed
catalog data: unparsable ranges or adjustments degrade to ``None`` or to a
neutral "within" comparison. Only an unknown restaurant type is rejected,
since that is caller input rather than catalog data.
"""

import copy
import re
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from restaurant_pos.analytics.benchmarks import (
    RESTAURANT_BENCHMARKS,
    RESTAURANT_TYPE_DISPLAY_NAMES,
    CityTier,
    Region,
    RestaurantProfile,
    RestaurantType,
    Season,
)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_SIGNED_PERCENT = re.compile(r"^([+-]?)(\d+)$")
_LAKH = 100_000

PROFIT_MARGIN_KEYS = (
    "monthly_profit_margin_percent",
    "profit_margin_percent",
    "profit_margin_range_percent",
    "profit_margin_percent_range",
)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


class BenchmarkStatus(str, Enum):
    WITHIN = "within"
    BELOW = "below"
    ABOVE = "above"


class MetricTone(str, Enum):
    FAVOURABLE = "favourable"
    UNFAVOURABLE = "unfavourable"


class BenchmarkRange(NamedTuple):
    min: float
    max: float


class WithinResult(NamedTuple):
    within: bool
    min: float | None = None
    max: float | None = None


@dataclass
class BenchmarkComparison:
    metric: str
    actual: float
    benchmark: str | None
    status: BenchmarkStatus
    deviation: float
    message: str


@dataclass
class BenchmarkInsight:
    metric: str
    comparison: BenchmarkComparison
    recommendation: str | None = None


@dataclass
class DashboardRow:
    key: str
    label: str
    comparison: BenchmarkComparison
    tone: MetricTone
    progress: float


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _leading_float(text: str) -> float | None:
    """Parse the numeric prefix of ``text`` ("32", " 1.5L", "40%"), or None."""
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return None
    return float(match.group(0))


def _fmt(value: float) -> str:
    return f"{value:g}"


def _signed_percent(raw: str | None) -> int | None:
    if not raw:
        return None
    match = _SIGNED_PERCENT.match(raw)
    if match is None:
        return None
    sign = -1 if match.group(1) == "-" else 1
    return sign * int(match.group(2))


def parse_range(range_text: str | None) -> BenchmarkRange | None:
    """Parse a "min-max" range such as "32-38"."""
    if not range_text:
        return None
    parts = range_text.split("-")
    if len(parts) != 2:
        return None
    low = _leading_float(parts[0])
    high = _leading_float(parts[1])
    if low is None or high is None:
        return None
    return BenchmarkRange(low, high)


def parse_inr_range(range_text: str | None) -> BenchmarkRange | None:
    """Parse an INR range where an "L" suffix means lakh: "3L-12L" -> (300000, 1200000)."""
    if not range_text:
        return None
    parts = range_text.split("-")
    if len(parts) != 2:
        return None

    def parse_value(raw: str) -> float | None:
        trimmed = raw.strip().upper()
        if trimmed.endswith("L"):
            number = _leading_float(trimmed[:-1])
            return None if number is None else number * _LAKH
        return _leading_float(trimmed)

    low = parse_value(parts[0])
    high = parse_value(parts[1])
    if low is None or high is None:
        return None
    return BenchmarkRange(low, high)


# ---------------------------------------------------------------------------
# Catalog lookups
# ---------------------------------------------------------------------------


def get_restaurant_profile(restaurant_type: RestaurantType | str) -> RestaurantProfile:
    """A private copy of the catalog entry; the nested dicts and lists are safe to modify."""
    return copy.deepcopy(RESTAURANT_BENCHMARKS[RestaurantType(restaurant_type).value])


def get_common_problems(restaurant_type: RestaurantType | str) -> list[str]:
    return list(get_restaurant_profile(restaurant_type).common_problems)


def get_staff_structure(restaurant_type: RestaurantType | str) -> list[str]:
    return list(get_restaurant_profile(restaurant_type).staff_structure)


def get_regional_notes(
    restaurant_type: RestaurantType | str, region: Region | str
) -> dict[str, str]:
    profile = get_restaurant_profile(restaurant_type)
    return dict(profile.regional_adjustments.get(Region(region).value, {}))


def get_restaurant_type_display_name(restaurant_type: RestaurantType | str) -> str:
    key = RestaurantType(restaurant_type).value
    return RESTAURANT_TYPE_DISPLAY_NAMES.get(key, key)


def get_available_restaurant_types() -> list[RestaurantType]:
    return [RestaurantType(key) for key in RESTAURANT_BENCHMARKS]


def resolve_profit_margin_benchmark(profile: RestaurantProfile) -> str | None:
    """Profit margin is stored under different keys depending on the restaurant type."""
    for key in PROFIT_MARGIN_KEYS:
        value = profile.core_benchmarks.get(key)
        if value:
            return value
    return None


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------


def is_within_benchmark(value: float, range_text: str | None) -> WithinResult:
    parsed = parse_range(range_text)
    if parsed is None:
        return WithinResult(within=False)
    return WithinResult(
        within=parsed.min <= value <= parsed.max,
        min=parsed.min,
        max=parsed.max,
    )


def _relative_gap(gap: float, bound: float) -> float:
    # A zero bound has no meaningful relative gap; report the absolute one.
    if bound == 0:
        return abs(gap)
    return gap / abs(bound) * 100


def compare_to_benchmark(
    actual: float, range_text: str | None, metric_name: str
) -> BenchmarkComparison:
    """
    Compare an actual percentage against a benchmark range.

    Deviation is the distance past the nearest bound as a percentage of that
    bound, always non-negative. Missing or malformed ranges yield a neutral
    "within" result with zero deviation.
    """
    if not range_text:
        return BenchmarkComparison(
            metric=metric_name,
            actual=actual,
            benchmark=None,
            status=BenchmarkStatus.WITHIN,
            deviation=0.0,
            message=f"No benchmark available for {metric_name}",
        )

    parsed = parse_range(range_text)
    if parsed is None:
        return BenchmarkComparison(
            metric=metric_name,
            actual=actual,
            benchmark=range_text,
            status=BenchmarkStatus.WITHIN,
            deviation=0.0,
            message=f"Invalid benchmark format for {metric_name}",
        )

    if actual < parsed.min:
        status = BenchmarkStatus.BELOW
        deviation = _relative_gap(parsed.min - actual, parsed.min)
        message = (
            f"{metric_name} is {deviation:.1f}% below expected minimum ({_fmt(parsed.min)}%)"
        )
    elif actual > parsed.max:
        status = BenchmarkStatus.ABOVE
        deviation = _relative_gap(actual - parsed.max, parsed.max)
        message = (
            f"{metric_name} is {deviation:.1f}% above expected maximum ({_fmt(parsed.max)}%)"
        )
    else:
        status = BenchmarkStatus.WITHIN
        deviation = 0.0
        message = (
            f"{metric_name} is within expected range "
            f"({_fmt(parsed.min)}-{_fmt(parsed.max)}%)"
        )

    return BenchmarkComparison(
        metric=metric_name,
        actual=actual,
        benchmark=range_text,
        status=status,
        deviation=deviation,
        message=message,
    )


# ---------------------------------------------------------------------------
# Adjustments
# ---------------------------------------------------------------------------


def get_seasonal_adjustment(
    restaurant_type: RestaurantType | str, season: Season | str, metric: str
) -> int | None:
    profile = get_restaurant_profile(restaurant_type)
    effects = profile.seasonal_effects.get(Season(season).value)
    if not effects:
        return None
    return _signed_percent(effects.get(metric))


def get_city_tier_adjustment(
    restaurant_type: RestaurantType | str, city_tier: CityTier | str, metric: str
) -> float | None:
    profile = get_restaurant_profile(restaurant_type)
    adjustments = profile.city_tier_adjustments.get(CityTier(city_tier).value)
    if not adjustments:
        return None
    value = _signed_percent(adjustments.get(metric))
    return None if value is None else float(value)


def calculate_adjusted_benchmark(
    restaurant_type: RestaurantType | str,
    metric: str,
    city_tier: CityTier | str | None = None,
    season: Season | str | None = None,
    region: Region | str | None = None,
) -> float | None:
    """
    Expected value of ``metric``: the midpoint of its range, scaled by the
    city tier adjustment and then the seasonal adjustment when either exists
    for that metric key. ``region`` is accepted for symmetry but regional
    notes are qualitative and do not move the number.
    """
    profile = get_restaurant_profile(restaurant_type)
    parsed = parse_range(profile.core_benchmarks.get(metric))
    if parsed is None:
        return None

    adjusted = (parsed.min + parsed.max) / 2

    if city_tier:
        tier_adjustment = get_city_tier_adjustment(restaurant_type, city_tier, metric)
        if tier_adjustment is not None:
            adjusted *= 1 + tier_adjustment / 100

    if season:
        seasonal_adjustment = get_seasonal_adjustment(restaurant_type, season, metric)
        if seasonal_adjustment is not None:
            adjusted *= 1 + seasonal_adjustment / 100

    return adjusted


# ---------------------------------------------------------------------------
# Insights and dashboard rows
# ---------------------------------------------------------------------------


def generate_benchmark_insights(
    restaurant_type: RestaurantType | str, actual_metrics: dict[str, float]
) -> list[BenchmarkInsight]:
    profile = get_restaurant_profile(restaurant_type)
    insights: list[BenchmarkInsight] = []

    for metric, value in actual_metrics.items():
        benchmark = profile.core_benchmarks.get(f"{metric}_percent_range")
        if not benchmark:
            continue

        comparison = compare_to_benchmark(value, benchmark, metric)
        recommendation = None
        if comparison.status == BenchmarkStatus.ABOVE:
            recommendation = f"Consider optimizing {metric} to reduce costs"
        elif comparison.status == BenchmarkStatus.BELOW:
            recommendation = (
                f"Your {metric} is lower than expected - this could indicate underinvestment"
            )
        insights.append(
            BenchmarkInsight(metric=metric, comparison=comparison, recommendation=recommendation)
        )

    return insights


# (metric key, label, catalog key or None for profit margin lookup, is a cost)
_DASHBOARD_METRICS = (
    ("food_cost_percent", "Food Cost", "food_cost_percent_range", True),
    ("staff_cost_percent", "Staff Cost", "staff_cost_percent_range", True),
    ("marketing_percent", "Marketing", "marketing_percent_range", True),
    ("rent_percent", "Rent", "rent_percent_of_revenue", True),
    ("delivery_ratio_percent", "Delivery Ratio", "delivery_ratio_percent", False),
    ("profit_margin_percent", "Profit Margin", None, False),
)


def metric_tone(status: BenchmarkStatus, is_cost: bool) -> MetricTone:
    """Costs are better low, ratios and margins better high; in range is always fine."""
    if status == BenchmarkStatus.WITHIN:
        return MetricTone.FAVOURABLE
    if is_cost:
        return MetricTone.UNFAVOURABLE if status == BenchmarkStatus.ABOVE else MetricTone.FAVOURABLE
    return MetricTone.FAVOURABLE if status == BenchmarkStatus.ABOVE else MetricTone.UNFAVOURABLE


def benchmark_progress(comparison: BenchmarkComparison) -> float:
    """Position of the actual value inside its range, 0-100."""
    if not comparison.benchmark:
        return 0.0
    parsed = parse_range(comparison.benchmark)
    if parsed is None:
        return 50.0
    if comparison.actual < parsed.min:
        return 0.0
    if comparison.actual > parsed.max:
        return 100.0
    span = parsed.max - parsed.min
    if span == 0:
        return 50.0
    return (comparison.actual - parsed.min) / span * 100


def build_benchmark_dashboard(
    restaurant_type: RestaurantType | str, actual_metrics: dict[str, float]
) -> list[DashboardRow]:
    profile = get_restaurant_profile(restaurant_type)
    rows: list[DashboardRow] = []

    for key, label, catalog_key, is_cost in _DASHBOARD_METRICS:
        value = actual_metrics.get(key)
        if catalog_key is None:
            benchmark = resolve_profit_margin_benchmark(profile)
        else:
            benchmark = profile.core_benchmarks.get(catalog_key)
        if value is None or not benchmark:
            continue

        comparison = compare_to_benchmark(value, benchmark, label)
        rows.append(
            DashboardRow(
                key=key,
                label=label,
                comparison=comparison,
                tone=metric_tone(comparison.status, is_cost),
                progress=benchmark_progress(comparison),
            )
        )

    return rows
