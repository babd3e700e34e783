from decimal import Decimal

from pydantic import BaseModel, Field

from restaurant_pos.analytics.benchmark_utils import BenchmarkStatus, MetricTone
from restaurant_pos.analytics.benchmarks import CityTier, Region, RestaurantType, Season


# ---------------------------------------------------------------------------
# Admin overview
# ---------------------------------------------------------------------------


class SeriesPointResponse(BaseModel):
    name: str
    value: Decimal

    model_config = {"from_attributes": True}


class ItemQuantityResponse(BaseModel):
    name: str
    quantity: int

    model_config = {"from_attributes": True}


class DashboardStatsResponse(BaseModel):
    total_revenue: Decimal
    total_orders: int
    total_customers: int
    average_bill: Decimal

    model_config = {"from_attributes": True}


class RevenueSeries(BaseModel):
    daily: list[SeriesPointResponse]
    weekly: list[SeriesPointResponse]
    monthly: list[SeriesPointResponse]
    yearly: list[SeriesPointResponse]


class AdminOverview(BaseModel):
    stats: DashboardStatsResponse
    revenue: RevenueSeries
    top_selling_items: list[ItemQuantityResponse]
    category_revenue: list[SeriesPointResponse]
    payment_breakdown: list[SeriesPointResponse]
    order_status_breakdown: dict[str, int]
    digital_payment_share: float


# ---------------------------------------------------------------------------
# Benchmarks
# ---------------------------------------------------------------------------


class RestaurantTypeSummary(BaseModel):
    restaurant_type: RestaurantType
    display_name: str


class RestaurantProfileResponse(BaseModel):
    restaurant_type: RestaurantType
    display_name: str
    core_benchmarks: dict[str, str]
    common_problems: list[str]
    staff_structure: list[str]
    seasonal_effects: dict[str, dict[str, str]]
    city_tier_adjustments: dict[str, dict[str, str]]
    regional_adjustments: dict[str, dict[str, str]]


class AdjustedBenchmarkResponse(BaseModel):
    restaurant_type: RestaurantType
    metric: str
    benchmark: str | None
    city_tier: CityTier | None
    season: Season | None
    region: Region | None
    adjusted_value: float | None
    regional_notes: dict[str, str]


class ActualMetrics(BaseModel):
    food_cost_percent: float | None = None
    staff_cost_percent: float | None = None
    marketing_percent: float | None = None
    rent_percent: float | None = None
    delivery_ratio_percent: float | None = None
    profit_margin_percent: float | None = None


class BenchmarkCompareRequest(BaseModel):
    # Falls back to the configured restaurant type when omitted.
    restaurant_type: RestaurantType | None = None
    metrics: ActualMetrics


class BenchmarkComparisonResponse(BaseModel):
    metric: str
    actual: float
    benchmark: str | None
    status: BenchmarkStatus
    deviation: float
    message: str

    model_config = {"from_attributes": True}


class DashboardRowResponse(BaseModel):
    key: str
    label: str
    comparison: BenchmarkComparisonResponse
    tone: MetricTone
    progress: float

    model_config = {"from_attributes": True}


class BenchmarkDashboardResponse(BaseModel):
    restaurant_type: RestaurantType
    display_name: str
    rows: list[DashboardRowResponse]


class BenchmarkInsightsRequest(BaseModel):
    restaurant_type: RestaurantType | None = None
    # Metric stems such as "food_cost" or "waste", matched against "<stem>_percent_range".
    metrics: dict[str, float] = Field(min_length=1)


class BenchmarkInsightResponse(BaseModel):
    metric: str
    comparison: BenchmarkComparisonResponse
    recommendation: str | None

    model_config = {"from_attributes": True}


class BenchmarkInsightsResponse(BaseModel):
    restaurant_type: RestaurantType
    display_name: str
    insights: list[BenchmarkInsightResponse]
    common_problems: list[str]
