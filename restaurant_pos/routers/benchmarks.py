import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.analytics import benchmark_utils
from restaurant_pos.analytics.benchmarks import CityTier, Region, RestaurantType, Season
from restaurant_pos.database import get_db
from restaurant_pos.routers.deps import request_id, to_http_error
from restaurant_pos.schemas.analytics import (
    AdjustedBenchmarkResponse,
    BenchmarkCompareRequest,
    BenchmarkDashboardResponse,
    BenchmarkInsightResponse,
    BenchmarkInsightsRequest,
    BenchmarkInsightsResponse,
    DashboardRowResponse,
    RestaurantProfileResponse,
    RestaurantTypeSummary,
)
from restaurant_pos.services import analytics_service
from restaurant_pos.services.errors import POSError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/types", response_model=list[RestaurantTypeSummary])
async def list_restaurant_types() -> list[RestaurantTypeSummary]:
    return [
        RestaurantTypeSummary(
            restaurant_type=t,
            display_name=benchmark_utils.get_restaurant_type_display_name(t),
        )
        for t in benchmark_utils.get_available_restaurant_types()
    ]


@router.get("/types/{restaurant_type}", response_model=RestaurantProfileResponse)
async def get_profile(restaurant_type: RestaurantType) -> RestaurantProfileResponse:
    profile = benchmark_utils.get_restaurant_profile(restaurant_type)
    return RestaurantProfileResponse(
        restaurant_type=restaurant_type,
        display_name=benchmark_utils.get_restaurant_type_display_name(restaurant_type),
        core_benchmarks=profile.core_benchmarks,
        common_problems=benchmark_utils.get_common_problems(restaurant_type),
        staff_structure=benchmark_utils.get_staff_structure(restaurant_type),
        seasonal_effects=profile.seasonal_effects,
        city_tier_adjustments=profile.city_tier_adjustments,
        regional_adjustments=profile.regional_adjustments,
    )


@router.get("/types/{restaurant_type}/adjusted", response_model=AdjustedBenchmarkResponse)
async def get_adjusted_benchmark(
    restaurant_type: RestaurantType,
    metric: str = Query(min_length=1),
    city_tier: CityTier | None = None,
    season: Season | None = None,
    region: Region | None = None,
) -> AdjustedBenchmarkResponse:
    profile = benchmark_utils.get_restaurant_profile(restaurant_type)
    return AdjustedBenchmarkResponse(
        restaurant_type=restaurant_type,
        metric=metric,
        benchmark=profile.core_benchmarks.get(metric),
        city_tier=city_tier,
        season=season,
        region=region,
        adjusted_value=benchmark_utils.calculate_adjusted_benchmark(
            restaurant_type, metric, city_tier=city_tier, season=season, region=region
        ),
        regional_notes=(
            benchmark_utils.get_regional_notes(restaurant_type, region) if region else {}
        ),
    )


@router.post("/compare", response_model=BenchmarkDashboardResponse)
async def compare(
    body: BenchmarkCompareRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> BenchmarkDashboardResponse:
    try:
        restaurant_type = await analytics_service.resolve_restaurant_type(db, body.restaurant_type)
    except POSError as exc:
        raise to_http_error(exc)

    metrics = body.metrics.model_dump(exclude_none=True)
    rows = benchmark_utils.build_benchmark_dashboard(restaurant_type, metrics)
    logger.info(
        "Benchmark comparison computed",
        extra={
            "request_id": request_id(request),
            "restaurant_type": restaurant_type.value,
            "metrics": sorted(metrics),
            "outside_range": sum(
                1 for r in rows if r.comparison.status != benchmark_utils.BenchmarkStatus.WITHIN
            ),
        },
    )
    return BenchmarkDashboardResponse(
        restaurant_type=restaurant_type,
        display_name=benchmark_utils.get_restaurant_type_display_name(restaurant_type),
        rows=[DashboardRowResponse.model_validate(r) for r in rows],
    )


@router.post("/insights", response_model=BenchmarkInsightsResponse)
async def insights(
    body: BenchmarkInsightsRequest,
    db: AsyncSession = Depends(get_db),
) -> BenchmarkInsightsResponse:
    try:
        restaurant_type = await analytics_service.resolve_restaurant_type(db, body.restaurant_type)
    except POSError as exc:
        raise to_http_error(exc)

    found = benchmark_utils.generate_benchmark_insights(restaurant_type, body.metrics)
    return BenchmarkInsightsResponse(
        restaurant_type=restaurant_type,
        display_name=benchmark_utils.get_restaurant_type_display_name(restaurant_type),
        insights=[BenchmarkInsightResponse.model_validate(i) for i in found],
        common_problems=benchmark_utils.get_common_problems(restaurant_type),
    )
