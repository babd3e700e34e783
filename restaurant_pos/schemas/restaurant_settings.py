from datetime import datetime

from pydantic import BaseModel, Field

from restaurant_pos.analytics.benchmarks import CityTier, Region, RestaurantType


class RestaurantSettingsUpdate(BaseModel):
    restaurant_type: RestaurantType
    city_tier: CityTier | None = None
    region: Region | None = None
    restaurant_name: str | None = Field(default=None, max_length=200)


class RestaurantSettingsResponse(BaseModel):
    id: int
    restaurant_type: RestaurantType
    restaurant_type_display_name: str
    city_tier: CityTier | None
    region: Region | None
    restaurant_name: str | None
    created_at: datetime
    updated_at: datetime


class RestaurantSettingsStatus(BaseModel):
    configured: bool
    settings: RestaurantSettingsResponse | None
