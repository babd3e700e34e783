from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import get_db
from restaurant_pos.schemas.restaurant_settings import (
    RestaurantSettingsResponse,
    RestaurantSettingsStatus,
    RestaurantSettingsUpdate,
)
from restaurant_pos.services import settings_service

router = APIRouter()


@router.get("", response_model=RestaurantSettingsStatus)
async def get_settings(db: AsyncSession = Depends(get_db)) -> RestaurantSettingsStatus:
    if not await settings_service.is_restaurant_configured(db):
        return RestaurantSettingsStatus(configured=False, settings=None)
    row = await settings_service.get_restaurant_settings(db)
    return RestaurantSettingsStatus(
        configured=True,
        settings=settings_service.build_response(row),
    )


@router.put("", response_model=RestaurantSettingsResponse)
async def save_settings(
    body: RestaurantSettingsUpdate,
    db: AsyncSession = Depends(get_db),
) -> RestaurantSettingsResponse:
    row = await settings_service.save_restaurant_settings(db, body)
    return settings_service.build_response(row)
