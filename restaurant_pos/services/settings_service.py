import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.analytics.benchmark_utils import get_restaurant_type_display_name
from restaurant_pos.models.restaurant_settings import RestaurantSettings
from restaurant_pos.schemas.restaurant_settings import (
    RestaurantSettingsResponse,
    RestaurantSettingsUpdate,
)

logger = logging.getLogger(__name__)


def build_response(row: RestaurantSettings) -> RestaurantSettingsResponse:
    return RestaurantSettingsResponse(
        id=row.id,
        restaurant_type=row.restaurant_type,
        restaurant_type_display_name=get_restaurant_type_display_name(row.restaurant_type),
        city_tier=row.city_tier,
        region=row.region,
        restaurant_name=row.restaurant_name,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


async def get_restaurant_settings(db: AsyncSession) -> RestaurantSettings | None:
    """The settings row is a singleton; only one restaurant per database."""
    result = await db.execute(select(RestaurantSettings).order_by(RestaurantSettings.id).limit(1))
    return result.scalars().first()


async def save_restaurant_settings(
    db: AsyncSession, update: RestaurantSettingsUpdate
) -> RestaurantSettings:
    values = {
        "restaurant_type": update.restaurant_type.value,
        "city_tier": update.city_tier.value if update.city_tier else None,
        "region": update.region.value if update.region else None,
        "restaurant_name": (update.restaurant_name or "").strip() or None,
    }

    row = await get_restaurant_settings(db)
    if row is None:
        row = RestaurantSettings(**values)
        db.add(row)
        action = "created"
    else:
        for key, value in values.items():
            setattr(row, key, value)
        row.updated_at = datetime.utcnow()
        action = "updated"

    await db.commit()
    logger.info(
        "Restaurant settings %s",
        action,
        extra={"restaurant_type": values["restaurant_type"], "city_tier": values["city_tier"]},
    )
    return row


async def is_restaurant_configured(db: AsyncSession) -> bool:
    row = await get_restaurant_settings(db)
    return row is not None and bool(row.restaurant_type)
