from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import get_db
from restaurant_pos.schemas.analytics import AdminOverview
from restaurant_pos.services import analytics_service

router = APIRouter()


@router.get("/overview", response_model=AdminOverview)
async def admin_overview(db: AsyncSession = Depends(get_db)) -> AdminOverview:
    return await analytics_service.admin_overview(db)
