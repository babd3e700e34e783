from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import get_db
from restaurant_pos.routers.deps import to_http_error
from restaurant_pos.schemas.menu import MenuCategoryResponse, MenuItemResponse
from restaurant_pos.services import menu_service
from restaurant_pos.services.errors import POSError

router = APIRouter()


@router.get("/categories", response_model=list[MenuCategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)) -> list[MenuCategoryResponse]:
    categories = await menu_service.list_categories(db)
    return [MenuCategoryResponse.model_validate(c) for c in categories]


@router.get("/items", response_model=list[MenuItemResponse])
async def list_menu_items(
    available_only: bool = False,
    db: AsyncSession = Depends(get_db),
) -> list[MenuItemResponse]:
    items = await menu_service.list_menu_items(db, available_only=available_only)
    return [MenuItemResponse.model_validate(i) for i in items]


@router.post("/items/{item_id}/toggle-availability", response_model=MenuItemResponse)
async def toggle_availability(
    item_id: int,
    db: AsyncSession = Depends(get_db),
) -> MenuItemResponse:
    try:
        item = await menu_service.toggle_availability(db, item_id)
    except POSError as exc:
        raise to_http_error(exc)
    return MenuItemResponse.model_validate(item)
