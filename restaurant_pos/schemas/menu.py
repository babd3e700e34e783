from decimal import Decimal

from pydantic import BaseModel


class MenuCategoryResponse(BaseModel):
    id: int
    name: str
    display_order: int

    model_config = {"from_attributes": True}


class MenuItemResponse(BaseModel):
    id: int
    name: str
    description: str | None
    price: Decimal
    category_id: int | None
    is_available: bool

    model_config = {"from_attributes": True}
