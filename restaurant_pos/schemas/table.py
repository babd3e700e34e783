from pydantic import BaseModel, Field

from restaurant_pos.models.table import TableStatus


class TableCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    seats: int = Field(default=4, ge=1)


class TableStatusUpdate(BaseModel):
    status: TableStatus


class TableResponse(BaseModel):
    id: int
    name: str
    seats: int
    status: TableStatus
    current_order_id: int | None

    model_config = {"from_attributes": True}
