import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import get_db
from restaurant_pos.routers.deps import request_id, to_http_error
from restaurant_pos.schemas.table import TableCreate, TableResponse, TableStatusUpdate
from restaurant_pos.services import table_service
from restaurant_pos.services.errors import POSError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[TableResponse])
async def list_tables(db: AsyncSession = Depends(get_db)) -> list[TableResponse]:
    return [TableResponse.model_validate(t) for t in await table_service.list_tables(db)]


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def add_table(
    body: TableCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> TableResponse:
    logger.info("Received add_table request", extra={"request_id": request_id(request)})
    try:
        table = await table_service.add_table(db, body.name, body.seats)
    except (POSError, ValueError) as exc:
        raise to_http_error(exc)
    return TableResponse.model_validate(table)


@router.patch("/{table_id}/status", response_model=TableResponse)
async def update_table_status(
    table_id: int,
    body: TableStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> TableResponse:
    try:
        table = await table_service.update_table_status(db, table_id, body.status)
    except POSError as exc:
        raise to_http_error(exc)
    return TableResponse.model_validate(table)
