import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.models.table import DiningTable, TableStatus
from restaurant_pos.services.errors import InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)


async def list_tables(db: AsyncSession) -> list[DiningTable]:
    result = await db.execute(select(DiningTable).order_by(DiningTable.id))
    return list(result.scalars().all())


async def get_table(db: AsyncSession, table_id: int) -> DiningTable:
    table = await db.get(DiningTable, table_id)
    if table is None:
        raise NotFoundError(f"Table {table_id} not found")
    return table


async def add_table(db: AsyncSession, name: str, seats: int) -> DiningTable:
    name = name.strip()
    if not name:
        raise ValueError("Table name must not be blank")

    existing = await db.execute(select(DiningTable).where(DiningTable.name == name))
    if existing.scalars().first() is not None:
        raise InvalidStateError(f"Table {name!r} already exists")

    table = DiningTable(name=name, seats=seats, status=TableStatus.AVAILABLE)
    db.add(table)
    await db.commit()
    logger.info("Table added", extra={"table_id": table.id, "seats": seats})
    return table


async def update_table_status(db: AsyncSession, table_id: int, status: TableStatus) -> DiningTable:
    """Manual status change from the floor plan (reserve, release)."""
    table = await get_table(db, table_id)
    if table.current_order_id is not None and status != TableStatus.OCCUPIED:
        raise InvalidStateError(
            f"Table {table.name!r} has open order {table.current_order_id}; settle or cancel it first"
        )
    table.status = status
    await db.commit()
    logger.info("Table status changed", extra={"table_id": table_id, "status": status.value})
    return table
