from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_pos.database import Base


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


class DiningTable(Base):
    __tablename__ = "tables"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    seats: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[TableStatus] = mapped_column(
        SAEnum(TableStatus, name="tablestatus", values_callable=lambda e: [m.value for m in e]),
        default=TableStatus.AVAILABLE,
        nullable=False,
    )
    # Plain column rather than a foreign key: orders already point at tables.
    current_order_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
