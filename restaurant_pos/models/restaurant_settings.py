from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_pos.database import Base


class RestaurantSettings(Base):
    """Single-row table describing the restaurant the benchmarks are tuned for."""

    __tablename__ = "restaurant_settings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    restaurant_type: Mapped[str] = mapped_column(String(32), nullable=False)
    city_tier: Mapped[str | None] = mapped_column(String(16), nullable=True)
    region: Mapped[str | None] = mapped_column(String(16), nullable=True)
    restaurant_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
