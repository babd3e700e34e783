import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_pos.database import AsyncSessionLocal
from restaurant_pos.models.menu import MenuCategory, MenuItem
from restaurant_pos.models.table import DiningTable
from restaurant_pos.services.errors import NotFoundError

logger = logging.getLogger(__name__)

_CATEGORY_SEED = ["Beverages", "Snacks", "Mains", "Desserts"]

_MENU_SEED = [
    ("Beverages", "Filter Coffee", "South Indian drip coffee", Decimal("90.00")),
    ("Beverages", "Cold Coffee", "Blended with ice cream", Decimal("160.00")),
    ("Beverages", "Masala Chai", "Spiced milk tea", Decimal("60.00")),
    ("Snacks", "Veg Sandwich", "Grilled, with mint chutney", Decimal("140.00")),
    ("Snacks", "Paneer Roll", "Tandoori paneer in a paratha", Decimal("180.00")),
    ("Snacks", "French Fries", "Salted, with ketchup", Decimal("120.00")),
    ("Mains", "Chicken Biryani", "Hyderabadi dum biryani", Decimal("320.00")),
    ("Mains", "Paneer Butter Masala", "With two butter naan", Decimal("280.00")),
    ("Desserts", "Chocolate Brownie", "Served warm", Decimal("150.00")),
    ("Desserts", "Gulab Jamun", "Two pieces", Decimal("80.00")),
]

_TABLE_SEED = [("Table 1", 4), ("Table 2", 2), ("Table 3", 6), ("Table 4", 4), ("Table 5", 2), ("Table 6", 8)]


async def seed_demo_data() -> None:
    """Populate menu and tables if the menu is empty. Called once on startup."""
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(MenuItem).limit(1))
        if result.scalars().first() is not None:
            return

        categories = {}
        for position, name in enumerate(_CATEGORY_SEED, start=1):
            category = MenuCategory(name=name, display_order=position)
            db.add(category)
            categories[name] = category
        await db.flush()  # obtain category ids before inserting items

        for category_name, name, description, price in _MENU_SEED:
            db.add(
                MenuItem(
                    name=name,
                    description=description,
                    price=price,
                    category_id=categories[category_name].id,
                )
            )

        existing_tables = await db.execute(select(DiningTable).limit(1))
        if existing_tables.scalars().first() is None:
            for name, seats in _TABLE_SEED:
                db.add(DiningTable(name=name, seats=seats))

        await db.commit()
        logger.info(
            "Seeded demo data",
            extra={"menu_items": len(_MENU_SEED), "categories": len(_CATEGORY_SEED)},
        )


async def list_categories(db: AsyncSession) -> list[MenuCategory]:
    result = await db.execute(
        select(MenuCategory).order_by(MenuCategory.display_order, MenuCategory.id)
    )
    return list(result.scalars().all())


async def list_menu_items(db: AsyncSession, available_only: bool = False) -> list[MenuItem]:
    query = select(MenuItem).order_by(MenuItem.name)
    if available_only:
        query = query.where(MenuItem.is_available.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def toggle_availability(db: AsyncSession, item_id: int) -> MenuItem:
    item = await db.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError(f"Menu item {item_id} not found")
    item.is_available = not item.is_available
    await db.commit()
    logger.info(
        "Menu item availability changed",
        extra={"menu_item_id": item_id, "is_available": item.is_available},
    )
    return item
