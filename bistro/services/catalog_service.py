import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bistro.data.menu_data import CATEGORIES, MENU_ITEMS, catalog_id
from bistro.models.menu import MenuCategory, MenuItem
from bistro.schemas.menu import CatalogCategory, CatalogItem
from bistro.services.errors import StoreError

logger = logging.getLogger(__name__)

class InvalidMenuItemIdError(ValueError):
    pass

class CatalogService:
    def __init__(self, items: List[CatalogItem]):
        self._items = list(items)
        self._by_id = {item.id: item for item in self._items}
    
    def list_items(self, category: Optional[str] = None) -> List[CatalogItem]:
        if category is None:
            return list(self._items)
        return [item for item in self._items if item.category == category]
    
    def categories(self) -> List[CatalogCategory]:
        return [
            CatalogCategory(id=slug, name=name, items=self.list_items(slug))
            for slug, name in CATEGORIES
        ]
    
    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        try:
            return self._by_id.get(str(self.normalize_menu_item_id(item_id)))
        except InvalidMenuItemIdError:
            return None
    
    @staticmethod
    def normalize_menu_item_id(raw) -> uuid.UUID:
        """Return the canonical UUID for ``raw`` or reject it.

        Menu items always carry a stable id, so a malformed one is a client
        error rather than something to replace.
        """
        if isinstance(raw, uuid.UUID):
            return raw
        try:
            return uuid.UUID(str(raw).strip())
        except (TypeError, ValueError):
            raise InvalidMenuItemIdError(f"Invalid menu item id: {raw!r}")
    
    async def seed_catalog(self, db: AsyncSession) -> dict:
        """Insert the static categories and items that are not in the database yet."""
        existing_categories = {
            c.name: c for c in (await db.scalars(select(MenuCategory))).all()
        }
        category_ids = {}
        created_categories = 0
        for slug, name in CATEGORIES:
            category = existing_categories.get(name)
            if category is None:
                category = MenuCategory(id=uuid.UUID(catalog_id(f"category:{slug}")), name=name)
                db.add(category)
                created_categories += 1
            category_ids[slug] = category.id
        
        existing_items = set((await db.scalars(select(MenuItem.id))).all())
        created_items = 0
        for item in self._items:
            item_id = uuid.UUID(item.id)
            if item_id in existing_items:
                continue
            db.add(MenuItem(
                id=item_id,
                name=item.name,
                description=item.description or None,
                price=item.price,
                image=item.image,
                category_id=category_ids.get(item.category),
                vegetarian=item.vegetarian,
                spicy=item.spicy,
                popular=item.popular,
            ))
            created_items += 1
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.exception("Error seeding the menu catalog")
            raise StoreError("Failed to seed menu") from exc
        logger.info("Seeded catalog: %d categories, %d items", created_categories, created_items)
        return {"categories_created": created_categories, "items_created": created_items}

catalog_service = CatalogService(MENU_ITEMS)
