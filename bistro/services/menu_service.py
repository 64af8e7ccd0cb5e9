import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bistro.models.menu import MenuCategory, MenuItem
from bistro.schemas.menu import MenuCategoryCreate, MenuItemCreate, MenuItemUpdate
from bistro.services.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

class DuplicateCategoryError(ValueError):
    pass

def matches_query(query: Optional[str], *fields: Optional[str]) -> bool:
    """Case-insensitive substring match of ``query`` against any field."""
    if not query:
        return True
    needle = query.lower()
    return any(field and needle in field.lower() for field in fields)

class MenuService:
    @staticmethod
    async def _commit(db: AsyncSession, failure_message: str) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.exception(failure_message)
            raise StoreError(failure_message) from exc
    
    @staticmethod
    async def list_items(db: AsyncSession, query: Optional[str] = None) -> List[MenuItem]:
        try:
            items = (await db.scalars(select(MenuItem).order_by(MenuItem.name))).all()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching menu items")
            raise StoreError("Failed to load menu items") from exc
        return [item for item in items if matches_query(query, item.name, item.description)]
    
    @staticmethod
    async def get_item(db: AsyncSession, item_id: uuid.UUID) -> MenuItem:
        try:
            item = await db.get(MenuItem, item_id)
        except SQLAlchemyError as exc:
            logger.exception("Error fetching menu item %s", item_id)
            raise StoreError("Failed to load menu item") from exc
        if item is None:
            raise NotFoundError("Menu item not found")
        return item
    
    async def create_item(self, db: AsyncSession, data: MenuItemCreate) -> MenuItem:
        item = MenuItem(id=uuid.uuid4(), **data.model_dump())
        db.add(item)
        await self._commit(db, "Failed to add menu item")
        await db.refresh(item)
        logger.info("Menu item %s (%s) added", item.id, item.name)
        return item
    
    async def update_item(self, db: AsyncSession, item_id: uuid.UUID, data: MenuItemUpdate) -> MenuItem:
        item = await self.get_item(db, item_id)
        for field, value in data.model_dump().items():
            setattr(item, field, value)
        await self._commit(db, "Failed to update menu item")
        await db.refresh(item)
        return item
    
    async def delete_item(self, db: AsyncSession, item_id: uuid.UUID) -> None:
        item = await self.get_item(db, item_id)
        await db.delete(item)
        await self._commit(db, "Failed to delete menu item")
        logger.info("Menu item %s deleted", item_id)
    
    @staticmethod
    async def list_categories(db: AsyncSession) -> List[MenuCategory]:
        try:
            return list((await db.scalars(select(MenuCategory).order_by(MenuCategory.name))).all())
        except SQLAlchemyError as exc:
            logger.exception("Error fetching menu categories")
            raise StoreError("Failed to load menu categories") from exc
    
    async def create_category(self, db: AsyncSession, data: MenuCategoryCreate) -> MenuCategory:
        try:
            existing = await db.scalar(select(MenuCategory).where(MenuCategory.name == data.name))
        except SQLAlchemyError as exc:
            logger.exception("Error checking category %s", data.name)
            raise StoreError("Failed to add category") from exc
        if existing is not None:
            raise DuplicateCategoryError(f"Category {data.name!r} already exists")
        category = MenuCategory(id=uuid.uuid4(), **data.model_dump())
        db.add(category)
        await self._commit(db, "Failed to add category")
        return category

menu_service = MenuService()
