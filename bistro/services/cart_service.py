import logging
import uuid
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import List, Optional, Union

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bistro.models.cart import CartItem
from bistro.models.menu import MenuItem
from bistro.models.user import User
from bistro.schemas.cart import CartItemOut, CartOut, CheckoutSummary
from bistro.schemas.menu import MAX_QUANTITY, MenuItemOut
from bistro.services.bill_service import bill_service
from bistro.services.catalog_service import catalog_service
from bistro.services.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

def _check_quantity(quantity: int) -> int:
    if quantity < 1 or quantity > MAX_QUANTITY:
        raise ValueError(f"quantity must be between 1 and {MAX_QUANTITY}")
    return quantity

class Cart:
    """A user's cart: database rows plus the mirror returned to the client.

    Each mutation writes to the database first and touches ``items`` only
    after the commit succeeds, so a failed write leaves the mirror as it was.
    """
    
    def __init__(self, db: AsyncSession, user: User, items: List[CartItemOut]):
        self.db = db
        self.user = user
        self.user_id = user.id
        self.items = list(items)
        self.loading = False
    
    @classmethod
    async def load(cls, db: AsyncSession, user: User) -> "Cart":
        try:
            rows = await db.scalars(
                select(CartItem)
                .options(selectinload(CartItem.menu_item))
                .where(CartItem.user_id == user.id)
                .order_by(CartItem.created_at)
            )
            items = [CartItemOut.model_validate(row) for row in rows.all()]
        except SQLAlchemyError as exc:
            logger.exception("Error fetching cart for user %s", user.id)
            raise StoreError("Failed to load your cart") from exc
        return cls(db, user, items)
    
    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)
    
    @property
    def total_amount(self) -> Decimal:
        return sum(
            ((item.menu_item.price if item.menu_item else Decimal("0")) * item.quantity
             for item in self.items),
            Decimal("0"),
        )
    
    @property
    def summary(self) -> CheckoutSummary:
        return bill_service.compute_checkout(
            (item.menu_item.price, item.quantity) for item in self.items if item.menu_item
        )
    
    def to_out(self) -> CartOut:
        return CartOut(
            items=self.items,
            total_items=self.total_items,
            total_amount=self.total_amount,
            summary=self.summary,
        )
    
    def _find(self, cart_item_id: uuid.UUID) -> Optional[CartItemOut]:
        for item in self.items:
            if item.id == cart_item_id:
                return item
        return None
    
    @asynccontextmanager
    async def _round_trip(self, failure_message: str):
        self.loading = True
        try:
            yield
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.exception("%s (user %s)", failure_message, self.user_id)
            raise StoreError(failure_message) from exc
        finally:
            self.loading = False
    
    async def add(self, menu_item_id: Union[str, uuid.UUID], quantity: int) -> CartItemOut:
        _check_quantity(quantity)
        menu_item_id = catalog_service.normalize_menu_item_id(menu_item_id)
        
        try:
            menu_item = await self.db.get(MenuItem, menu_item_id)
        except SQLAlchemyError as exc:
            logger.exception("Error looking up menu item %s", menu_item_id)
            raise StoreError("Failed to add item to cart") from exc
        if menu_item is None:
            raise NotFoundError(f"Menu item {menu_item_id} not found")
        snapshot = MenuItemOut.model_validate(menu_item)
        
        existing = next((i for i in self.items if i.menu_item_id == menu_item_id), None)
        if existing is not None:
            new_quantity = _check_quantity(existing.quantity + quantity)
            async with self._round_trip("Failed to add item to cart"):
                await self.db.execute(
                    update(CartItem).where(CartItem.id == existing.id).values(quantity=new_quantity)
                )
            existing.quantity = new_quantity
            item = existing
        else:
            row_id = uuid.uuid4()
            async with self._round_trip("Failed to add item to cart"):
                await self.db.execute(
                    insert(CartItem).values(
                        id=row_id, user_id=self.user_id, menu_item_id=menu_item_id, quantity=quantity,
                    )
                )
            item = CartItemOut(
                id=row_id, user_id=self.user_id, menu_item_id=menu_item_id,
                quantity=quantity, menu_item=snapshot,
            )
            self.items.append(item)
        
        logger.info("Added %d x %s to cart of user %s", quantity, snapshot.name, self.user_id)
        return item
    
    async def update_quantity(self, cart_item_id: uuid.UUID, quantity: int) -> None:
        if quantity <= 0:
            return await self.remove(cart_item_id)
        
        item = self._find(cart_item_id)
        if item is None:
            raise NotFoundError("Cart item not found")
        _check_quantity(quantity)
        async with self._round_trip("Failed to update cart"):
            await self.db.execute(
                update(CartItem)
                .where(CartItem.id == cart_item_id, CartItem.user_id == self.user_id)
                .values(quantity=quantity)
            )
        item.quantity = quantity
    
    async def remove(self, cart_item_id: uuid.UUID) -> None:
        if self._find(cart_item_id) is None:
            raise NotFoundError("Cart item not found")
        async with self._round_trip("Failed to remove item from cart"):
            await self.db.execute(
                delete(CartItem).where(CartItem.id == cart_item_id, CartItem.user_id == self.user_id)
            )
        self.items = [item for item in self.items if item.id != cart_item_id]
    
    async def clear(self) -> None:
        async with self._round_trip("Failed to clear cart"):
            await self.db.execute(delete(CartItem).where(CartItem.user_id == self.user_id))
        self.items = []
