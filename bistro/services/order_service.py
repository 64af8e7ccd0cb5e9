import logging
import uuid
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bistro.models.cart import CartItem
from bistro.models.order import Order, OrderItem, OrderStatus
from bistro.models.user import User
from bistro.schemas.order import AdminOrderOut, CheckoutRequest, OrderOut
from bistro.services.cart_service import Cart
from bistro.services.errors import NotFoundError, StoreError
from bistro.services.menu_service import matches_query

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

class EmptyCartError(ValueError):
    pass

class InvalidStatusTransitionError(ValueError):
    def __init__(self, current: OrderStatus, new: OrderStatus):
        super().__init__(f"Cannot change order status from {current.value} to {new.value}")
        self.current = current
        self.new = new

def _with_items(stmt):
    return stmt.options(
        selectinload(Order.items).selectinload(OrderItem.menu_item),
        selectinload(Order.user).selectinload(User.profile),
    ).execution_options(populate_existing=True)

class OrderService:
    @staticmethod
    def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
        return new in ALLOWED_TRANSITIONS[current]
    
    @staticmethod
    async def get_order(db: AsyncSession, order_id: uuid.UUID) -> Order:
        try:
            order = await db.scalar(_with_items(select(Order).where(Order.id == order_id)))
        except SQLAlchemyError as exc:
            logger.exception("Error fetching order %s", order_id)
            raise StoreError("Failed to load order") from exc
        if order is None:
            raise NotFoundError("Order not found")
        return order
    
    async def place_order(self, db: AsyncSession, cart: Cart, request: CheckoutRequest) -> Order:
        """Turn the cart into a pending order and empty the cart in one commit."""
        lines = [item for item in cart.items if item.menu_item is not None]
        if not lines:
            raise EmptyCartError("Your cart is empty")
        
        summary = cart.summary
        order_id = uuid.uuid4()
        db.add(Order(
            id=order_id,
            user_id=cart.user_id,
            status=OrderStatus.PENDING,
            total_amount=summary.total,
            delivery_address=request.delivery_address,
            contact_number=request.contact_number,
            items=[
                OrderItem(
                    id=uuid.uuid4(),
                    menu_item_id=item.menu_item_id,
                    quantity=item.quantity,
                    price=item.menu_item.price,
                )
                for item in lines
            ],
        ))
        try:
            await db.execute(delete(CartItem).where(CartItem.user_id == cart.user_id))
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.exception("Error placing order for user %s", cart.user_id)
            raise StoreError("Failed to place order") from exc
        cart.items = []
        logger.info("Order %s placed by user %s, total %s", order_id, cart.user_id, summary.total)
        return await self.get_order(db, order_id)
    
    @staticmethod
    async def list_for_user(db: AsyncSession, user: User) -> List[Order]:
        user_id = user.id
        try:
            rows = await db.scalars(
                _with_items(select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc()))
            )
            return list(rows.all())
        except SQLAlchemyError as exc:
            logger.exception("Error fetching orders for user %s", user_id)
            raise StoreError("Failed to load your orders") from exc
    
    @staticmethod
    async def list_all(db: AsyncSession, query: Optional[str] = None) -> List[AdminOrderOut]:
        try:
            rows = (await db.scalars(_with_items(select(Order).order_by(Order.created_at.desc())))).all()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching orders")
            raise StoreError("Failed to load orders") from exc
        
        orders = []
        for row in rows:
            profile = row.user.profile if row.user else None
            order = AdminOrderOut(
                **OrderOut.model_validate(row).model_dump(),
                user_email=row.user.email if row.user else "Unknown",
                user_name=(profile.full_name if profile and profile.full_name else "Unknown"),
            )
            if matches_query(query, str(order.id), order.user_email, order.contact_number, order.status.value):
                orders.append(order)
        return orders
    
    async def update_status(self, db: AsyncSession, order_id: uuid.UUID, new_status: OrderStatus) -> Order:
        order = await self.get_order(db, order_id)
        if not self.can_transition(order.status, new_status):
            raise InvalidStatusTransitionError(order.status, new_status)
        order.status = new_status
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.exception("Error updating status of order %s", order_id)
            raise StoreError("Failed to update order status") from exc
        logger.info("Order %s status changed to %s", order_id, new_status.value)
        return await self.get_order(db, order_id)
    
    @staticmethod
    async def delete_order(db: AsyncSession, order_id: uuid.UUID) -> None:
        try:
            await db.execute(delete(OrderItem).where(OrderItem.order_id == order_id))
            result = await db.execute(delete(Order).where(Order.id == order_id))
            if result.rowcount == 0:
                await db.rollback()
                raise NotFoundError("Order not found")
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.exception("Error deleting order %s", order_id)
            raise StoreError("Failed to delete order") from exc

order_service = OrderService()
