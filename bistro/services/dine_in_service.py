import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from bistro.core.config import settings
from bistro.schemas.dine_in import (
    Bill, DineInOrder, DineInStatus, OrderLineItem, PaymentMethod, TableStatus,
)
from bistro.schemas.menu import MAX_QUANTITY, CatalogItem
from bistro.services.bill_service import bill_service
from bistro.services.table_registry import TableRegistry

logger = logging.getLogger(__name__)

class DineInError(Exception):
    pass

class TableUnavailableError(DineInError):
    pass

class NoActiveOrderError(DineInError):
    def __init__(self, message: str = "No active order. Please create an order first."):
        super().__init__(message)

class OrderAlreadyActiveError(DineInError):
    pass

def _tip(value) -> Decimal:
    tip_percentage = Decimal(value)
    if tip_percentage < 0:
        raise ValueError("tip percentage must be non-negative")
    return tip_percentage

def _quantity(value: int) -> int:
    if value < 1 or value > MAX_QUANTITY:
        raise ValueError(f"quantity must be between 1 and {MAX_QUANTITY}")
    return value

class DineInSession:
    """State of the dine-in dashboard: tables, the active order and history.

    At most one order is active. Creating, completing and cancelling an order
    update the table registry in the same call so a table is occupied exactly
    while an active order holds it.

    Line edits price the new lines first and only then write them to the
    order, so a rejected edit leaves both the lines and the totals untouched.
    """
    
    def __init__(self, tables: TableRegistry):
        self.tables = tables
        self.active_order: Optional[DineInOrder] = None
        self.history: List[DineInOrder] = []
    
    @classmethod
    def with_tables(cls, count: Optional[int] = None) -> "DineInSession":
        return cls(TableRegistry(settings.TABLE_COUNT if count is None else count))
    
    def reset(self) -> None:
        self.tables.reset()
        self.active_order = None
        self.history = []
    
    def _require_active(self) -> DineInOrder:
        if self.active_order is None:
            raise NoActiveOrderError()
        return self.active_order
    
    def _find_line(self, line_item_id: str) -> Optional[OrderLineItem]:
        for line in self._require_active().items:
            if line.id == line_item_id:
                return line
        return None
    
    @staticmethod
    def _apply_bill(order: DineInOrder, bill: Bill, tip_percentage: Decimal) -> None:
        order.tip_percentage = tip_percentage
        order.subtotal = bill.subtotal
        order.tax = bill.tax
        order.tip = bill.tip
        order.total = bill.total
    
    def create_order(self, table_number: int) -> DineInOrder:
        table = self.tables.find_by_number(table_number)
        if table is None or table.status != TableStatus.AVAILABLE:
            raise TableUnavailableError("This table is not available")
        if self.active_order is not None:
            raise OrderAlreadyActiveError(
                f"Table {self.active_order.table_number} already has an active order"
            )
        
        order = DineInOrder(
            id=str(uuid.uuid4()),
            table_number=table_number,
            created_at=datetime.now(timezone.utc),
        )
        self.tables.set_status(table_number, TableStatus.OCCUPIED)
        self.active_order = order
        logger.info("Created order %s for table %d", order.id, table_number)
        return order
    
    def add_item(
        self,
        menu_item: CatalogItem,
        quantity: int = 1,
        notes: str = "",
        tip_percentage: Decimal = Decimal("0"),
    ) -> DineInOrder:
        order = self._require_active()
        tip_percentage = _tip(tip_percentage)
        _quantity(quantity)
        
        # Lines merge only when both the item and the notes match exactly
        target = next(
            (line for line in order.items if line.menu_item.id == menu_item.id and line.notes == notes),
            None,
        )
        pairs = [(line.menu_item.price, line.quantity) for line in order.items if line is not target]
        if target is not None:
            new_quantity = _quantity(target.quantity + quantity)
            pairs.append((menu_item.price, new_quantity))
        else:
            pairs.append((menu_item.price, quantity))
        bill = bill_service.compute_bill(pairs, tip_percentage)
        
        if target is not None:
            target.quantity = new_quantity
        else:
            order.items.append(OrderLineItem(
                id=str(uuid.uuid4()), menu_item=menu_item, quantity=quantity, notes=notes,
            ))
        self._apply_bill(order, bill, tip_percentage)
        logger.info("Added %dx %s to order %s", quantity, menu_item.name, order.id)
        return order
    
    def remove_item(self, line_item_id: str, tip_percentage: Decimal = Decimal("0")) -> DineInOrder:
        order = self._require_active()
        tip_percentage = _tip(tip_percentage)
        remaining = [line for line in order.items if line.id != line_item_id]
        bill = bill_service.compute_bill(
            ((line.menu_item.price, line.quantity) for line in remaining), tip_percentage
        )
        order.items = remaining
        self._apply_bill(order, bill, tip_percentage)
        return order
    
    def update_quantity(
        self, line_item_id: str, quantity: int, tip_percentage: Decimal = Decimal("0")
    ) -> DineInOrder:
        order = self._require_active()
        tip_percentage = _tip(tip_percentage)
        # Below 1 clamps to 1 rather than removing the line
        quantity = _quantity(max(1, quantity))
        line = self._find_line(line_item_id)
        bill = bill_service.compute_bill(
            (
                (item.menu_item.price, quantity if item is line else item.quantity)
                for item in order.items
            ),
            tip_percentage,
        )
        if line is not None:
            line.quantity = quantity
        self._apply_bill(order, bill, tip_percentage)
        return order
    
    def update_notes(self, line_item_id: str, notes: str) -> DineInOrder:
        # Notes do not affect price and do not trigger a re-merge
        order = self._require_active()
        line = self._find_line(line_item_id)
        if line is not None:
            line.notes = notes
        return order
    
    def calculate_bill(self, tip_percentage: Decimal = Decimal("0")) -> DineInOrder:
        order = self._require_active()
        tip_percentage = _tip(tip_percentage)
        bill = bill_service.compute_bill(
            ((line.menu_item.price, line.quantity) for line in order.items),
            tip_percentage,
        )
        self._apply_bill(order, bill, tip_percentage)
        return order
    
    def _close(self, status: DineInStatus) -> Optional[DineInOrder]:
        order = self.active_order
        if order is None:
            return None
        order.status = status
        self.history.append(order)
        if self.tables.find_by_number(order.table_number) is not None:
            self.tables.set_status(order.table_number, TableStatus.AVAILABLE)
        self.active_order = None
        logger.info("Order %s for table %d %s", order.id, order.table_number, status.value)
        return order
    
    def complete_order(self, payment_method: PaymentMethod = PaymentMethod.CARD) -> Optional[DineInOrder]:
        """Close the active order as paid; payment itself is simulated."""
        if self.active_order is not None:
            self.active_order.payment_method = payment_method
        return self._close(DineInStatus.COMPLETED)
    
    def cancel_order(self) -> Optional[DineInOrder]:
        return self._close(DineInStatus.CANCELED)
