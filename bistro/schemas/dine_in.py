"""In-memory models for the dine-in dashboard.

These are mutated in place by :class:`bistro.services.dine_in_service.DineInSession`
and returned to the client as-is.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
import enum

from bistro.schemas.menu import MAX_QUANTITY, CatalogItem

ZERO = Decimal("0.00")

class TableStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"

class DineInStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELED = "canceled"

class PaymentMethod(str, enum.Enum):
    CARD = "card"
    CASH = "cash"

class Table(BaseModel):
    number: int
    status: TableStatus = TableStatus.AVAILABLE

class Bill(BaseModel):
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    tip: Decimal = ZERO
    total: Decimal = ZERO

class OrderLineItem(BaseModel):
    id: str
    menu_item: CatalogItem
    quantity: int = Field(1, ge=1)
    notes: str = ""

class DineInOrder(BaseModel):
    id: str
    table_number: int
    items: List[OrderLineItem] = Field(default_factory=list)
    status: DineInStatus = DineInStatus.ACTIVE
    created_at: datetime
    tip_percentage: Decimal = ZERO
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    tip: Decimal = ZERO
    total: Decimal = ZERO
    payment_method: Optional[PaymentMethod] = None

# Requests

class CreateOrderRequest(BaseModel):
    table_number: int

class AddItemRequest(BaseModel):
    menu_item_id: str
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY)
    notes: str = ""
    tip_percentage: Decimal = Field(ZERO, ge=0)

class QuantityUpdate(BaseModel):
    # Values below 1 are clamped by the session rather than rejected
    quantity: int = Field(..., le=MAX_QUANTITY)
    tip_percentage: Decimal = Field(ZERO, ge=0)

class NotesUpdate(BaseModel):
    notes: str = ""

class BillRequest(BaseModel):
    tip_percentage: Decimal = Field(ZERO, ge=0)

class CompleteOrderRequest(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CARD
