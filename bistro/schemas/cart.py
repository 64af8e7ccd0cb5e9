from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
import uuid

from bistro.schemas.menu import MAX_QUANTITY, MenuItemOut

class CartItemOut(BaseModel):
    id: uuid.UUID
    user_id: int
    menu_item_id: uuid.UUID
    quantity: int
    menu_item: Optional[MenuItemOut] = None
    
    class Config:
        from_attributes = True

class CartAdd(BaseModel):
    # Validated against the canonical id format by the cart service
    menu_item_id: str
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY)

class CartQuantityUpdate(BaseModel):
    quantity: int = Field(..., le=MAX_QUANTITY)

class CheckoutSummary(BaseModel):
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal

class CartOut(BaseModel):
    items: List[CartItemOut]
    total_items: int
    total_amount: Decimal
    summary: CheckoutSummary
