from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
import uuid

from bistro.models.order import OrderStatus

class OrderMenuItemRef(BaseModel):
    name: str
    price: Decimal
    
    class Config:
        from_attributes = True

class OrderItemOut(BaseModel):
    id: uuid.UUID
    order_id: uuid.UUID
    menu_item_id: Optional[uuid.UUID] = None
    quantity: int
    price: Decimal
    menu_item: Optional[OrderMenuItemRef] = None
    
    class Config:
        from_attributes = True

class OrderOut(BaseModel):
    id: uuid.UUID
    user_id: int
    status: OrderStatus
    total_amount: Decimal
    delivery_address: Optional[str] = None
    contact_number: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemOut] = Field(default_factory=list)
    
    class Config:
        from_attributes = True

class AdminOrderOut(OrderOut):
    user_email: str = "Unknown"
    user_name: str = "Unknown"

class OrderStatusUpdate(BaseModel):
    status: OrderStatus

class CheckoutRequest(BaseModel):
    delivery_address: Optional[str] = Field(None, max_length=500)
    contact_number: Optional[str] = Field(None, max_length=32)
