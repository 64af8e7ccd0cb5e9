from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
import uuid

# Largest quantity allowed on one order or cart line
MAX_QUANTITY = 999

class CatalogItem(BaseModel):
    """Read-only menu entry from the static catalog; ``id`` is canonical."""
    id: str
    slug: str
    name: str
    price: Decimal = Field(..., ge=0)
    description: str = ""
    category: str
    image: Optional[str] = None
    vegetarian: bool = False
    spicy: bool = False
    popular: bool = False

class CatalogCategory(BaseModel):
    id: str
    name: str
    items: List[CatalogItem]

class MenuCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class MenuCategoryOut(MenuCategoryCreate):
    id: uuid.UUID
    
    class Config:
        from_attributes = True

class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., ge=0)
    description: Optional[str] = None
    image: Optional[str] = None
    category_id: Optional[uuid.UUID] = None
    vegetarian: bool = False
    spicy: bool = False
    popular: bool = False

class MenuItemCreate(MenuItemBase):
    pass

class MenuItemUpdate(MenuItemBase):
    pass

class MenuItemOut(MenuItemBase):
    id: uuid.UUID
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
