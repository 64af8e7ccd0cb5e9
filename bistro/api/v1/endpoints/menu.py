from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from bistro.core.database import get_db
from bistro.schemas.menu import MenuCategoryOut, MenuItemOut
from bistro.services.errors import StoreError
from bistro.services.menu_service import menu_service

router = APIRouter(prefix="/menu", tags=["Menu"])

@router.get("/items", response_model=List[MenuItemOut])
async def list_menu_items(q: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    try:
        return await menu_service.list_items(db, q)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.get("/categories", response_model=List[MenuCategoryOut])
async def list_menu_categories(db: AsyncSession = Depends(get_db)):
    try:
        return await menu_service.list_categories(db)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
