from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
from bistro.core.database import get_db
from bistro.core.security import require_admin
from bistro.schemas.menu import (
    MenuCategoryCreate, MenuCategoryOut, MenuItemCreate, MenuItemOut, MenuItemUpdate,
)
from bistro.schemas.order import AdminOrderOut, OrderOut, OrderStatusUpdate
from bistro.services.catalog_service import catalog_service
from bistro.services.errors import NotFoundError, StoreError
from bistro.services.menu_service import DuplicateCategoryError, menu_service
from bistro.services.order_service import InvalidStatusTransitionError, order_service

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])

# Menu

@router.get("/menu/items", response_model=List[MenuItemOut])
async def admin_list_menu_items(q: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    try:
        return await menu_service.list_items(db, q)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.post("/menu/items", response_model=MenuItemOut, status_code=201)
async def admin_create_menu_item(item_in: MenuItemCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await menu_service.create_item(db, item_in)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.put("/menu/items/{item_id}", response_model=MenuItemOut)
async def admin_update_menu_item(
    item_id: uuid.UUID,
    item_in: MenuItemUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await menu_service.update_item(db, item_id, item_in)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.delete("/menu/items/{item_id}", status_code=200)
async def admin_delete_menu_item(item_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    try:
        await menu_service.delete_item(db, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"status": "success"}

@router.get("/menu/categories", response_model=List[MenuCategoryOut])
async def admin_list_categories(db: AsyncSession = Depends(get_db)):
    try:
        return await menu_service.list_categories(db)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.post("/menu/categories", response_model=MenuCategoryOut, status_code=201)
async def admin_create_category(category_in: MenuCategoryCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await menu_service.create_category(db, category_in)
    except DuplicateCategoryError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.post("/menu/seed", response_model=dict)
async def admin_seed_menu(db: AsyncSession = Depends(get_db)):
    try:
        return await catalog_service.seed_catalog(db)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

# Orders

@router.get("/orders", response_model=List[AdminOrderOut])
async def admin_list_orders(q: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    try:
        return await order_service.list_all(db, q)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.patch("/orders/{order_id}/status", response_model=OrderOut)
async def admin_update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await order_service.update_status(db, order_id, payload.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.delete("/orders/{order_id}", status_code=200)
async def admin_delete_order(order_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    try:
        await order_service.delete_order(db, order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"status": "success"}
