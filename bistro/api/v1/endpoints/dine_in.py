from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List
from decimal import Decimal
from bistro.api.deps import get_dine_in_session
from bistro.schemas.dine_in import (
    ZERO, AddItemRequest, BillRequest, CompleteOrderRequest, CreateOrderRequest,
    DineInOrder, NotesUpdate, QuantityUpdate, Table,
)
from bistro.schemas.menu import CatalogCategory
from bistro.services.catalog_service import catalog_service
from bistro.services.dine_in_service import DineInError, DineInSession, NoActiveOrderError

router = APIRouter(prefix="/dine-in", tags=["Dine-in"])

def _conflict(e: DineInError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(e))

def _invalid(e: ValueError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(e))

@router.get("/menu", response_model=List[CatalogCategory])
async def dine_in_menu():
    return catalog_service.categories()

@router.get("/tables", response_model=List[Table])
async def list_tables(session: DineInSession = Depends(get_dine_in_session)):
    return session.tables.all()

@router.post("/orders", response_model=DineInOrder, status_code=201)
async def create_order(
    payload: CreateOrderRequest,
    session: DineInSession = Depends(get_dine_in_session),
):
    try:
        return session.create_order(payload.table_number)
    except DineInError as e:
        raise _conflict(e)

@router.get("/orders/active", response_model=DineInOrder)
async def get_active_order(session: DineInSession = Depends(get_dine_in_session)):
    if session.active_order is None:
        raise HTTPException(status_code=404, detail=str(NoActiveOrderError()))
    return session.active_order

@router.get("/orders/history", response_model=List[DineInOrder])
async def order_history(session: DineInSession = Depends(get_dine_in_session)):
    return session.history

@router.post("/orders/active/items", response_model=DineInOrder)
async def add_item(
    payload: AddItemRequest,
    session: DineInSession = Depends(get_dine_in_session),
):
    menu_item = catalog_service.find_item(payload.menu_item_id)
    if menu_item is None:
        raise HTTPException(status_code=404, detail=f"Menu item {payload.menu_item_id} not found")
    try:
        return session.add_item(menu_item, payload.quantity, payload.notes, payload.tip_percentage)
    except DineInError as e:
        raise _conflict(e)
    except ValueError as e:
        raise _invalid(e)

@router.delete("/orders/active/items/{line_item_id}", response_model=DineInOrder)
async def remove_item(
    line_item_id: str,
    tip_percentage: Decimal = Query(ZERO, ge=0),
    session: DineInSession = Depends(get_dine_in_session),
):
    try:
        return session.remove_item(line_item_id, tip_percentage)
    except DineInError as e:
        raise _conflict(e)

@router.patch("/orders/active/items/{line_item_id}/quantity", response_model=DineInOrder)
async def update_quantity(
    line_item_id: str,
    payload: QuantityUpdate,
    session: DineInSession = Depends(get_dine_in_session),
):
    try:
        return session.update_quantity(line_item_id, payload.quantity, payload.tip_percentage)
    except DineInError as e:
        raise _conflict(e)
    except ValueError as e:
        raise _invalid(e)

@router.patch("/orders/active/items/{line_item_id}/notes", response_model=DineInOrder)
async def update_notes(
    line_item_id: str,
    payload: NotesUpdate,
    session: DineInSession = Depends(get_dine_in_session),
):
    try:
        return session.update_notes(line_item_id, payload.notes)
    except DineInError as e:
        raise _conflict(e)

@router.post("/orders/active/bill", response_model=DineInOrder)
async def calculate_bill(
    payload: BillRequest,
    session: DineInSession = Depends(get_dine_in_session),
):
    try:
        return session.calculate_bill(payload.tip_percentage)
    except DineInError as e:
        raise _conflict(e)

@router.post("/orders/active/complete", response_model=DineInOrder)
async def complete_order(
    payload: CompleteOrderRequest = CompleteOrderRequest(),
    session: DineInSession = Depends(get_dine_in_session),
):
    order = session.complete_order(payload.payment_method)
    if order is None:
        raise _conflict(NoActiveOrderError())
    return order

@router.post("/orders/active/cancel", response_model=DineInOrder)
async def cancel_order(session: DineInSession = Depends(get_dine_in_session)):
    order = session.cancel_order()
    if order is None:
        raise _conflict(NoActiveOrderError())
    return order
