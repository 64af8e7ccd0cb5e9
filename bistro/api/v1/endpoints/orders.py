from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from bistro.api.deps import get_cart
from bistro.core.database import get_db
from bistro.core.security import get_current_user
from bistro.models.user import User
from bistro.schemas.order import CheckoutRequest, OrderOut
from bistro.services.cart_service import Cart
from bistro.services.errors import StoreError
from bistro.services.order_service import EmptyCartError, order_service

router = APIRouter(prefix="/orders", tags=["Orders"])

@router.post("/checkout", response_model=OrderOut, status_code=201)
async def checkout(
    payload: CheckoutRequest,
    cart: Cart = Depends(get_cart),
    db: AsyncSession = Depends(get_db),
):
    # Payment is simulated: placing the order is the whole transaction
    try:
        return await order_service.place_order(db, cart, payload)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.get("/mine", response_model=List[OrderOut])
async def my_orders(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await order_service.list_for_user(db, current_user)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
