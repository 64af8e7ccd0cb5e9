from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from bistro.core.database import get_db
from bistro.core.security import get_current_user
from bistro.models.user import User
from bistro.services.cart_service import Cart
from bistro.services.dine_in_service import DineInSession
from bistro.services.errors import StoreError

def get_dine_in_session(request: Request) -> DineInSession:
    return request.app.state.dine_in

async def get_cart(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Cart:
    try:
        return await Cart.load(db, current_user)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
