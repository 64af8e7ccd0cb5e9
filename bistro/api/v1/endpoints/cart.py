from fastapi import APIRouter, Depends, HTTPException
import uuid
from bistro.api.deps import get_cart
from bistro.schemas.cart import CartAdd, CartOut, CartQuantityUpdate
from bistro.services.cart_service import Cart
from bistro.services.errors import NotFoundError, StoreError

router = APIRouter(prefix="/cart", tags=["Cart"])

@router.get("/", response_model=CartOut)
async def get_cart_contents(cart: Cart = Depends(get_cart)):
    return cart.to_out()

@router.post("/items", response_model=CartOut, status_code=201)
async def add_to_cart(payload: CartAdd, cart: Cart = Depends(get_cart)):
    try:
        await cart.add(payload.menu_item_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        # Malformed menu item id or a quantity out of range
        raise HTTPException(status_code=422, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return cart.to_out()

@router.patch("/items/{cart_item_id}", response_model=CartOut)
async def update_cart_item(
    cart_item_id: uuid.UUID,
    payload: CartQuantityUpdate,
    cart: Cart = Depends(get_cart),
):
    try:
        await cart.update_quantity(cart_item_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return cart.to_out()

@router.delete("/items/{cart_item_id}", response_model=CartOut)
async def remove_from_cart(cart_item_id: uuid.UUID, cart: Cart = Depends(get_cart)):
    try:
        await cart.remove(cart_item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return cart.to_out()

@router.delete("/", response_model=CartOut)
async def clear_cart(cart: Cart = Depends(get_cart)):
    try:
        await cart.clear()
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return cart.to_out()
