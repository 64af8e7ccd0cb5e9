from fastapi import APIRouter
from .auth import router as auth_router
from .users import router as users_router
from .menu import router as menu_router
from .dine_in import router as dine_in_router
from .cart import router as cart_router
from .orders import router as orders_router
from .admin import router as admin_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(menu_router)
router.include_router(dine_in_router)
router.include_router(cart_router)
router.include_router(orders_router)
router.include_router(admin_router)
