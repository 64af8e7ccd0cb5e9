from bistro.models.user import Profile, Role, User
from bistro.models.menu import MenuCategory, MenuItem
from bistro.models.cart import CartItem
from bistro.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "CartItem",
    "MenuCategory",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Profile",
    "Role",
    "User",
]
