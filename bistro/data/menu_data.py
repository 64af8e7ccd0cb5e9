"""Static menu catalog shared by the dine-in dashboard and the online menu.

Ids are derived from each item's slug with ``uuid5`` so they are fixed at
authoring time and identical in every process and in the ``menu_items`` table.
"""

import uuid
from decimal import Decimal

from bistro.schemas.menu import CatalogItem

CATALOG_NAMESPACE = uuid.UUID("6f1c7d3e-2b8a-4f45-9c1e-3a5d7b9e0c21")

def catalog_id(slug: str) -> str:
    return str(uuid.uuid5(CATALOG_NAMESPACE, slug))

# (category slug, display name)
CATEGORIES = [
    ("appetizers", "Appetizers"),
    ("mains", "Main Courses"),
    ("desserts", "Desserts"),
    ("beverages", "Beverages"),
]

_RAW_ITEMS = [
    # Appetizers
    {"slug": "app-1", "name": "Bruschetta", "price": "8.99", "category": "appetizers",
     "description": "Toasted bread topped with tomatoes, garlic, and fresh basil", "vegetarian": True},
    {"slug": "app-2", "name": "Mozzarella Sticks", "price": "7.99", "category": "appetizers",
     "description": "Breaded mozzarella served with marinara sauce", "vegetarian": True},
    {"slug": "app-3", "name": "Garlic Bread", "price": "5.99", "category": "appetizers",
     "description": "Toasted bread with garlic butter and herbs", "vegetarian": True},
    # Main courses
    {"slug": "main-1", "name": "Spaghetti Bolognese", "price": "14.99", "category": "mains",
     "description": "Classic pasta with rich meat sauce and parmesan", "popular": True},
    {"slug": "main-2", "name": "Grilled Salmon", "price": "18.99", "category": "mains",
     "description": "Fresh salmon with lemon butter sauce and seasonal vegetables"},
    {"slug": "main-3", "name": "Chicken Alfredo", "price": "16.99", "category": "mains",
     "description": "Fettuccine pasta with creamy sauce and grilled chicken"},
    {"slug": "main-4", "name": "Margherita Pizza", "price": "12.99", "category": "mains",
     "description": "Classic pizza with tomatoes, mozzarella, and fresh basil",
     "vegetarian": True, "popular": True},
    # Desserts
    {"slug": "des-1", "name": "Tiramisu", "price": "6.99", "category": "desserts",
     "description": "Coffee-flavored Italian dessert with mascarpone", "vegetarian": True},
    {"slug": "des-2", "name": "Chocolate Lava Cake", "price": "7.99", "category": "desserts",
     "description": "Warm chocolate cake with a molten chocolate center", "vegetarian": True},
    # Beverages
    {"slug": "bev-1", "name": "Soft Drink", "price": "2.99", "category": "beverages",
     "description": "Cola, lemon-lime, or orange soda", "vegetarian": True},
    {"slug": "bev-2", "name": "Iced Tea", "price": "2.99", "category": "beverages",
     "description": "Freshly brewed sweet or unsweetened tea", "vegetarian": True},
    {"slug": "bev-3", "name": "Coffee", "price": "3.49", "category": "beverages",
     "description": "Regular or decaf coffee", "vegetarian": True},
]

MENU_ITEMS = [
    CatalogItem(id=catalog_id(raw["slug"]), **{**raw, "price": Decimal(raw["price"])})
    for raw in _RAW_ITEMS
]
