from fastapi import APIRouter

from .admin import admins as admin_admins
from .admin import brands as admin_brands
from .admin import categories as admin_categories
from .admin import items as admin_items
from .admin import roles as admin_roles

router = APIRouter(prefix="/api")

_admin_routers = [
    admin_roles.router,
    admin_admins.router,
    admin_categories.router,
    admin_brands.router,
    admin_items.router,
]

for _router in _admin_routers:
    router.include_router(_router)
