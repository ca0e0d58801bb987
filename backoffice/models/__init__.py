from .base import Base
from .admin import Admin
from .role import Role
from .permission import Permission
from .role_admin import RoleAdmin
from .admin_permission import AdminPermission
from .role_permission import RolePermission
from .category import Category
from .brand import Brand
from .item import Item

__all__ = [
    "Base",
    "Admin",
    "Role",
    "Permission",
    "RoleAdmin",
    "AdminPermission",
    "RolePermission",
    "Category",
    "Brand",
    "Item",
]
