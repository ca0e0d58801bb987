from .admin_service import AdminService
from .brand_service import BrandService
from .category_service import CategoryService
from .item_service import ItemService
from .permission_service import PermissionService
from .role_service import RoleService

__all__ = [
    "AdminService",
    "BrandService",
    "CategoryService",
    "ItemService",
    "PermissionService",
    "RoleService",
]
