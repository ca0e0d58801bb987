from ...admin.permissions import PermissionName
from ...crud.category import CategoryRepository
from ...schemas.catalog import CategoryResponse
from ...validation import CategoryForm
from .catalog_service import NamedCatalogService


class CategoryService(NamedCatalogService[CategoryResponse]):
    repository_class = CategoryRepository
    form = CategoryForm
    response = CategoryResponse
    view_permission = PermissionName.CATEGORIES_VIEW
    manage_permission = PermissionName.CATEGORIES_MANAGE
