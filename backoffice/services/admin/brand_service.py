from ...admin.permissions import PermissionName
from ...crud.brand import BrandRepository
from ...schemas.catalog import BrandResponse
from ...validation import BrandForm
from .catalog_service import NamedCatalogService


class BrandService(NamedCatalogService[BrandResponse]):
    repository_class = BrandRepository
    form = BrandForm
    response = BrandResponse
    view_permission = PermissionName.BRANDS_VIEW
    manage_permission = PermissionName.BRANDS_MANAGE
