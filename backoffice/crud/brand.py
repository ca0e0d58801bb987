from ..models.brand import Brand
from .base import Repository


class BrandRepository(Repository[Brand]):
    model = Brand
    entity_name = "Brand"
    unique_constraint = "uq_brands_name_active"
