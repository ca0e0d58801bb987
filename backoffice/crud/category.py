from ..models.category import Category
from .base import Repository


class CategoryRepository(Repository[Category]):
    model = Category
    entity_name = "Category"
    unique_constraint = "uq_categories_name_active"
