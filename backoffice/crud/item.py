from sqlalchemy import or_

from ..models.item import Item
from .base import Repository


class ItemRepository(Repository[Item]):
    model = Item
    entity_name = "Item"
    unique_constraint = "uq_items_name_active"

    async def search(
        self,
        keyword: str | None = None,
        category_id: int | None = None,
        brand_id: int | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Item], int]:
        """List active items, optionally narrowed by keyword, category and brand."""
        query = self._select()
        if keyword:
            query = query.where(
                or_(
                    Item.name.contains(keyword, autoescape=True),
                    Item.description.contains(keyword, autoescape=True),
                )
            )
        if category_id is not None:
            query = query.where(Item.category_id == category_id)
        if brand_id is not None:
            query = query.where(Item.brand_id == brand_id)
        return await self.paginate(query, limit, offset)
