import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...admin.permissions import PermissionName
from ...crud.brand import BrandRepository
from ...crud.category import CategoryRepository
from ...crud.item import ItemRepository
from ...errors import UniquenessConflict, ValidationError
from ...models.admin import Admin
from ...models.item import Item
from ...schemas.catalog import ItemResponse
from ...schemas.pagination import Page, PageParams
from ...validation import ItemForm, validate
from .permission_service import PermissionService
from .transaction import write_transaction

logger = logging.getLogger("backoffice.services.items")


class ItemService:
    """Service for item CRUD operations.

    Items are soft-deleted. The referenced brand and category, when given,
    must be active.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.item_repo = ItemRepository(session)
        self.brand_repo = BrandRepository(session)
        self.category_repo = CategoryRepository(session)
        self.permission_service = PermissionService(session)

    async def list_page(
        self,
        params: PageParams,
        actor: Admin | None,
        keyword: str | None = None,
        category_id: int | None = None,
        brand_id: int | None = None,
    ) -> Page[ItemResponse]:
        await self.permission_service.require_permission(actor, PermissionName.ITEMS_VIEW.value)
        items, total = await self.item_repo.search(
            keyword=keyword,
            category_id=category_id,
            brand_id=brand_id,
            limit=params.limit,
            offset=params.offset,
        )
        return Page[ItemResponse].build(
            [ItemResponse.model_validate(item) for item in items], total, params
        )

    async def get(self, item_id: int, actor: Admin | None) -> ItemResponse:
        await self.permission_service.require_permission(actor, PermissionName.ITEMS_VIEW.value)
        return ItemResponse.model_validate(await self.item_repo.find_by_id(item_id))

    async def create(self, data: Mapping[str, Any], actor: Admin | None) -> ItemResponse:
        await self.permission_service.require_permission(actor, PermissionName.ITEMS_MANAGE.value)

        form = validate(ItemForm, data)
        await self._ensure_references_exist(form)
        if not await self.item_repo.check_unique(Item(name=form.name)):
            raise UniquenessConflict("name", form.name)

        async with write_transaction(self.session, key=self.item_repo.natural_key, value=form.name):
            item = await self.item_repo.add(Item(**_values(form)))

        logger.info("item created id=%s actor_id=%s", item.id, actor.id if actor else None)
        return ItemResponse.model_validate(item)

    async def edit(
        self, item_id: int, data: Mapping[str, Any], actor: Admin | None
    ) -> ItemResponse:
        await self.permission_service.require_permission(actor, PermissionName.ITEMS_MANAGE.value)

        item = await self.item_repo.find_by_id(item_id)
        form = validate(ItemForm, data)
        await self._ensure_references_exist(form)
        if not await self.item_repo.check_unique(Item(id=item.id, name=form.name)):
            raise UniquenessConflict("name", form.name)

        async with write_transaction(self.session, key=self.item_repo.natural_key, value=form.name):
            item = await self.item_repo.update(item, _values(form))

        logger.info("item updated id=%s actor_id=%s", item.id, actor.id if actor else None)
        return ItemResponse.model_validate(item)

    async def delete(self, item_id: int, actor: Admin | None) -> ItemResponse:
        await self.permission_service.require_permission(actor, PermissionName.ITEMS_MANAGE.value)

        item = await self.item_repo.find_by_id(item_id)
        async with write_transaction(self.session, key=self.item_repo.natural_key, value=item.name):
            item = await self.item_repo.remove(item)

        logger.info("item deleted id=%s actor_id=%s", item_id, actor.id if actor else None)
        return ItemResponse.model_validate(item)

    async def _ensure_references_exist(self, form: ItemForm) -> None:
        errors = []
        if form.brand_id is not None and await self.brand_repo.get_by_id(form.brand_id) is None:
            errors.append({"field": "brandId", "reason": "brand does not exist"})
        if (
            form.category_id is not None
            and await self.category_repo.get_by_id(form.category_id) is None
        ):
            errors.append({"field": "categoryId", "reason": "category does not exist"})
        if errors:
            raise ValidationError(details=errors)


def _values(form: ItemForm) -> dict[str, Any]:
    return {
        "name": form.name,
        "description": form.description,
        "price": form.price,
        "brand_id": form.brand_id,
        "category_id": form.category_id,
    }
