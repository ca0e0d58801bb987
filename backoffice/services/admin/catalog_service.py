"""
Shared orchestration for soft-deleted catalog entities keyed by name.

Categories and brands differ only in their repository, input form, response
schema and the permissions guarding them; subclasses bind those.
"""
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ...admin.permissions import PermissionName
from ...crud.base import Repository
from ...errors import UniquenessConflict
from ...models.admin import Admin
from ...schemas.pagination import Page, PageParams
from ...validation import validate
from .permission_service import PermissionService
from .transaction import write_transaction

logger = logging.getLogger("backoffice.services.catalog")

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class NamedCatalogService(Generic[ResponseT]):
    repository_class: ClassVar[type[Repository]]
    form: ClassVar[type[BaseModel]]
    response: ClassVar[type[BaseModel]]
    view_permission: ClassVar[PermissionName]
    manage_permission: ClassVar[PermissionName]

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = self.repository_class(session)
        self.permission_service = PermissionService(session)

    @property
    def entity_name(self) -> str:
        return self.repo.entity_name

    async def list_page(self, params: PageParams, actor: Admin | None) -> Page[ResponseT]:
        await self.permission_service.require_permission(actor, self.view_permission.value)
        rows, total = await self.repo.list_page(params.limit, params.offset)
        items = [self.response.model_validate(row) for row in rows]
        return Page[self.response].build(items, total, params)

    async def list_all(self, actor: Admin | None) -> list[ResponseT]:
        await self.permission_service.require_permission(actor, self.view_permission.value)
        return [self.response.model_validate(row) for row in await self.repo.list_all()]

    async def get(self, entity_id: int, actor: Admin | None) -> ResponseT:
        await self.permission_service.require_permission(actor, self.view_permission.value)
        return self.response.model_validate(await self.repo.find_by_id(entity_id))

    async def create(self, data: Mapping[str, Any], actor: Admin | None) -> ResponseT:
        await self.permission_service.require_permission(actor, self.manage_permission.value)

        form = validate(self.form, data)
        candidate = self.repo.model(name=form.name)
        if not await self.repo.check_unique(candidate):
            raise UniquenessConflict("name", form.name)

        async with write_transaction(self.session, key=self.repo.natural_key, value=form.name):
            entity = await self.repo.add(self.repo.model(name=form.name))

        logger.info(
            "%s created id=%s actor_id=%s",
            self.entity_name.lower(), entity.id, actor.id if actor else None,
        )
        return self.response.model_validate(entity)

    async def edit(
        self, entity_id: int, data: Mapping[str, Any], actor: Admin | None
    ) -> ResponseT:
        await self.permission_service.require_permission(actor, self.manage_permission.value)

        entity = await self.repo.find_by_id(entity_id)
        form = validate(self.form, data)
        candidate = self.repo.model(id=entity.id, name=form.name)
        if not await self.repo.check_unique(candidate):
            raise UniquenessConflict("name", form.name)

        async with write_transaction(self.session, key=self.repo.natural_key, value=form.name):
            entity = await self.repo.update(entity, {"name": form.name})

        logger.info(
            "%s updated id=%s actor_id=%s",
            self.entity_name.lower(), entity.id, actor.id if actor else None,
        )
        return self.response.model_validate(entity)

    async def delete(self, entity_id: int, actor: Admin | None) -> ResponseT:
        await self.permission_service.require_permission(actor, self.manage_permission.value)

        entity = await self.repo.find_by_id(entity_id)
        async with write_transaction(self.session, key=self.repo.natural_key, value=entity.name):
            entity = await self.repo.remove(entity)

        logger.info(
            "%s deleted id=%s actor_id=%s",
            self.entity_name.lower(), entity_id, actor.id if actor else None,
        )
        return self.response.model_validate(entity)
