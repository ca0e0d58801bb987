"""
Service layer for admin account management.

Every write follows the same order: the target is looked up (edit/delete),
the input is validated, the login identifier is checked for uniqueness, the
row is written and finally the role and permission links are replaced. A
failure at any step stops the operation before the next one runs.
"""
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...admin.permissions import PermissionName
from ...crud.admin import AdminRepository
from ...crud.admin_association import AdminAssociationRepository
from ...crud.permission import PermissionRepository
from ...crud.role import RoleRepository
from ...errors import UniquenessConflict, ValidationError
from ...models.admin import Admin
from ...schemas.admin import AdminDetail, AdminResponse
from ...schemas.pagination import Page, PageParams
from ...schemas.role import PermissionResponse, RoleResponse
from ...utils.security import hash_password
from ...validation import AdminForm, validate
from .permission_service import PermissionService
from .transaction import write_transaction

logger = logging.getLogger("backoffice.services.admins")


class AdminService:
    """Service for admin CRUD operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.admin_repo = AdminRepository(session)
        self.association_repo = AdminAssociationRepository(session)
        self.role_repo = RoleRepository(session)
        self.permission_repo = PermissionRepository(session)
        self.permission_service = PermissionService(session)

    async def list_page(
        self,
        params: PageParams,
        actor: Admin | None,
        keyword: str | None = None,
        role_id: int | None = None,
        permission_id: int | None = None,
    ) -> Page[AdminResponse]:
        await self.permission_service.require_permission(actor, PermissionName.ADMINS_VIEW.value)
        admins, total = await self.admin_repo.search(
            keyword=keyword,
            role_id=role_id,
            permission_id=permission_id,
            limit=params.limit,
            offset=params.offset,
        )
        items = [AdminResponse.model_validate(admin) for admin in admins]
        return Page[AdminResponse].build(items, total, params)

    async def get(self, admin_id: int, actor: Admin | None) -> AdminDetail:
        await self.permission_service.require_permission(actor, PermissionName.ADMINS_VIEW.value)
        admin = await self.admin_repo.find_by_id(admin_id)
        return await self._detail(admin)

    async def create(self, data: Mapping[str, Any], actor: Admin | None) -> AdminDetail:
        """
        Create an admin with its role and permission links.

        Raises:
            PermissionError: actor lacks admin.manage
            ValidationError: input rejected, password missing or unknown role/permission ids
            UniquenessConflict: login identifier already used by another admin
        """
        await self.permission_service.require_permission(actor, PermissionName.ADMINS_MANAGE.value)

        form = validate(AdminForm, data)
        if form.password is None:
            raise ValidationError.for_field("password", "required")
        await self._ensure_links_exist(form)

        candidate = Admin(email=form.user_id)
        if not await self.admin_repo.check_unique(candidate):
            raise UniquenessConflict("userId", form.user_id)

        async with write_transaction(
            self.session, key=self.admin_repo.natural_key, value=form.user_id
        ):
            admin = await self.admin_repo.add(
                Admin(
                    email=form.user_id,
                    name=form.user_name,
                    password=hash_password(form.password),
                )
            )
            await self.association_repo.replace(admin.id, form.role_ids, form.permission_ids)

        logger.info("admin created id=%s actor_id=%s", admin.id, _actor_id(actor))
        return await self._detail(admin)

    async def edit(
        self, admin_id: int, data: Mapping[str, Any], actor: Admin | None
    ) -> AdminDetail:
        """
        Replace an admin's mutable fields and its role/permission sets.

        The password is only changed when one is supplied.
        """
        await self.permission_service.require_permission(actor, PermissionName.ADMINS_MANAGE.value)

        admin = await self.admin_repo.find_by_id(admin_id)
        form = validate(AdminForm, data)
        await self._ensure_links_exist(form)

        candidate = Admin(id=admin.id, email=form.user_id)
        if not await self.admin_repo.check_unique(candidate):
            raise UniquenessConflict("userId", form.user_id)

        values: dict[str, Any] = {"email": form.user_id, "name": form.user_name}
        if form.password is not None:
            values["password"] = hash_password(form.password)

        async with write_transaction(
            self.session, key=self.admin_repo.natural_key, value=form.user_id
        ):
            admin = await self.admin_repo.update(admin, values)
            await self.association_repo.replace(admin.id, form.role_ids, form.permission_ids)

        logger.info("admin updated id=%s actor_id=%s", admin.id, _actor_id(actor))
        return await self._detail(admin)

    async def delete(self, admin_id: int, actor: Admin | None) -> AdminResponse:
        """Hard-delete an admin together with its role and permission links."""
        await self.permission_service.require_permission(actor, PermissionName.ADMINS_MANAGE.value)

        admin = await self.admin_repo.find_by_id(admin_id)
        if actor is not None and actor.id == admin.id:
            raise ValidationError.for_field("id", "an admin cannot delete itself")

        removed = AdminResponse.model_validate(admin)
        async with write_transaction(
            self.session, key=self.admin_repo.natural_key, value=admin.email
        ):
            await self.association_repo.clear(admin.id)
            await self.admin_repo.remove(admin)

        logger.info("admin deleted id=%s actor_id=%s", admin_id, _actor_id(actor))
        return removed

    async def _ensure_links_exist(self, form: AdminForm) -> None:
        errors = []
        unknown_roles = set(form.role_ids) - await self.role_repo.existing_ids(form.role_ids)
        if unknown_roles:
            errors.append({
                "field": "adminRoles",
                "reason": f"unknown role ids: {sorted(unknown_roles)}",
            })
        unknown_permissions = set(form.permission_ids) - await self.permission_repo.existing_ids(
            form.permission_ids
        )
        if unknown_permissions:
            errors.append({
                "field": "adminPermissions",
                "reason": f"unknown permission ids: {sorted(unknown_permissions)}",
            })
        if errors:
            raise ValidationError(details=errors)

    async def _detail(self, admin: Admin) -> AdminDetail:
        roles = await self.role_repo.get_admin_roles(admin.id)
        permissions = await self.permission_repo.get_admin_direct_permissions(admin.id)
        base = AdminResponse.model_validate(admin)
        return AdminDetail(
            **base.model_dump(),
            roles=[RoleResponse.model_validate(role) for role in roles],
            permissions=[PermissionResponse.model_validate(p) for p in permissions],
        )


def _actor_id(actor: Admin | None) -> int | None:
    return actor.id if actor is not None else None
