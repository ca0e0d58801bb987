"""
Role and permission links of an admin.

``replace`` sets the links to exactly the requested sets by diffing them
against what is stored: links no longer wanted are deleted, new ones are
inserted, unchanged ones are left alone. It runs inside the caller's
transaction and never commits.
"""
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.admin_permission import AdminPermission
from ..models.role_admin import RoleAdmin


class AdminAssociationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def role_ids_for(self, admin_id: int) -> set[int]:
        result = await self.session.execute(
            select(RoleAdmin.role_id).where(RoleAdmin.admin_id == admin_id)
        )
        return set(result.scalars().all())

    async def permission_ids_for(self, admin_id: int) -> set[int]:
        result = await self.session.execute(
            select(AdminPermission.permission_id).where(AdminPermission.admin_id == admin_id)
        )
        return set(result.scalars().all())

    async def replace_roles(self, admin_id: int, role_ids: Iterable[int]) -> set[int]:
        desired = set(role_ids)
        current = await self.role_ids_for(admin_id)

        removed = current - desired
        if removed:
            await self.session.execute(
                delete(RoleAdmin).where(
                    RoleAdmin.admin_id == admin_id, RoleAdmin.role_id.in_(sorted(removed))
                )
            )
        for role_id in sorted(desired - current):
            self.session.add(RoleAdmin(admin_id=admin_id, role_id=role_id))
        await self.session.flush()
        return desired

    async def replace_permissions(
        self, admin_id: int, permission_ids: Iterable[int]
    ) -> set[int]:
        desired = set(permission_ids)
        current = await self.permission_ids_for(admin_id)

        removed = current - desired
        if removed:
            await self.session.execute(
                delete(AdminPermission).where(
                    AdminPermission.admin_id == admin_id,
                    AdminPermission.permission_id.in_(sorted(removed)),
                )
            )
        for permission_id in sorted(desired - current):
            self.session.add(AdminPermission(admin_id=admin_id, permission_id=permission_id))
        await self.session.flush()
        return desired

    async def replace(
        self,
        admin_id: int,
        role_ids: Iterable[int],
        permission_ids: Iterable[int],
    ) -> tuple[set[int], set[int]]:
        roles = await self.replace_roles(admin_id, role_ids)
        permissions = await self.replace_permissions(admin_id, permission_ids)
        return roles, permissions

    async def clear(self, admin_id: int) -> None:
        await self.session.execute(delete(RoleAdmin).where(RoleAdmin.admin_id == admin_id))
        await self.session.execute(
            delete(AdminPermission).where(AdminPermission.admin_id == admin_id)
        )
        await self.session.flush()
