from collections.abc import Iterable

from sqlalchemy import select, union
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.admin_permission import AdminPermission
from ..models.permission import Permission
from ..models.role_admin import RoleAdmin
from ..models.role_permission import RolePermission


class PermissionRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self, name: str, display_name: str, description: str | None = None
    ) -> Permission:
        permission = Permission(name=name, display_name=display_name, description=description)
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def get_by_name(self, name: str) -> Permission | None:
        result = await self.session.execute(
            select(Permission).where(Permission.name == name)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Permission]:
        result = await self.session.execute(select(Permission).order_by(Permission.id.asc()))
        return list(result.scalars().all())

    async def list_by_ids(self, permission_ids: Iterable[int]) -> list[Permission]:
        ids = set(permission_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(Permission).where(Permission.id.in_(sorted(ids))).order_by(Permission.id.asc())
        )
        return list(result.scalars().all())

    async def existing_ids(self, permission_ids: Iterable[int]) -> set[int]:
        return {permission.id for permission in await self.list_by_ids(permission_ids)}

    async def get_admin_direct_permissions(self, admin_id: int) -> list[Permission]:
        result = await self.session.execute(
            select(Permission)
            .join(AdminPermission, AdminPermission.permission_id == Permission.id)
            .where(AdminPermission.admin_id == admin_id)
            .order_by(Permission.id.asc())
        )
        return list(result.scalars().all())

    async def get_admin_permission_names(self, admin_id: int) -> set[str]:
        """Names granted directly or through any of the admin's roles."""
        direct = (
            select(AdminPermission.permission_id.label("permission_id"))
            .where(AdminPermission.admin_id == admin_id)
        )
        via_roles = (
            select(RolePermission.permission_id.label("permission_id"))
            .join(RoleAdmin, RoleAdmin.role_id == RolePermission.role_id)
            .where(RoleAdmin.admin_id == admin_id)
        )
        granted = union(direct, via_roles).subquery()
        result = await self.session.execute(
            select(Permission.name).where(Permission.id.in_(select(granted.c.permission_id)))
        )
        return set(result.scalars().all())
