from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.role import Role
from ..models.role_admin import RoleAdmin
from ..models.role_permission import RolePermission


class RoleRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self, name: str, display_name: str, description: str | None = None
    ) -> Role:
        role = Role(name=name, display_name=display_name, description=description)
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_by_id(self, role_id: int) -> Role | None:
        return await self.session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        result = await self.session.execute(select(Role).order_by(Role.id.asc()))
        return list(result.scalars().all())

    async def list_by_ids(self, role_ids: Iterable[int]) -> list[Role]:
        ids = set(role_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(Role).where(Role.id.in_(sorted(ids))).order_by(Role.id.asc())
        )
        return list(result.scalars().all())

    async def existing_ids(self, role_ids: Iterable[int]) -> set[int]:
        return {role.id for role in await self.list_by_ids(role_ids)}

    async def get_admin_roles(self, admin_id: int) -> list[Role]:
        result = await self.session.execute(
            select(Role)
            .join(RoleAdmin, RoleAdmin.role_id == Role.id)
            .where(RoleAdmin.admin_id == admin_id)
            .order_by(Role.id.asc())
        )
        return list(result.scalars().all())

    async def assign_permission(self, role_id: int, permission_id: int) -> RolePermission:
        role_permission = RolePermission(role_id=role_id, permission_id=permission_id)
        self.session.add(role_permission)
        await self.session.flush()
        return role_permission

    async def has_permission(self, role_id: int, permission_id: int) -> bool:
        result = await self.session.execute(
            select(RolePermission.id).where(
                RolePermission.role_id == role_id,
                RolePermission.permission_id == permission_id,
            )
        )
        return result.first() is not None
