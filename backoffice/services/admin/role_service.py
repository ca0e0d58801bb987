from sqlalchemy.ext.asyncio import AsyncSession

from ...crud.permission import PermissionRepository
from ...crud.role import RoleRepository
from ...schemas.role import PermissionResponse, RoleResponse


class RoleService:
    """Read access to the role and permission reference lists used by admin forms."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.role_repo = RoleRepository(session)
        self.permission_repo = PermissionRepository(session)

    async def list_roles(self) -> list[RoleResponse]:
        return [RoleResponse.model_validate(role) for role in await self.role_repo.list_all()]

    async def list_permissions(self) -> list[PermissionResponse]:
        return [
            PermissionResponse.model_validate(permission)
            for permission in await self.permission_repo.list_all()
        ]
