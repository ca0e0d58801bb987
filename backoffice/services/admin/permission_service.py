import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ...admin.permissions import KNOWN_PERMISSIONS
from ...crud.permission import PermissionRepository
from ...errors import PermissionError
from ...models.admin import Admin

logger = logging.getLogger("backoffice.permissions")


class PermissionService:
    """Permission checks for acting admins.

    Only exact, known permission names are granted; unknown names are always
    denied.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.permission_repo = PermissionRepository(session)

    async def get_admin_permissions(self, admin_id: int) -> set[str]:
        return await self.permission_repo.get_admin_permission_names(admin_id)

    async def has_permission(self, admin: Admin | None, permission_name: str) -> bool:
        if admin is None or permission_name not in KNOWN_PERMISSIONS:
            return False
        return permission_name in await self.get_admin_permissions(admin.id)

    async def has_all_permissions(
        self, admin: Admin | None, permission_names: list[str]
    ) -> bool:
        if admin is None:
            return False
        if any(name not in KNOWN_PERMISSIONS for name in permission_names):
            return False
        granted = await self.get_admin_permissions(admin.id)
        return all(name in granted for name in permission_names)

    async def require_permission(self, admin: Admin | None, permission_name: str) -> None:
        """Raise ``PermissionError`` unless ``admin`` holds ``permission_name``."""
        if await self.has_permission(admin, permission_name):
            return
        logger.warning(
            "permission denied admin_id=%s permission=%s",
            admin.id if admin is not None else None,
            permission_name,
        )
        raise PermissionError(
            f"Permission denied: {permission_name} required",
            details={"required": permission_name},
        )
