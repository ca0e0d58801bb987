"""
Route-level permission enforcement.

The acting admin is resolved from the bearer token and must hold the named
permission, directly or through one of its roles.
"""
from __future__ import annotations

from typing import Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_admin, get_db
from ..models.admin import Admin
from ..services.admin.permission_service import PermissionService
from .permissions import PermissionName


def require_admin_permissions(*permissions: PermissionName) -> Callable:
    async def dependency(
        admin: Admin = Depends(get_current_admin),
        db: AsyncSession = Depends(get_db),
    ) -> Admin:
        permission_service = PermissionService(db)
        for permission in permissions:
            await permission_service.require_permission(admin, permission.value)
        return admin

    return dependency
