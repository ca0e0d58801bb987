from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...admin.dependencies import require_admin_permissions
from ...admin.permissions import PermissionName
from ...dependencies import get_db
from ...schemas.role import PermissionResponse, RoleResponse
from ...services.admin.role_service import RoleService


router = APIRouter(prefix="/admin", tags=["admin-roles"])


@router.get(
    "/roles",
    response_model=list[RoleResponse],
    dependencies=[Depends(require_admin_permissions(PermissionName.ADMINS_VIEW))],
)
async def list_roles(db: AsyncSession = Depends(get_db)):
    return await RoleService(db).list_roles()


@router.get(
    "/permissions",
    response_model=list[PermissionResponse],
    dependencies=[Depends(require_admin_permissions(PermissionName.ADMINS_VIEW))],
)
async def list_permissions(db: AsyncSession = Depends(get_db)):
    return await RoleService(db).list_permissions()
