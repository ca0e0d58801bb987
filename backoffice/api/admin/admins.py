"""
Admin API endpoints for admin accounts.

Request bodies are passed to the service as raw mappings so field rules and
their failure reasons come from one place.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...dependencies import get_current_admin, get_db, get_page_params
from ...models.admin import Admin
from ...schemas.admin import AdminDetail, AdminResponse
from ...schemas.pagination import Page, PageParams
from ...services.admin.admin_service import AdminService


router = APIRouter(prefix="/admin/admins", tags=["admin-admins"])


@router.get("/", response_model=Page[AdminResponse])
async def list_admins(
    keyword: str | None = Query(None, description="Matches login identifier or name"),
    role_id: int | None = Query(None, description="Only admins holding this role"),
    permission_id: int | None = Query(None, description="Only admins holding this permission"),
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Requires: admin.view"""
    return await AdminService(db).list_page(
        params,
        current_admin,
        keyword=keyword,
        role_id=role_id,
        permission_id=permission_id,
    )


@router.get("/{admin_id}", response_model=AdminDetail)
async def get_admin(
    admin_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Requires: admin.view"""
    return await AdminService(db).get(admin_id, current_admin)


@router.post("/", response_model=AdminDetail, status_code=status.HTTP_201_CREATED)
async def create_admin(
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    Create an admin.

    Body: userId, userName, password, adminRoles (ids), adminPermissions (ids).
    Requires: admin.manage
    """
    return await AdminService(db).create(payload, current_admin)


@router.put("/{admin_id}", response_model=AdminDetail)
async def edit_admin(
    admin_id: int,
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    Replace an admin's fields and its role/permission sets.

    Omitting password keeps the current one. Requires: admin.manage
    """
    return await AdminService(db).edit(admin_id, payload, current_admin)


@router.delete("/{admin_id}", response_model=AdminResponse)
async def delete_admin(
    admin_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Requires: admin.manage"""
    return await AdminService(db).delete(admin_id, current_admin)
