from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...dependencies import get_current_admin, get_db, get_page_params
from ...models.admin import Admin
from ...schemas.catalog import CategoryResponse
from ...schemas.pagination import Page, PageParams
from ...services.admin.category_service import CategoryService


router = APIRouter(prefix="/admin/categories", tags=["admin-categories"])


@router.get("/", response_model=Page[CategoryResponse])
async def list_categories(
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await CategoryService(db).list_page(params, current_admin)


@router.get("/all", response_model=list[CategoryResponse])
async def list_all_categories(
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Every active category, for item form selects."""
    return await CategoryService(db).list_all(current_admin)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await CategoryService(db).get(category_id, current_admin)


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await CategoryService(db).create(payload, current_admin)


@router.put("/{category_id}", response_model=CategoryResponse)
async def edit_category(
    category_id: int,
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await CategoryService(db).edit(category_id, payload, current_admin)


@router.delete("/{category_id}", response_model=CategoryResponse)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await CategoryService(db).delete(category_id, current_admin)
