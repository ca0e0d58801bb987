from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...dependencies import get_current_admin, get_db, get_page_params
from ...models.admin import Admin
from ...schemas.catalog import BrandResponse
from ...schemas.pagination import Page, PageParams
from ...services.admin.brand_service import BrandService


router = APIRouter(prefix="/admin/brands", tags=["admin-brands"])


@router.get("/", response_model=Page[BrandResponse])
async def list_brands(
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await BrandService(db).list_page(params, current_admin)


@router.get("/all", response_model=list[BrandResponse])
async def list_all_brands(
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Every active brand, for item form selects."""
    return await BrandService(db).list_all(current_admin)


@router.get("/{brand_id}", response_model=BrandResponse)
async def get_brand(
    brand_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await BrandService(db).get(brand_id, current_admin)


@router.post("/", response_model=BrandResponse, status_code=status.HTTP_201_CREATED)
async def create_brand(
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await BrandService(db).create(payload, current_admin)


@router.put("/{brand_id}", response_model=BrandResponse)
async def edit_brand(
    brand_id: int,
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await BrandService(db).edit(brand_id, payload, current_admin)


@router.delete("/{brand_id}", response_model=BrandResponse)
async def delete_brand(
    brand_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await BrandService(db).delete(brand_id, current_admin)
