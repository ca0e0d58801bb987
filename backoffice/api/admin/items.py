from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...dependencies import get_current_admin, get_db, get_page_params
from ...models.admin import Admin
from ...schemas.catalog import ItemResponse
from ...schemas.pagination import Page, PageParams
from ...services.admin.item_service import ItemService


router = APIRouter(prefix="/admin/items", tags=["admin-items"])


@router.get("/", response_model=Page[ItemResponse])
async def list_items(
    keyword: str | None = Query(None, description="Matches name or description"),
    category_id: int | None = Query(None, description="Filter by category"),
    brand_id: int | None = Query(None, description="Filter by brand"),
    params: PageParams = Depends(get_page_params),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await ItemService(db).list_page(
        params,
        current_admin,
        keyword=keyword,
        category_id=category_id,
        brand_id=brand_id,
    )


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await ItemService(db).get(item_id, current_admin)


@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Body: name, description, price, brandId, categoryId."""
    return await ItemService(db).create(payload, current_admin)


@router.put("/{item_id}", response_model=ItemResponse)
async def edit_item(
    item_id: int,
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await ItemService(db).edit(item_id, payload, current_admin)


@router.delete("/{item_id}", response_model=ItemResponse)
async def delete_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return await ItemService(db).delete(item_id, current_admin)
