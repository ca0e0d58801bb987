from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_admin, get_db
from ..models.admin import Admin
from ..schemas.admin import AdminResponse
from ..schemas.auth import AdminLogin, TokenResponse
from ..use_cases.auth.login_admin import login_admin

router = APIRouter(prefix="/auth", tags=["auth"])


def _client_ip(request: Request) -> str:
    client_host = request.client.host if request.client else None
    return client_host or "unknown-ip"


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: AdminLogin,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> TokenResponse:
    return await login_admin(
        db, payload.user_id, payload.password, client_ip=_client_ip(request)
    )


@router.get("/me", response_model=AdminResponse)
async def me(current_admin: Admin = Depends(get_current_admin)):
    return current_admin
