from collections.abc import AsyncGenerator

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .database import get_session
from .errors import AuthError, ValidationError
from .models.admin import Admin
from .schemas.pagination import PageParams
from .security.token_inspection import (
    ExpiredTokenError,
    InvalidTokenError,
    admin_id_from_token,
)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Admin:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthError("Not authenticated")

    try:
        admin_id = admin_id_from_token(credentials.credentials)
    except ExpiredTokenError:
        raise AuthError("Token has expired") from None
    except InvalidTokenError:
        raise AuthError("Invalid token") from None

    admin = await db.get(Admin, admin_id)
    if admin is None:
        raise AuthError("Admin not found")
    return admin


def get_page_params(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    per_page: int | None = Query(None, ge=1, description="Results per page"),
) -> PageParams:
    size = per_page or settings.default_page_size
    if size > settings.max_page_size:
        raise ValidationError.for_field(
            "per_page", f"must be at most {settings.max_page_size}"
        )
    return PageParams(page=page, per_page=size)
