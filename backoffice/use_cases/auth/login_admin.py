import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ...application.auth_rate_limit import (
    check_login_rate_limit,
    record_login_failure,
    reset_login_limit,
)
from ...config import settings
from ...crud.admin import AdminRepository
from ...errors import AuthError
from ...models.admin import Admin
from ...schemas.auth import TokenResponse
from ...utils.security import create_access_token, verify_password

logger = logging.getLogger("backoffice.auth")


async def _authenticate_admin(session: AsyncSession, user_id: str, password: str) -> Admin:
    admin = await AdminRepository(session).get_by_email(user_id)
    if admin is None or not verify_password(password, admin.password):
        raise AuthError("Invalid credentials")
    return admin


async def login_admin(
    session: AsyncSession,
    user_id: str,
    password: str,
    *,
    client_ip: str | None = None,
) -> TokenResponse:
    key = check_login_rate_limit(user_id, client_ip)
    try:
        admin = await _authenticate_admin(session, user_id, password)
    except AuthError:
        record_login_failure(key)
        logger.warning("login failed client_ip=%s", client_ip or "unknown")
        raise
    reset_login_limit(key)

    expires_minutes = settings.access_token_expire_minutes
    logger.info("login succeeded admin_id=%s", admin.id)
    return TokenResponse(
        access_token=create_access_token(admin.id, expires_minutes),
        expires_in=expires_minutes * 60,
    )
