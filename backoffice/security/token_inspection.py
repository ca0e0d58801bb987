"""Decoding of the admin access tokens issued by ``utils.security.create_access_token``."""
from dataclasses import dataclass
from datetime import datetime, timezone

import jwt

from ..config import settings

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class InvalidTokenError(Exception):
    """Token is malformed, badly signed or lacks a required claim."""


class ExpiredTokenError(InvalidTokenError):
    """Token is well formed but its ``exp`` has passed."""


@dataclass(frozen=True)
class AccessTokenClaims:
    admin_id: int
    issued_at: datetime
    expires_at: datetime


def decode_access_token(token: str) -> AccessTokenClaims:
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredTokenError("access token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("access token is invalid") from exc

    subject = payload["sub"]
    if not isinstance(subject, str) or not subject.isdigit():
        raise InvalidTokenError("access token subject is not an admin id")

    return AccessTokenClaims(
        admin_id=int(subject),
        issued_at=datetime.fromtimestamp(payload["iat"], timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
    )


def admin_id_from_token(token: str) -> int:
    return decode_access_token(token).admin_id
