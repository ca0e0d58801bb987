"""
Permission and role names used by the back-office.

An admin's effective permissions are the ones granted to it directly plus the
ones granted to any of its roles.
"""
from __future__ import annotations

from enum import Enum
from typing import Final


class PermissionName(str, Enum):
    ADMINS_VIEW = "admin.view"
    ADMINS_MANAGE = "admin.manage"
    CATEGORIES_VIEW = "category.view"
    CATEGORIES_MANAGE = "category.manage"
    BRANDS_VIEW = "brand.view"
    BRANDS_MANAGE = "brand.manage"
    ITEMS_VIEW = "item.view"
    ITEMS_MANAGE = "item.manage"


class RoleName(str, Enum):
    SUPERADMIN = "super_admin"
    EDITOR = "editor"
    VIEWER = "viewer"


KNOWN_PERMISSIONS: Final[frozenset[str]] = frozenset(p.value for p in PermissionName)

ADMIN_ROLE_PERMISSIONS: Final[dict[str, frozenset[str]]] = {
    RoleName.SUPERADMIN: frozenset(KNOWN_PERMISSIONS),
    RoleName.EDITOR: frozenset({
        PermissionName.CATEGORIES_VIEW.value,
        PermissionName.CATEGORIES_MANAGE.value,
        PermissionName.BRANDS_VIEW.value,
        PermissionName.BRANDS_MANAGE.value,
        PermissionName.ITEMS_VIEW.value,
        PermissionName.ITEMS_MANAGE.value,
    }),
    RoleName.VIEWER: frozenset({
        PermissionName.ADMINS_VIEW.value,
        PermissionName.CATEGORIES_VIEW.value,
        PermissionName.BRANDS_VIEW.value,
        PermissionName.ITEMS_VIEW.value,
    }),
}
