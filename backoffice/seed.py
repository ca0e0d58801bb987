"""
Seed data for the default roles, permissions and the first super admin.

Tables are created when missing. Running the script again leaves existing
rows untouched, so it is safe to call on every deploy.

Usage:
    SEED_ADMIN_EMAIL=root@example.com SEED_ADMIN_PASSWORD=... python -m backoffice.seed
"""
import asyncio
import logging
import os

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from .admin.permissions import ADMIN_ROLE_PERMISSIONS, PermissionName, RoleName
from .crud.admin import AdminRepository
from .crud.admin_association import AdminAssociationRepository
from .crud.permission import PermissionRepository
from .crud.role import RoleRepository
from .database import dispose_engine, get_engine, get_session_factory
from .models import Base
from .models.admin import Admin
from .utils.security import hash_password

logger = logging.getLogger("backoffice.seed")


DEFAULT_ROLES = [
    {
        "name": RoleName.SUPERADMIN.value,
        "display_name": "Super Administrator",
        "description": "Full access to every back-office section",
    },
    {
        "name": RoleName.EDITOR.value,
        "display_name": "Editor",
        "description": "Manages categories, brands and items",
    },
    {
        "name": RoleName.VIEWER.value,
        "display_name": "Viewer",
        "description": "Read-only access",
    },
]

DEFAULT_PERMISSIONS = [
    {"name": PermissionName.ADMINS_VIEW.value, "display_name": "View Admins"},
    {"name": PermissionName.ADMINS_MANAGE.value, "display_name": "Manage Admins"},
    {"name": PermissionName.CATEGORIES_VIEW.value, "display_name": "View Categories"},
    {"name": PermissionName.CATEGORIES_MANAGE.value, "display_name": "Manage Categories"},
    {"name": PermissionName.BRANDS_VIEW.value, "display_name": "View Brands"},
    {"name": PermissionName.BRANDS_MANAGE.value, "display_name": "Manage Brands"},
    {"name": PermissionName.ITEMS_VIEW.value, "display_name": "View Items"},
    {"name": PermissionName.ITEMS_MANAGE.value, "display_name": "Manage Items"},
]


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


async def seed_roles_and_permissions(session: AsyncSession) -> dict[str, int]:
    """Insert missing roles, permissions and role grants. Returns role ids by name."""
    role_repo = RoleRepository(session)
    permission_repo = PermissionRepository(session)

    permission_map: dict[str, int] = {}
    for perm_data in DEFAULT_PERMISSIONS:
        existing = await permission_repo.get_by_name(perm_data["name"])
        if existing:
            permission_map[perm_data["name"]] = existing.id
            continue
        permission = await permission_repo.create(**perm_data)
        permission_map[perm_data["name"]] = permission.id
        logger.info("Created permission %s", perm_data["name"])

    role_map: dict[str, int] = {}
    for role_data in DEFAULT_ROLES:
        existing = await role_repo.get_by_name(role_data["name"])
        if existing:
            role_map[role_data["name"]] = existing.id
            continue
        role = await role_repo.create(**role_data)
        role_map[role_data["name"]] = role.id
        logger.info("Created role %s", role_data["name"])

    for role_name, permission_names in ADMIN_ROLE_PERMISSIONS.items():
        role_id = role_map[RoleName(role_name).value]
        for perm_name in sorted(permission_names):
            perm_id = permission_map[perm_name]
            if await role_repo.has_permission(role_id, perm_id):
                continue
            await role_repo.assign_permission(role_id, perm_id)
        logger.info("Role %s holds %d permissions", RoleName(role_name).value, len(permission_names))

    return role_map


async def seed_super_admin(
    session: AsyncSession, email: str, password: str, role_id: int, name: str = "root"
) -> Admin:
    admin_repo = AdminRepository(session)
    existing = await admin_repo.get_by_email(email)
    if existing:
        logger.info("Admin %s already exists, skipping", email)
        return existing

    admin = await admin_repo.add(
        Admin(email=email, name=name, password=hash_password(password))
    )
    await AdminAssociationRepository(session).replace_roles(admin.id, [role_id])
    logger.info("Created super admin %s id=%s", email, admin.id)
    return admin


async def seed() -> None:
    engine = get_engine()
    await create_tables(engine)

    email = os.getenv("SEED_ADMIN_EMAIL", "").strip()
    password = os.getenv("SEED_ADMIN_PASSWORD", "")

    async with get_session_factory()() as session:
        async with session.begin():
            role_map = await seed_roles_and_permissions(session)
            if email and password:
                await seed_super_admin(
                    session, email, password, role_map[RoleName.SUPERADMIN.value]
                )
            else:
                logger.warning(
                    "SEED_ADMIN_EMAIL or SEED_ADMIN_PASSWORD not set, no admin created"
                )

    await dispose_engine()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    asyncio.run(seed())
