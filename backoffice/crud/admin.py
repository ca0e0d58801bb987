from sqlalchemy import or_, select

from ..models.admin import Admin
from ..models.admin_permission import AdminPermission
from ..models.role_admin import RoleAdmin
from .base import Repository


class AdminRepository(Repository[Admin]):
    model = Admin
    entity_name = "Admin"
    unique_field = "email"
    unique_label = "userId"
    # Unique index created by `unique=True, index=True` on the column
    unique_constraint = "ix_admins_email"
    # Admins are removed outright, not flagged
    soft_delete = False

    async def get_by_email(self, email: str) -> Admin | None:
        result = await self.session.execute(select(Admin).where(Admin.email == email))
        return result.scalar_one_or_none()

    async def search(
        self,
        keyword: str | None = None,
        role_id: int | None = None,
        permission_id: int | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Admin], int]:
        query = self._select()
        if keyword:
            query = query.where(
                or_(
                    Admin.email.contains(keyword, autoescape=True),
                    Admin.name.contains(keyword, autoescape=True),
                )
            )
        if role_id is not None:
            query = query.where(
                Admin.id.in_(select(RoleAdmin.admin_id).where(RoleAdmin.role_id == role_id))
            )
        if permission_id is not None:
            query = query.where(
                Admin.id.in_(
                    select(AdminPermission.admin_id).where(
                        AdminPermission.permission_id == permission_id
                    )
                )
            )
        return await self.paginate(query, limit, offset)
