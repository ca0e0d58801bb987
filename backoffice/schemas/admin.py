from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .role import PermissionResponse, RoleResponse


class AdminResponse(BaseModel):
    """Admin row as shown in lists. The password hash is never exposed."""

    id: int
    user_id: str = Field(
        validation_alias=AliasChoices("email", "userId", "user_id"),
        serialization_alias="userId",
    )
    user_name: str = Field(
        validation_alias=AliasChoices("name", "userName", "user_name"),
        serialization_alias="userName",
    )
    avatar: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class AdminDetail(AdminResponse):
    roles: list[RoleResponse] = []
    permissions: list[PermissionResponse] = []
