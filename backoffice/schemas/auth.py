from pydantic import BaseModel, ConfigDict, Field


class AdminLogin(BaseModel):
    user_id: str = Field(alias="userId", min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=255)

    model_config = ConfigDict(populate_by_name=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
