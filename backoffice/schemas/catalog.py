from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CategoryResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BrandResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemResponse(BaseModel):
    id: int
    name: str
    description: str
    price: int
    brand_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("brand_id", "brandId"),
        serialization_alias="brandId",
    )
    category_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("category_id", "categoryId"),
        serialization_alias="categoryId",
    )
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
