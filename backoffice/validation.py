"""
Input forms for the back-office write operations.

Each form declares the field rules for one entity and is evaluated against the
raw field-name to value mapping submitted by the client. Lengths are counted
in characters, so multi-byte input such as Japanese text is measured the same
way as ASCII.
"""
from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError


FormT = TypeVar("FormT", bound=BaseModel)


class _Form(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=False)


class AdminForm(_Form):
    user_id: str = Field(alias="userId", min_length=1, max_length=50)
    user_name: str = Field(alias="userName", min_length=1, max_length=10)
    password: str | None = Field(default=None, min_length=1, max_length=255)
    role_ids: list[int] = Field(default_factory=list, alias="adminRoles")
    permission_ids: list[int] = Field(default_factory=list, alias="adminPermissions")


class CategoryForm(_Form):
    name: str = Field(min_length=1, max_length=20)


class BrandForm(_Form):
    name: str = Field(min_length=1, max_length=20)


class ItemForm(_Form):
    name: str = Field(min_length=1, max_length=10)
    description: str = Field(min_length=1, max_length=50)
    price: int = Field(default=0, ge=0)
    brand_id: int | None = Field(default=None, alias="brandId")
    category_id: int | None = Field(default=None, alias="categoryId")


def _reason(error: Mapping[str, Any]) -> str:
    kind = error.get("type")
    ctx = error.get("ctx") or {}
    if kind == "missing" or error.get("input") == "":
        return "required"
    if kind == "string_too_long":
        return f"must be at most {ctx.get('max_length')} characters"
    if kind == "string_too_short":
        return f"must be at least {ctx.get('min_length')} characters"
    return str(error.get("msg", "invalid"))


def _field_errors(exc: pydantic.ValidationError) -> list[dict[str, str]]:
    errors = []
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        errors.append({"field": str(loc[0]), "reason": _reason(error)})
    return errors


def validate(form: type[FormT], data: Mapping[str, Any]) -> FormT:
    """Validate ``data`` against ``form``.

    Raises:
        ValidationError: with one ``{"field", "reason"}`` entry per failed rule
    """
    try:
        return form.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        raise ValidationError(details=_field_errors(exc)) from None


def passes(form: type[BaseModel], data: Mapping[str, Any]) -> bool:
    try:
        validate(form, data)
    except ValidationError:
        return False
    return True
