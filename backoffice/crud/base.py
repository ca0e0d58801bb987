"""
Shared data access for back-office entities.

Repositories hold the queries; the ORM classes in ``models`` stay plain row
types. Soft-deleted rows (``deleted_at`` set) are invisible to every query
issued here.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError
from ..models.base import Base


ModelT = TypeVar("ModelT", bound=Base)


@dataclass(frozen=True)
class NaturalKey:
    """The unique key guarded by the store for one entity."""

    # Field name reported to clients
    field: str
    # "<table>.<column>"
    column: str
    # Name of the unique index or constraint
    constraint: str


class Repository(Generic[ModelT]):
    model: type[ModelT]
    entity_name: str
    unique_field: str = "name"
    unique_label: str = "name"
    unique_constraint: str
    soft_delete: bool = True

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def natural_key(self) -> NaturalKey:
        return NaturalKey(
            field=self.unique_label,
            column=f"{self.model.__tablename__}.{self.unique_field}",
            constraint=self.unique_constraint,
        )

    def _only_active(self, query: Select) -> Select:
        if self.soft_delete:
            return query.where(self.model.deleted_at.is_(None))
        return query

    def _select(self) -> Select:
        return self._only_active(select(self.model))

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        result = await self.session.execute(
            self._select().where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, entity_id: int) -> ModelT:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    async def check_unique(self, candidate: ModelT) -> bool:
        """Return True when no other active row holds the candidate's key.

        The candidate's own row (same id) is excluded so an unchanged value
        passes on edit.
        """
        column = getattr(self.model, self.unique_field)
        query = self._only_active(
            select(func.count())
            .select_from(self.model)
            .where(column == getattr(candidate, self.unique_field))
        )
        candidate_id = getattr(candidate, "id", None)
        if candidate_id is not None:
            query = query.where(self.model.id != candidate_id)
        with self.session.no_autoflush:
            result = await self.session.execute(query)
        return (result.scalar() or 0) == 0

    async def paginate(
        self, query: Select, limit: int, offset: int
    ) -> tuple[list[ModelT], int]:
        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar() or 0

        result = await self.session.execute(
            query.order_by(self.model.id.asc()).limit(limit).offset(offset)
        )
        return list(result.scalars().all()), total

    async def list_page(self, limit: int, offset: int) -> tuple[list[ModelT], int]:
        return await self.paginate(self._select(), limit, offset)

    async def list_all(self) -> list[ModelT]:
        result = await self.session.execute(self._select().order_by(self.model.id.asc()))
        return list(result.scalars().all())

    async def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT, values: dict[str, Any]) -> ModelT:
        for field, value in values.items():
            if getattr(entity, field) != value:
                setattr(entity, field, value)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def remove(self, entity: ModelT) -> ModelT:
        if self.soft_delete:
            entity.deleted_at = datetime.now(timezone.utc)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        await self.session.delete(entity)
        await self.session.flush()
        return entity
