from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...crud.base import NaturalKey
from ...errors import PersistenceError, UniquenessConflict


_SQLITE_UNIQUE_PREFIX = "unique constraint failed:"


def violates_natural_key(exc: IntegrityError, key: NaturalKey) -> bool:
    """True only when the failed constraint is ``key``'s own unique index.

    PostgreSQL (asyncpg) names the constraint, either as ``constraint_name``
    on the driver error or quoted in its message. SQLite lists the indexed
    columns as ``table.column``.
    """
    orig = exc.orig if exc.orig is not None else exc
    for source in (orig, getattr(orig, "__cause__", None)):
        constraint_name = getattr(source, "constraint_name", None)
        if isinstance(constraint_name, str) and constraint_name:
            return constraint_name == key.constraint

    message = str(orig).lower()
    if _SQLITE_UNIQUE_PREFIX in message:
        failed = message.split(_SQLITE_UNIQUE_PREFIX, 1)[1].splitlines()[0]
        return [column.strip() for column in failed.split(",")] == [key.column.lower()]
    return f'"{key.constraint.lower()}"' in message


@asynccontextmanager
async def write_transaction(
    session: AsyncSession,
    *,
    key: NaturalKey,
    value: Any,
) -> AsyncIterator[None]:
    """Commit the enclosed writes, or roll them back and re-raise.

    A violation of the entity's natural-key index (two writers racing past
    the application check) surfaces as ``UniquenessConflict`` on that key.
    Every other storage failure, including other unique constraints,
    surfaces as ``PersistenceError``.
    """
    try:
        yield
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if violates_natural_key(exc, key):
            raise UniquenessConflict(key.field, value) from exc
        raise PersistenceError("Write rejected by the database", cause=exc) from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        raise PersistenceError(cause=exc) from exc
    except Exception:
        await session.rollback()
        raise
