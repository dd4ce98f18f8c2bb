"""Atomic insert-if-absent against a unique constraint.

Collapses "SELECT, then INSERT if missing" into one statement so that the
store's own unique index decides the race.  Supported on SQLite (local dev,
tests) and PostgreSQL (production); both dialects implement
``INSERT ... ON CONFLICT DO NOTHING RETURNING``.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_INSERT_BY_DIALECT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


async def insert_if_absent(
    db: AsyncSession,
    model: Any,
    values: dict[str, Any],
    conflict_columns: list[str],
) -> str | None:
    """Insert a row unless ``conflict_columns`` already match one.

    Returns the new row's primary key, or ``None`` when an existing row won.
    """
    dialect = db.get_bind().dialect.name
    insert_fn = _INSERT_BY_DIALECT.get(dialect)
    if insert_fn is None:
        raise ValueError(f"Conditional insert is not supported on dialect '{dialect}'")

    stmt = (
        insert_fn(model)
        .values(**values)
        .on_conflict_do_nothing(index_elements=conflict_columns)
        .returning(model.id)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()
