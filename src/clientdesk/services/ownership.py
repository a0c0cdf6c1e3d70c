"""The one ownership check every entity family goes through.

Ownership is part of the lookup predicate (``id = ? AND user_id = ?``), so
a row that exists but belongs to another user comes back exactly like a
row that doesn't exist: NotFound, same message, same query. An id that
isn't a UUID at all can't name any row, so it is NotFound too.
"""

import uuid
from typing import Any, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.errors import NotFound

ModelT = TypeVar("ModelT")

# Path ids arrive as raw strings; internal callers pass UUIDs.
RowId = uuid.UUID | str


async def get_owned_or_404(
    db: AsyncSession,
    model: type[ModelT],
    row_id: RowId,
    user_id: uuid.UUID,
    entity: str | None = None,
    options: Sequence[Any] = (),
) -> ModelT:
    """Load ``model`` row ``row_id`` owned by ``user_id`` or raise NotFound."""
    name = entity or model.__name__
    if not isinstance(row_id, uuid.UUID):
        try:
            row_id = uuid.UUID(str(row_id))
        except ValueError:
            raise NotFound(name, {"id": str(row_id)}) from None

    q = select(model).where(model.id == row_id, model.user_id == user_id)
    if options:
        q = q.options(*options).execution_options(populate_existing=True)
    result = await db.execute(q)
    row = result.scalars().first()
    if row is None:
        raise NotFound(name, {"id": str(row_id)})
    return row
