from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from washdesk.db.models import Base
from washdesk.errors import raise_backend_errors

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):  # noqa: UP046
    """Thin persistence helpers shared by every table.

    Writes translate SQLAlchemy failures into `BackendError` so routes can
    surface the raw backend message without knowing about the ORM.
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    async def add(self, obj: ModelT, *, flush: bool = True) -> ModelT:
        self.session.add(obj)
        if flush:
            with raise_backend_errors():
                await self.session.flush()  # assigns PKs, surfaces constraint errors
        return obj

    async def add_all(self, objs: Sequence[ModelT]) -> None:
        self.session.add_all(objs)
        with raise_backend_errors():
            await self.session.flush()

    async def get(self, id_: Any) -> ModelT | None:
        return await self.session.get(self.model, id_)

    async def first_where(self, *predicates: ColumnElement[bool]) -> ModelT | None:
        stmt = select(self.model).where(*predicates).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list(self, *, offset: int = 0, limit: int = 100) -> list[ModelT]:
        stmt = select(self.model).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, obj: ModelT, changes: Mapping[str, Any]) -> ModelT:
        for key, value in changes.items():
            setattr(obj, key, value)
        with raise_backend_errors():
            await self.session.flush()
        return obj

    async def delete(self, obj: ModelT) -> None:
        await self.session.delete(obj)
        with raise_backend_errors():
            await self.session.flush()

    async def delete_where(self, *predicates: ColumnElement[bool]) -> int:
        with raise_backend_errors():
            result = await self.session.execute(delete(self.model).where(*predicates))
        return int(getattr(result, "rowcount", 0) or 0)

    async def commit(self) -> None:
        with raise_backend_errors():
            await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
