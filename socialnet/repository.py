"""
Generic SQLAlchemy repository.

One class serves every entity: it is parameterized over the mapped row type
and the identifier type, and constructed with the session it works in.
Repositories flush but never commit; the transaction boundary belongs to
``session_scope``.
"""
from typing import Any, Generic, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from socialnet.database import Base

ModelT = TypeVar("ModelT", bound=Base)
IdT = TypeVar("IdT")


class SqlAlchemyRepository(Generic[ModelT, IdT]):
    """
    Keyed storage over one mapped class.

    ``options`` are loader options (``selectinload(...)``) applied to every
    read, for rows whose collections must be populated before they are
    modified.
    """

    def __init__(
        self,
        session: AsyncSession,
        model: Type[ModelT],
        options: Sequence[ORMOption] = (),
    ) -> None:
        self.session = session
        self.model = model
        self.options = tuple(options)

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    async def get(self, entity_id: IdT) -> ModelT | None:
        q = select(self.model).where(self.model.id == entity_id).options(*self.options)
        result = await self.session.execute(q)
        return result.unique().scalar_one_or_none()

    async def get_many(self, entity_ids: Sequence[IdT]) -> list[ModelT]:
        """Return the rows for *entity_ids* that exist, in no particular order."""
        if not entity_ids:
            return []
        q = select(self.model).where(self.model.id.in_(entity_ids)).options(*self.options)
        result = await self.session.execute(q)
        return list(result.unique().scalars().all())

    async def list(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model).options(*self.options))
        return list(result.unique().scalars().all())

    async def save(self, entity: ModelT) -> ModelT:
        """
        Add *entity* to the session and flush it.

        ``IntegrityError`` from the flush propagates unchanged.
        """
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entity_name})"


def repository_for(session: AsyncSession, model: Type[ModelT], **kwargs: Any) -> SqlAlchemyRepository[ModelT, str]:
    """Build a string-keyed repository for *model* (every entity here uses UUID text ids)."""
    return SqlAlchemyRepository(session, model, **kwargs)
