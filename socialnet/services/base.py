"""
Generic CRUD service — the behaviour shared by every entity service.

Design notes
------------
- A service owns exactly one repository, handed in through the constructor.
  Nothing is looked up globally; ``ServiceRegistry`` is the place where
  repositories and services are wired together.
- ``create`` assigns the identifier (when the caller did not supply one) and
  stamps ``created_at`` and ``updated_at`` with the same instant.
- ``update`` copies only the fields declared on the entity's ``*Update``
  schema, and only those present in the patch
  (``model_dump(exclude_unset=True)``).  ``updated_at`` always moves
  strictly forward, even if the clock has not ticked since the last write.
- ``update`` and ``delete`` raise ``NotFoundError`` for a missing id; reads
  return ``None`` instead.
- Rows are mapped to pydantic records on the way out, so callers never hold
  live ORM instances.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Generic, Type, TypeVar

from pydantic import BaseModel

from socialnet.errors import NotFoundError
from socialnet.models import new_id
from socialnet.repository import ModelT, SqlAlchemyRepository

logger = logging.getLogger(__name__)

CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)
ReadT = TypeVar("ReadT", bound=BaseModel)

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def next_timestamp(previous: datetime | None) -> datetime:
    """Return the current UTC time, nudged past *previous* when needed."""
    now = utcnow()
    if previous is not None:
        previous = _as_utc(previous)
        if now <= previous:
            now = previous + _TICK
    return now


class CrudService(Generic[ModelT, CreateT, UpdateT, ReadT]):
    create_schema: ClassVar[Type[BaseModel]]
    update_schema: ClassVar[Type[BaseModel]]
    read_schema: ClassVar[Type[BaseModel]]

    def __init__(self, repository: SqlAlchemyRepository[ModelT, str]) -> None:
        self.repository = repository

    @property
    def entity_name(self) -> str:
        return self.repository.entity_name

    # ------------------------------------------------------------------
    # Row <-> record mapping (overridden where a record has derived fields)
    # ------------------------------------------------------------------

    def _to_record(self, row: ModelT) -> ReadT:
        return self.read_schema.model_validate(row)

    async def _build_row(self, data: CreateT) -> ModelT:
        return self.repository.model(**data.model_dump(exclude={"id"}))

    async def _apply_changes(self, row: ModelT, changes: dict[str, Any]) -> None:
        for field, value in changes.items():
            setattr(row, field, value)

    def _whitelisted(self, patch: UpdateT) -> dict[str, Any]:
        allowed = self.update_schema.model_fields
        return {
            field: value
            for field, value in patch.model_dump(exclude_unset=True).items()
            if field in allowed
        }

    def _coerce(self, schema: Type[BaseModel], data: BaseModel | Mapping[str, Any]) -> Any:
        if isinstance(data, Mapping):
            return schema.model_validate(data)
        return data

    async def _get_or_raise(self, entity_id: str) -> ModelT:
        row = await self.repository.get(entity_id)
        if row is None:
            logger.debug("%s %s not found", self.entity_name, entity_id)
            raise NotFoundError(self.entity_name, entity_id)
        return row

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def list(self) -> list[ReadT]:
        """Return every record.  No ordering guarantee, no pagination."""
        return [self._to_record(row) for row in await self.repository.list()]

    async def get_by_id(self, entity_id: str) -> ReadT | None:
        """Return the record for *entity_id*, or None when it does not exist."""
        row = await self.repository.get(entity_id)
        if row is None:
            return None
        return self._to_record(row)

    async def create(self, data: CreateT | Mapping[str, Any]) -> ReadT:
        """
        Persist a new record and return it.

        The id is generated unless *data* carries one; both timestamps are
        set to the same instant.  Constraint violations raised by the flush
        (e.g. a duplicate email) propagate unchanged.
        """
        data = self._coerce(self.create_schema, data)
        row = await self._build_row(data)
        row.id = data.id or new_id()
        now = utcnow()
        row.created_at = now
        row.updated_at = now

        await self.repository.save(row)
        logger.info("Created %s %s", self.entity_name, row.id)
        return self._to_record(row)

    async def update(self, entity_id: str, patch: UpdateT | Mapping[str, Any]) -> ReadT:
        """
        Overwrite the whitelisted fields present in *patch* and return the
        updated record.

        Raises NotFoundError when *entity_id* does not exist; a missing
        record is never created here.
        """
        patch = self._coerce(self.update_schema, patch)
        row = await self._get_or_raise(entity_id)
        changes = self._whitelisted(patch)

        await self._apply_changes(row, dict(changes))
        row.updated_at = next_timestamp(row.updated_at)

        await self.repository.save(row)
        logger.info("Updated %s %s (%s)", self.entity_name, entity_id, ", ".join(sorted(changes)) or "no fields")
        return self._to_record(row)

    async def delete(self, entity_id: str) -> None:
        """Remove the record.  Raises NotFoundError when it does not exist."""
        row = await self._get_or_raise(entity_id)
        await self.repository.delete(row)
        logger.info("Deleted %s %s", self.entity_name, entity_id)
