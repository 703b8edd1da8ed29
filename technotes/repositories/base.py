"""
TechNotes Backend — Generic Async Repository
==============================================

What:  The persistence collaborator the Notes and Users services call into.
Why:   Services express their guard checks as a handful of store calls
       (find by id, find one by filter, find all, create, update, delete)
       without touching SQLAlchemy query construction directly.
How:   One repository instance wraps one request-scoped AsyncSession.
       Every read has two flavours:

       lean=True   → an immutable snapshot record (frozen dataclass). Safe to
                     hand to response schemas; has no mutation methods.
       lean=False  → the live ORM instance ("hydrated"), which the caller may
                     modify and pass back to `save()` or `delete()`.

Identifier handling:
    Ids arrive from request bodies as strings. A string that is not a valid
    UUID cannot name a stored row, so lookups treat it as "absent" and return
    None instead of raising.

Writes flush immediately so that store-level failures (unique index
violations in particular) surface inside the calling service, where they are
translated into application exceptions. Commit happens in get_db_session.
"""

import logging
import uuid
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from sqlalchemy import Uuid, select
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
RecordT = TypeVar("RecordT")


def parse_id(value: Any) -> Optional[uuid.UUID]:
    """
    Coerce an opaque identifier into a UUID.

    Returns None for anything that is not a UUID or a UUID string.
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


class SQLAlchemyRepository(Generic[ModelT, RecordT]):
    """
    CRUD operations over a single ORM model.

    Subclasses set `model` and implement `to_record()`.
    """

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    def to_record(self, instance: ModelT) -> RecordT:
        """Build the lean snapshot for a hydrated instance."""
        raise NotImplementedError

    def _snapshot(self, instance: Optional[ModelT], lean: bool) -> Union[ModelT, RecordT, None]:
        if instance is None or not lean:
            return instance
        return self.to_record(instance)

    def _coerce_filters(self, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Parse filter values aimed at UUID columns.

        Returns None when one of them is not a valid id, meaning no row
        can match.
        """
        mapper = self.model.__mapper__
        coerced: Dict[str, Any] = {}
        for key, value in filters.items():
            column = mapper.attrs[key].columns[0]
            if isinstance(column.type, Uuid):
                value = parse_id(value)
                if value is None:
                    return None
            coerced[key] = value
        return coerced

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_by_id(
        self, record_id: Any, *, lean: bool = True
    ) -> Union[ModelT, RecordT, None]:
        parsed = parse_id(record_id)
        if parsed is None:
            return None
        instance = await self.session.get(self.model, parsed)
        return self._snapshot(instance, lean)

    async def find_one(
        self, *, lean: bool = True, **filters: Any
    ) -> Union[ModelT, RecordT, None]:
        """Return the first row whose attributes equal the given filters."""
        coerced = self._coerce_filters(filters)
        if coerced is None:
            return None
        result = await self.session.execute(
            select(self.model).filter_by(**coerced).limit(1)
        )
        instance = result.scalars().first()
        return self._snapshot(instance, lean)

    async def find_all(self) -> List[RecordT]:
        """All rows as lean records, in the store's natural order."""
        result = await self.session.execute(select(self.model))
        return [self.to_record(instance) for instance in result.scalars().all()]

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, **values: Any) -> RecordT:
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        # Reload so server/ORM-generated columns are populated without lazy IO
        await self.session.refresh(instance)
        logger.debug("Created %s %s", self.model.__name__, instance.id)
        return self.to_record(instance)

    async def save(self, instance: ModelT) -> RecordT:
        """Persist changes made to a hydrated instance."""
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return self.to_record(instance)

    async def update_by_id(self, record_id: Any, values: Dict[str, Any]) -> Optional[RecordT]:
        """
        Replace the given fields on one row and return the updated record.

        Returns None when the row no longer exists.
        """
        instance = await self.find_by_id(record_id, lean=False)
        if instance is None:
            return None
        for key, value in values.items():
            setattr(instance, key, value)
        return await self.save(instance)

    async def delete(self, instance: ModelT) -> RecordT:
        """Delete a hydrated instance and return a snapshot of what was removed."""
        record = self.to_record(instance)
        await self.session.delete(instance)
        await self.session.flush()
        logger.debug("Deleted %s %s", self.model.__name__, record.id)
        return record

    async def delete_by_id(self, record_id: Any) -> Optional[RecordT]:
        instance = await self.find_by_id(record_id, lean=False)
        if instance is None:
            return None
        return await self.delete(instance)
