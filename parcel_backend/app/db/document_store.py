"""
Document store adapter.

Exposes the five application collections (users, parcels, payments, riders,
tracking) through a small collection API: find, find_one, insert_one,
update_one and delete_one, with exact-match filters and an optional sort.

Records are plain dicts. Keys that map to a table column are stored in that
column; everything else goes into the table's JSON ``details`` payload and
is merged back in on read.

Writes are flushed but not committed. Callers commit through
``DocumentStore.commit()`` so several writes can share one transaction.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from fastapi import Depends
from sqlalchemy import JSON, select, update, delete, or_, inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_backend.app.core.exceptions import InternalError
from parcel_backend.app.db.session import get_db
from parcel_backend.app.models.parcel import Parcel
from parcel_backend.app.models.payment import Payment
from parcel_backend.app.models.rider import Rider
from parcel_backend.app.models.tracking import TrackingEntry
from parcel_backend.app.models.user import User

logger = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1

PAYLOAD_FIELD = "details"


@dataclass(frozen=True)
class SortSpec:
    """Single-field sort; direction is ASCENDING (1) or DESCENDING (-1)."""
    field: str
    direction: int = ASCENDING


class Collection:
    """
    Collection-style access to one table.

    Every operation touches a single document, except ``find``.
    """

    def __init__(self, session: AsyncSession, name: str, model: Type):
        self.session = session
        self.name = name
        self.model = model
        self._fields = [attr.key for attr in sa_inspect(model).column_attrs]

    # --- record mapping ---

    def _split(self, record: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        columns, payload = {}, {}
        for key, value in record.items():
            if key in self._fields and key != PAYLOAD_FIELD:
                columns[key] = value
            else:
                payload[key] = value
        return columns, payload

    def _to_record(self, row) -> Dict[str, Any]:
        record = dict(getattr(row, PAYLOAD_FIELD) or {})
        for key in self._fields:
            if key != PAYLOAD_FIELD:
                record[key] = getattr(row, key)
        return record

    def _conditions(self, filter: Optional[Mapping[str, Any]]) -> list:
        conditions = []
        for key, value in (filter or {}).items():
            if key not in self._fields or key == PAYLOAD_FIELD:
                raise ValueError(f"Cannot filter {self.name} on unknown field '{key}'")
            column = getattr(self.model, key)
            conditions.append(column.is_(None) if value is None else column == value)
        return conditions

    def _order_by(self, sort: Optional[SortSpec]) -> list:
        if sort is None:
            return []
        if sort.field not in self._fields:
            raise ValueError(f"Cannot sort {self.name} on unknown field '{sort.field}'")
        column = getattr(self.model, sort.field)
        return [column.desc() if sort.direction == DESCENDING else column.asc()]

    def _comparable(self, key: str) -> bool:
        return not isinstance(getattr(self.model, key).type, JSON)

    async def _first_id(self, conditions: list) -> Optional[str]:
        result = await self.session.execute(
            select(self.model.id).where(*conditions).limit(1)
        )
        return result.scalar_one_or_none()

    def _failed(self, operation: str) -> InternalError:
        logger.exception("Document store operation %s.%s failed", self.name, operation)
        return InternalError(operation=f"{self.name}.{operation}")

    # --- operations ---

    async def find(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Dict[str, Any]]:
        """Return every record matching ``filter`` (all records when empty)."""
        query = (
            select(self.model)
            .where(*self._conditions(filter))
            .order_by(*self._order_by(sort))
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError:
            raise self._failed("find")
        return [self._to_record(row) for row in result.scalars().all()]

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the first record matching ``filter``, or None."""
        query = (
            select(self.model)
            .where(*self._conditions(filter))
            .limit(1)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError:
            raise self._failed("find_one")
        row = result.scalar_one_or_none()
        return self._to_record(row) if row is not None else None

    async def insert_one(self, record: Mapping[str, Any]) -> str:
        """Insert ``record`` and return its generated id."""
        columns, payload = self._split(record)
        columns.pop("id", None)
        row = self.model(**columns, details=payload)
        self.session.add(row)
        try:
            await self.session.flush()
        except SQLAlchemyError:
            raise self._failed("insert_one")
        return row.id

    async def update_one(self, filter: Mapping[str, Any], patch: Mapping[str, Any]) -> int:
        """
        Apply ``patch`` to the first record matching ``filter``.

        Returns the number of modified records: 0 when nothing matches or
        when every patched value already holds. The filter is repeated in
        the UPDATE itself, so a concurrent writer that changes a filtered
        field first makes this update a no-op instead of a double write.
        """
        conditions = self._conditions(filter)
        columns, payload = self._split(patch)
        columns.pop("id", None)
        try:
            target = await self._first_id(conditions)
            if target is None:
                return 0

            guards = [self.model.id == target, *conditions]
            if payload:
                result = await self.session.execute(
                    select(getattr(self.model, PAYLOAD_FIELD)).where(self.model.id == target)
                )
                current = result.scalar_one_or_none() or {}
                merged = {**current, **payload}
                if merged != current:
                    columns[PAYLOAD_FIELD] = merged
            if not columns:
                return 0
            # JSON has no equality operator on PostgreSQL; a changed payload
            # already guarantees a modification.
            if all(self._comparable(key) for key in columns):
                guards.append(or_(*(
                    getattr(self.model, key).is_distinct_from(value)
                    for key, value in columns.items()
                )))

            result = await self.session.execute(
                update(self.model)
                .where(*guards)
                .values(**columns)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError:
            raise self._failed("update_one")
        return result.rowcount

    async def delete_one(self, filter: Mapping[str, Any]) -> int:
        """Delete the first record matching ``filter``; returns 0 or 1."""
        conditions = self._conditions(filter)
        try:
            target = await self._first_id(conditions)
            if target is None:
                return 0
            result = await self.session.execute(
                delete(self.model)
                .where(self.model.id == target)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError:
            raise self._failed("delete_one")
        return result.rowcount


COLLECTIONS: Dict[str, Type] = {
    "users": User,
    "parcels": Parcel,
    "payments": Payment,
    "riders": Rider,
    "tracking": TrackingEntry,
}


class DocumentStore:
    """Per-request handle on the named collections, bound to one session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._collections: Dict[str, Collection] = {}

    def collection(self, name: str) -> Collection:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection '{name}'")
        if name not in self._collections:
            self._collections[name] = Collection(self.session, name, COLLECTIONS[name])
        return self._collections[name]

    __getitem__ = collection

    @property
    def users(self) -> Collection:
        return self.collection("users")

    @property
    def parcels(self) -> Collection:
        return self.collection("parcels")

    @property
    def payments(self) -> Collection:
        return self.collection("payments")

    @property
    def riders(self) -> Collection:
        return self.collection("riders")

    @property
    def tracking(self) -> Collection:
        return self.collection("tracking")

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            logger.exception("Document store commit failed")
            await self.session.rollback()
            raise InternalError(operation="commit")

    async def rollback(self) -> None:
        await self.session.rollback()


async def get_document_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    """FastAPI dependency wrapping the request's session in a DocumentStore."""
    return DocumentStore(db)
