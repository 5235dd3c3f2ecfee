"""
Attendance ledger repository.

All writes go through single INSERT ... ON CONFLICT statements so that the
(staff_id, date) unique constraint is enforced by the database and never by a
separate existence check.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError

from staff_attendance.core.exceptions import ReferentialError
from staff_attendance.core.logging import get_logger
from staff_attendance.db.repositories.base_repository import BaseRepository
from staff_attendance.models.attendance import AttendanceRecord, AttendanceStatus

logger = get_logger(__name__)

LedgerRow = Tuple[str, date, AttendanceStatus]

_CONFLICT_KEYS = [AttendanceRecord.staff_id, AttendanceRecord.date]

# Rows per multi-VALUES statement, well under SQLite's bound parameter limit.
_BATCH_SIZE = 250


def _batches(values: List[dict]) -> Iterable[List[dict]]:
    for start in range(0, len(values), _BATCH_SIZE):
        yield values[start:start + _BATCH_SIZE]


class AttendanceRepository(BaseRepository[AttendanceRecord]):
    """Repository for the attendance ledger."""

    def __init__(self, session: AsyncSession):
        super().__init__(AttendanceRecord, session)

    async def upsert(self, staff_id: str, day: date, status: AttendanceStatus) -> None:
        """
        Insert a record or replace the status of the existing (staff_id, day) pair.

        Args:
            staff_id: Staff identifier
            day: Attendance date
            status: Status to store

        Raises:
            ReferentialError: If staff_id does not exist
        """
        stmt = self.upsert_insert().values(staff_id=staff_id, date=day, status=status)
        stmt = stmt.on_conflict_do_update(
            index_elements=_CONFLICT_KEYS,
            set_={"status": stmt.excluded.status, "updated_at": func.now()},
        )
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise ReferentialError(f"Staff '{staff_id}' not found", details={"staffId": staff_id}) from e

    async def insert_missing(self, rows: Iterable[Tuple[str, date, AttendanceStatus]]) -> int:
        """
        Insert rows whose (staff_id, date) pair has no record yet; existing rows are left alone.

        Concurrent callers materialising the same pairs cannot collide: the
        conflict clause turns the duplicate insert into a no-op.

        Args:
            rows: (staff_id, date, status) triples

        Returns:
            Number of rows actually inserted
        """
        values = [
            {"staff_id": staff_id, "date": day, "status": status}
            for staff_id, day, status in rows
        ]
        inserted = 0
        try:
            # Only the savepoint is undone on failure; earlier writes in the request survive.
            async with self.session.begin_nested():
                for batch in _batches(values):
                    stmt = self.upsert_insert().values(batch).on_conflict_do_nothing(
                        index_elements=_CONFLICT_KEYS,
                    )
                    result = await self.session.execute(stmt)
                    inserted += max(result.rowcount or 0, 0)
        except IntegrityError as e:
            # A staff row deleted mid-request; the rows are filled on the next read.
            logger.warning(
                "Auto-fill insert referenced a missing staff row, nothing materialised",
                extra={"rows": len(values), "error": str(e.orig)},
            )
            return 0
        return inserted

    async def upsert_many(self, rows: Iterable[Tuple[str, date, AttendanceStatus]]) -> int:
        """
        Upsert a batch of (staff_id, date, status) rows.

        Returns:
            Number of rows submitted

        Raises:
            ReferentialError: If any staff_id does not exist
        """
        values = [
            {"staff_id": staff_id, "date": day, "status": status}
            for staff_id, day, status in rows
        ]
        try:
            for batch in _batches(values):
                stmt = self.upsert_insert().values(batch)
                stmt = stmt.on_conflict_do_update(
                    index_elements=_CONFLICT_KEYS,
                    set_={"status": stmt.excluded.status, "updated_at": func.now()},
                )
                await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise ReferentialError("Attendance references an unknown staff id") from e
        return len(values)

    async def get_status(self, staff_id: str, day: date) -> Optional[AttendanceStatus]:
        """Status recorded for one pair, or None when unmarked."""
        result = await self.session.execute(
            select(AttendanceRecord.status).where(
                AttendanceRecord.staff_id == staff_id,
                AttendanceRecord.date == day,
            )
        )
        return result.scalar_one_or_none()

    async def delete_record(self, staff_id: str, day: date) -> bool:
        """
        Remove the record for a pair. Absent records are not an error.

        Returns:
            True if a record was removed
        """
        result = await self.session.execute(
            delete(AttendanceRecord).where(
                AttendanceRecord.staff_id == staff_id,
                AttendanceRecord.date == day,
            )
        )
        await self.session.flush()
        return result.rowcount > 0

    async def delete_for_staff(self, staff_id: str) -> int:
        result = await self.session.execute(
            delete(AttendanceRecord).where(AttendanceRecord.staff_id == staff_id)
        )
        await self.session.flush()
        return result.rowcount

    async def get_by_date(self, day: date) -> Dict[str, AttendanceStatus]:
        """Return {staff_id: status} for a single day."""
        result = await self.session.execute(
            select(AttendanceRecord.staff_id, AttendanceRecord.status)
            .where(AttendanceRecord.date == day)
        )
        return {row.staff_id: row.status for row in result}

    async def get_by_range(
        self,
        start: date,
        end: date,
        staff_id: Optional[str] = None,
    ) -> List[LedgerRow]:
        """
        Return (staff_id, date, status) rows within [start, end].

        Args:
            start: First date, inclusive
            end: Last date, inclusive
            staff_id: Optional single staff filter

        Returns:
            Rows ordered by date, then staff_id
        """
        query = (
            select(AttendanceRecord.staff_id, AttendanceRecord.date, AttendanceRecord.status)
            .where(AttendanceRecord.date >= start, AttendanceRecord.date <= end)
            .order_by(AttendanceRecord.date.asc(), AttendanceRecord.staff_id.asc())
        )
        if staff_id is not None:
            query = query.where(AttendanceRecord.staff_id == staff_id)
        result = await self.session.execute(query)
        return [(row.staff_id, row.date, row.status) for row in result]

    async def count_for_pair(self, staff_id: str, day: date) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(AttendanceRecord).where(
                AttendanceRecord.staff_id == staff_id,
                AttendanceRecord.date == day,
            )
        )
        return int(result.scalar_one())
