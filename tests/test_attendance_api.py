"""
Attendance endpoint tests: auto-fill, toggle, write-time override and scoping.
"""

import asyncio
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from staff_attendance.core.access import Principal
from staff_attendance.db.base import Base
from staff_attendance.db.repositories.staff_repository import StaffRepository
from staff_attendance.db.session import enable_sqlite_foreign_keys
from staff_attendance.models.attendance import AttendanceRecord, AttendanceStatus
from staff_attendance.models.user import UserRole
from staff_attendance.services.attendance_service import AttendanceService

SUNDAY = "2024-01-07"
MONDAY = "2024-01-15"


async def _records(session_maker, staff_id, day):
    async with session_maker() as session:
        result = await session.execute(
            select(AttendanceRecord.status).where(
                AttendanceRecord.staff_id == staff_id,
                AttendanceRecord.date == date.fromisoformat(day),
            )
        )
        return list(result.scalars().all())


async def test_sunday_read_materializes_weekend(admin_client, roster, session_maker):
    response = await admin_client.get("/api/attendance", params={"date": SUNDAY})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == {"E1": "weekend", "E2": "weekend"}
    assert await _records(session_maker, "E1", SUNDAY) == [AttendanceStatus.WEEKEND]


async def test_repeated_reads_create_exactly_one_row(admin_client, roster, session_maker):
    await admin_client.get("/api/attendance", params={"date": SUNDAY})
    await admin_client.get("/api/attendance", params={"date": SUNDAY})

    async with session_maker() as session:
        count = await session.scalar(
            select(func.count()).select_from(AttendanceRecord).where(AttendanceRecord.staff_id == "E1")
        )
    assert count == 1


async def test_materialize_day_is_idempotent(roster, session_maker):
    async with session_maker() as session:
        service = AttendanceService(session)
        assert await service.materialize_day(date(2024, 1, 7)) == 2
        assert await service.materialize_day(date(2024, 1, 7)) == 0
        assert await service.materialize_day(date(2024, 1, 8)) == 0
        await session.commit()


async def test_working_day_read_does_not_write(admin_client, roster, session_maker):
    response = await admin_client.get("/api/attendance", params={"date": MONDAY})

    assert response.json()["data"] == {}
    assert await _records(session_maker, "E1", MONDAY) == []


async def test_marking_same_status_twice_unmarks(admin_client, roster, session_maker):
    payload = {"staffId": "E1", "date": MONDAY, "status": "present"}

    first = await admin_client.post("/api/attendance", json=payload)
    assert first.status_code == 200
    assert first.json()["data"]["action"] == "created"
    assert first.json()["data"]["status"] == "present"

    second = await admin_client.post("/api/attendance", json=payload)
    assert second.status_code == 200
    assert second.json()["data"]["action"] == "deleted"
    assert second.json()["data"]["status"] is None

    assert await _records(session_maker, "E1", MONDAY) == []
    day = await admin_client.get("/api/attendance", params={"date": MONDAY})
    assert "E1" not in day.json()["data"]


async def test_marking_different_status_replaces(admin_client, roster, session_maker):
    await admin_client.post("/api/attendance", json={"staffId": "E1", "date": MONDAY, "status": "present"})
    response = await admin_client.post(
        "/api/attendance", json={"staffId": "E1", "date": MONDAY, "status": "halfday"},
    )

    assert response.json()["data"]["action"] == "updated"
    assert await _records(session_maker, "E1", MONDAY) == [AttendanceStatus.HALFDAY]


async def test_put_is_plain_upsert(admin_client, roster, session_maker):
    payload = {"staffId": "E1", "date": MONDAY, "status": "absent"}

    await admin_client.put("/api/attendance", json=payload)
    response = await admin_client.put("/api/attendance", json=payload)

    assert response.json()["data"]["action"] == "unchanged"
    assert await _records(session_maker, "E1", MONDAY) == [AttendanceStatus.ABSENT]


async def test_mark_on_sunday_is_stored_as_weekend(admin_client, roster, session_maker):
    response = await admin_client.post(
        "/api/attendance", json={"staffId": "E1", "date": SUNDAY, "status": "present"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "weekend"
    assert await _records(session_maker, "E1", SUNDAY) == [AttendanceStatus.WEEKEND]


async def test_mark_unknown_staff_is_404(admin_client, roster):
    response = await admin_client.post(
        "/api/attendance", json={"staffId": "NOPE", "date": MONDAY, "status": "present"},
    )

    assert response.status_code == 404
    assert response.json()["success"] is False


async def test_missing_field_is_400(admin_client, roster):
    response = await admin_client.post("/api/attendance", json={"staffId": "E1", "status": "present"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "date" in body["error"]


async def test_invalid_status_is_400(admin_client, roster):
    response = await admin_client.post(
        "/api/attendance", json={"staffId": "E1", "date": MONDAY, "status": "sick"},
    )
    assert response.status_code == 400


async def test_missing_date_query_is_400(admin_client, roster):
    response = await admin_client.get("/api/attendance")
    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_delete_unmarks_and_is_noop_when_absent(admin_client, roster, session_maker):
    await admin_client.post("/api/attendance", json={"staffId": "E1", "date": MONDAY, "status": "present"})

    removed = await admin_client.request("DELETE", "/api/attendance", json={"staffId": "E1", "date": MONDAY})
    assert removed.json()["data"]["action"] == "deleted"

    again = await admin_client.request("DELETE", "/api/attendance", json={"staffId": "E1", "date": MONDAY})
    assert again.status_code == 200
    assert again.json()["data"]["action"] == "unchanged"
    assert await _records(session_maker, "E1", MONDAY) == []


async def test_bulk_mark_with_department_filter(admin_client, roster, session_maker):
    response = await admin_client.post(
        "/api/attendance/bulk", json={"date": MONDAY, "status": "present", "dept": "Sales"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["marked"] == 1
    assert await _records(session_maker, "E1", MONDAY) == [AttendanceStatus.PRESENT]
    assert await _records(session_maker, "E2", MONDAY) == []


async def test_month_read_fills_every_sunday(admin_client, roster):
    response = await admin_client.get("/api/attendance/month", params={"year": 2024, "month": 0})

    assert response.status_code == 200
    data = response.json()["data"]
    assert sorted(data) == ["2024-01-07", "2024-01-14", "2024-01-21", "2024-01-28"]
    assert data["2024-01-14"] == {"E1": "weekend", "E2": "weekend"}


async def test_month_out_of_range_is_400(admin_client, roster):
    response = await admin_client.get("/api/attendance/month", params={"year": 2024, "month": 12})
    assert response.status_code == 400


async def test_manager_may_mark_attendance(manager_client):
    response = await manager_client.post(
        "/api/attendance", json={"staffId": "E2", "date": MONDAY, "status": "absent"},
    )
    assert response.status_code == 200


async def test_employee_sees_only_own_attendance(employee_client):
    response = await employee_client.get("/api/attendance", params={"date": SUNDAY})

    assert response.status_code == 200
    assert response.json()["data"] == {"E1": "weekend"}


async def test_employee_may_not_mark(employee_client):
    response = await employee_client.post(
        "/api/attendance", json={"staffId": "E1", "date": MONDAY, "status": "present"},
    )

    assert response.status_code == 403
    assert response.json()["success"] is False


async def test_my_report_resolves_every_day(employee_client, admin_client):
    await admin_client.post("/api/attendance", json={"staffId": "E1", "date": MONDAY, "status": "present"})

    response = await employee_client.get("/api/my-report", params={"year": 2024, "month": 0})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["staffId"] == "E1"
    assert len(data["days"]) == 31
    assert data["days"][SUNDAY] == "weekend"
    assert data["days"][MONDAY] == "present"
    assert data["days"]["2024-01-16"] is None


async def test_my_report_is_for_employees(admin_client):
    response = await admin_client.get("/api/my-report", params={"year": 2024, "month": 0})
    assert response.status_code == 403


async def test_anonymous_read_is_401(client):
    response = await client.get("/api/attendance", params={"date": SUNDAY})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Not authenticated"}


async def test_concurrent_sunday_reads_create_one_row_each(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        connect_args={"timeout": 30},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    staff_ids = [f"S{n:02d}" for n in range(50)]
    async with maker() as session:
        for staff_id in staff_ids:
            await StaffRepository(session).create(id=staff_id, name=f"Staff {staff_id}")
        await session.commit()

    admin = Principal(user_id=1, username="admin", role=UserRole.ADMIN)

    async def read_sunday():
        async with maker() as session:
            return await AttendanceService(session).get_day(admin, date(2024, 1, 7))

    try:
        results = await asyncio.gather(*(read_sunday() for _ in range(8)), return_exceptions=True)

        assert [r for r in results if isinstance(r, Exception)] == []
        assert all(len(r) == len(staff_ids) for r in results)

        async with maker() as session:
            rows = await session.execute(
                select(AttendanceRecord.staff_id, func.count())
                .where(AttendanceRecord.date == date(2024, 1, 7))
                .group_by(AttendanceRecord.staff_id)
            )
            per_staff = dict(rows.all())
            statuses = set((await session.execute(select(AttendanceRecord.status))).scalars())
        assert per_staff == {staff_id: 1 for staff_id in staff_ids}
        assert statuses == {AttendanceStatus.WEEKEND}
    finally:
        await engine.dispose()
