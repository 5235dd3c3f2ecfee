"""
Staff roster endpoint tests.
"""

from sqlalchemy import func, select

from staff_attendance.models.attendance import AttendanceRecord
from staff_attendance.models.user import User


async def test_create_staff_creates_employee_login(admin_client, login_as):
    response = await admin_client.post(
        "/api/staff",
        json={"id": "E7", "name": "  Grace  ", "dept": "Sales", "position": "Lead"},
    )

    assert response.status_code == 201
    assert response.json()["data"] == {"id": "E7", "name": "Grace", "dept": "Sales", "position": "Lead"}

    employee = await login_as("e7", "sam123456")
    me = (await employee.get("/api/me")).json()["data"]
    assert me["username"] == "e7"
    assert me["role"] == "employee"
    assert me["staffId"] == "E7"


async def test_optional_fields_default_to_empty(admin_client):
    response = await admin_client.post("/api/staff", json={"id": "E8", "name": "Heidi", "dept": None})

    assert response.status_code == 201
    assert response.json()["data"]["dept"] == ""
    assert response.json()["data"]["position"] == ""


async def test_duplicate_staff_id_is_409(admin_client, roster):
    response = await admin_client.post("/api/staff", json={"id": "E1", "name": "Someone"})

    assert response.status_code == 409
    assert response.json()["success"] is False


async def test_missing_name_is_400(admin_client):
    response = await admin_client.post("/api/staff", json={"id": "E9", "name": "   "})
    assert response.status_code == 400


async def test_list_is_ordered_by_name_and_filterable(admin_client, roster):
    await admin_client.post("/api/staff", json={"id": "E3", "name": "Aaron", "dept": "Sales"})

    everyone = await admin_client.get("/api/staff")
    assert [s["id"] for s in everyone.json()["data"]] == ["E3", "E1", "E2"]

    sales = await admin_client.get("/api/staff", params={"dept": "Sales"})
    assert [s["id"] for s in sales.json()["data"]] == ["E3", "E1"]


async def test_departments(admin_client, roster):
    response = await admin_client.get("/api/staff/departments")
    assert response.json()["data"] == ["Operations", "Sales"]


async def test_update_staff(admin_client, roster):
    response = await admin_client.put("/api/staff/E2", json={"name": "Robert", "dept": "Sales"})

    assert response.status_code == 200
    assert response.json()["data"] == {"id": "E2", "name": "Robert", "dept": "Sales", "position": ""}


async def test_update_unknown_staff_is_404(admin_client):
    response = await admin_client.put("/api/staff/NOPE", json={"name": "Nobody"})
    assert response.status_code == 404


async def test_delete_cascades_to_attendance_and_login(admin_client, employee_client, session_maker):
    await admin_client.post("/api/attendance", json={"staffId": "E1", "date": "2024-01-15", "status": "present"})
    await admin_client.get("/api/attendance", params={"date": "2024-01-07"})

    response = await admin_client.delete("/api/staff/E1")
    assert response.status_code == 200

    async with session_maker() as session:
        records = await session.scalar(
            select(func.count()).select_from(AttendanceRecord).where(AttendanceRecord.staff_id == "E1")
        )
        logins = await session.scalar(select(func.count()).select_from(User).where(User.username == "e1"))
    assert records == 0
    assert logins == 0

    assert (await admin_client.get("/api/staff/E1")).status_code == 404
    assert "E1" not in (await admin_client.get("/api/attendance", params={"date": "2024-01-07"})).json()["data"]

    # The deleted employee's session no longer authenticates.
    stale = await employee_client.get("/api/me")
    assert stale.status_code == 401


async def test_delete_unknown_staff_is_404(admin_client):
    response = await admin_client.delete("/api/staff/NOPE")
    assert response.status_code == 404


async def test_employee_sees_only_own_record(employee_client):
    listing = await employee_client.get("/api/staff")
    assert [s["id"] for s in listing.json()["data"]] == ["E1"]

    assert (await employee_client.get("/api/staff/E1")).status_code == 200
    assert (await employee_client.get("/api/staff/E2")).status_code == 403
    assert (await employee_client.get("/api/staff/departments")).json()["data"] == ["Sales"]


async def test_manager_may_not_write_staff(manager_client):
    assert (await manager_client.get("/api/staff")).status_code == 200

    created = await manager_client.post("/api/staff", json={"id": "E5", "name": "Eve"})
    assert created.status_code == 403
    assert (await manager_client.delete("/api/staff/E1")).status_code == 403


async def test_anonymous_is_401(client):
    response = await client.get("/api/staff")

    assert response.status_code == 401
    assert response.json()["success"] is False
