"""
Report endpoint tests: denominators, ranking and exports.
"""

from staff_attendance.models.attendance import AttendanceStatus
from staff_attendance.schemas.report import OverviewRow, StatusCounts
from staff_attendance.services.report_service import overview_sort_key


async def _mark(client, staff_id, day, status):
    response = await client.put("/api/attendance", json={"staffId": staff_id, "date": day, "status": status})
    assert response.status_code == 200, response.text


async def test_dashboard_percent_over_working_staff(admin_client, roster):
    await _mark(admin_client, "E1", "2024-01-15", "present")
    await _mark(admin_client, "E2", "2024-01-15", "halfday")

    response = await admin_client.get("/api/reports/dashboard", params={"date": "2024-01-15"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalStaff"] == 2
    assert data["workingStaff"] == 2
    assert data["counts"]["present"] == 1
    assert data["counts"]["halfday"] == 1
    assert data["percent"] == 75
    assert [row["staffId"] for row in data["staff"]] == ["E1", "E2"]


async def test_dashboard_on_sunday_has_no_denominator(admin_client, roster):
    response = await admin_client.get("/api/reports/dashboard", params={"date": "2024-01-07"})

    data = response.json()["data"]
    assert data["counts"]["weekend"] == 2
    assert data["workingStaff"] == 0
    assert data["percent"] == 0


async def test_dashboard_counts_unmarked(admin_client, roster):
    await _mark(admin_client, "E1", "2024-01-15", "present")

    data = (await admin_client.get("/api/reports/dashboard", params={"date": "2024-01-15"})).json()["data"]
    assert data["counts"]["unmarked"] == 1
    assert data["percent"] == 50


async def test_monthly_report_excludes_holidays_and_weekends(admin_client, roster):
    await admin_client.post("/api/holidays", json={"date": "2024-01-26", "name": "Republic Day"})
    for day in ("2024-01-02", "2024-01-03", "2024-01-04"):
        await _mark(admin_client, "E1", day, "present")
    await _mark(admin_client, "E1", "2024-01-05", "halfday")

    response = await admin_client.get("/api/reports/monthly", params={"year": 2024, "month": 0})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["daysInMonth"] == 31
    assert data["holidays"] == ["2024-01-26"]

    alice = next(row for row in data["rows"] if row["staffId"] == "E1")
    assert alice["counts"]["holiday"] == 1
    assert alice["counts"]["weekend"] == 4
    assert alice["workingDays"] == 26
    assert alice["percent"] == 13  # 3.5 / 26
    assert alice["days"][6] == "weekend"
    assert alice["days"][25] == "holiday"
    assert alice["days"][1] == "present"
    assert alice["days"][9] is None

    assert data["totals"]["present"] == 3
    assert data["totals"]["weekend"] == 8


async def test_monthly_report_department_filter(admin_client, roster):
    response = await admin_client.get("/api/reports/monthly", params={"year": 2024, "month": 0, "dept": "Operations"})

    data = response.json()["data"]
    assert data["dept"] == "Operations"
    assert [row["staffId"] for row in data["rows"]] == ["E2"]


async def test_overview_ranks_present_then_absent(admin_client, roster):
    await admin_client.post("/api/staff", json={"id": "E3", "name": "Carol"})
    week = ["2024-01-15", "2024-01-16", "2024-01-17", "2024-01-18", "2024-01-19"]

    for day, status in zip(week, ["present", "present", "present", "absent", "absent"]):
        await _mark(admin_client, "E1", day, status)
    for day, status in zip(week, ["present", "present", "present", "absent"]):
        await _mark(admin_client, "E2", day, status)
    for day in week[:4]:
        await _mark(admin_client, "E3", day, "present")

    response = await admin_client.get("/api/reports/overview", params={"from": week[0], "to": week[-1]})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["from"] == week[0]
    assert data["to"] == week[-1]
    assert data["totalDays"] == 5
    assert [(row["rank"], row["staffId"], row["percent"]) for row in data["rows"]] == [
        (1, "E3", 80),
        (2, "E2", 60),
        (3, "E1", 60),
    ]


async def test_overview_rejects_inverted_range(admin_client):
    response = await admin_client.get("/api/reports/overview", params={"from": "2024-02-01", "to": "2024-01-01"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_overview_sort_key_breaks_ties_by_name():
    def row(staff_id, name, present, absent):
        counts = StatusCounts(present=present, absent=absent)
        return OverviewRow(rank=0, staff_id=staff_id, name=name, counts=counts, total_days=5, percent=0)

    rows = [row("E1", "Zoe", 2, 1), row("E2", "Adam", 2, 1), row("E3", "Mia", 3, 2), row("E4", "Bo", 2, 0)]
    assert [r.staff_id for r in sorted(rows, key=overview_sort_key)] == ["E3", "E4", "E2", "E1"]


def test_status_counts_tally_unmarked():
    counts = StatusCounts()
    for status in (AttendanceStatus.PRESENT, None, AttendanceStatus.PRESENT, AttendanceStatus.WEEKEND):
        counts.add(status)
    assert (counts.present, counts.unmarked, counts.weekend) == (2, 1, 1)


async def test_employee_reports_are_scoped(employee_client):
    data = (await employee_client.get("/api/reports/monthly", params={"year": 2024, "month": 0})).json()["data"]
    assert [row["staffId"] for row in data["rows"]] == ["E1"]

    dashboard = (await employee_client.get("/api/reports/dashboard", params={"date": "2024-01-15"})).json()["data"]
    assert dashboard["totalStaff"] == 1


async def test_excel_export(admin_client, roster):
    await _mark(admin_client, "E1", "2024-01-15", "present")

    response = await admin_client.get("/api/reports/monthly/export.xlsx", params={"year": 2024, "month": 0})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "attendance_2024_01.xlsx" in response.headers["content-disposition"]
    assert response.content[:2] == b"PK"


async def test_pdf_export(admin_client, roster):
    response = await admin_client.get("/api/reports/monthly/export.pdf", params={"year": 2024, "month": 0})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


async def test_reports_require_session(client):
    response = await client.get("/api/reports/dashboard", params={"date": "2024-01-15"})
    assert response.status_code == 401
