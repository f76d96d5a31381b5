from conftest import COLUMN_MAPPING, course_cells, workbook_bytes

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(client, rows, name=None):
    data = {"name": name} if name else {}
    response = client.post(
        "/api/revisions/upload",
        files={"file": ("fall-2025.xlsx", workbook_bytes(rows), XLSX_TYPE)},
        data=data,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_upload_creates_onboarding_revision(client):
    revision = upload(client, [course_cells()])
    assert revision["onboarding"] is True
    assert revision["name"] == "fall-2025"
    assert revision["file_name"] == "fall-2025.xlsx"
    assert revision["schedule_id"] is None


def test_upload_rejects_unreadable_file(client):
    response = client.post(
        "/api/revisions/upload",
        files={"file": ("notes.xlsx", b"plain text", XLSX_TYPE)},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Uploaded file is not a readable spreadsheet"


def test_verify_then_commit_flow(client, reference_data):
    revision = upload(client, [course_cells(), course_cells(section="2", term="24/XX")])

    verified = client.post(f"/api/revisions/{revision['id']}/verify", json={"columns": COLUMN_MAPPING})
    assert verified.status_code == 200
    body = verified.json()
    assert body["success"] is False
    assert body["row"] == 3

    fixed = upload(client, [course_cells(), course_cells(section="2")], name="Fall")
    verified = client.post(f"/api/revisions/{fixed['id']}/verify", json={"columns": COLUMN_MAPPING})
    assert verified.json()["success"] is True

    committed = client.post(
        f"/api/revisions/{fixed['id']}/commit",
        json={"columns": COLUMN_MAPPING, "name": "Fall 2025"},
    )
    assert committed.status_code == 200
    assert committed.json()["success"] is True
    assert committed.json()["course_count"] == 2

    courses = client.get(f"/api/revisions/{fixed['id']}/courses")
    assert courses.status_code == 200
    payload = courses.json()
    assert len(payload) == 2
    first = payload[0]
    assert first["within_guideline"] is False
    assert first["faculty"][0]["resolved"] is True
    assert first["locations"][0]["days"] == "MW"
    assert first["locations"][0]["rooms"][0]["building_id"] == reference_data["buildings"]["SCI"]
    assert {note["type"] for note in first["notes"]} == {"ACADEMIC_AFFAIRS", "DEPARTMENT", "CHANGES"}

    semesters = client.get(f"/api/revisions/{fixed['id']}/semesters")
    assert semesters.json() == [{"code": "FA", "title": "Fall"}]

    listing = client.get("/api/revisions/", params={"search": "Fall 2025"})
    assert listing.status_code == 200
    page = listing.json()
    assert page["total_pages"] == 1
    assert page["result"][0]["main"]["id"] == fixed["id"]
    assert page["result"][0]["revisions"] == []

    assert client.get("/api/revisions/", params={"search": "Winter"}).json()["result"] == []


def test_mapping_rejects_shared_and_unknown_columns(client):
    revision = upload(client, [course_cells()])

    shared = client.post(
        f"/api/revisions/{revision['id']}/verify",
        json={"columns": {"title": 1, "subject": 1}},
    )
    assert shared.status_code == 422

    unknown = client.post(
        f"/api/revisions/{revision['id']}/verify",
        json={"columns": {"title": 1, "color": 2}},
    )
    assert unknown.status_code == 422

    negative = client.post(
        f"/api/revisions/{revision['id']}/verify",
        json={"columns": {"title": -1}},
    )
    assert negative.status_code == 422


def test_verify_unknown_revision_reports_failure(client):
    response = client.post("/api/revisions/missing/verify", json={"columns": COLUMN_MAPPING})
    assert response.status_code == 200
    assert response.json()["success"] is False


def test_delete_revision(client, reference_data):
    revision = upload(client, [course_cells()])
    client.post(f"/api/revisions/{revision['id']}/commit", json={"columns": COLUMN_MAPPING, "name": "Fall"})

    deleted = client.delete(f"/api/revisions/{revision['id']}")
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True}

    assert client.get(f"/api/revisions/{revision['id']}/courses").status_code == 404
    assert client.delete(f"/api/revisions/{revision['id']}").status_code == 404
