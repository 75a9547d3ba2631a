"""Tests for the HTTP endpoints."""

import base64
import io
import json
import zipfile

from fastapi.testclient import TestClient

from health_tracker.api.app import create_app
from health_tracker.containers import AppContainer
from health_tracker.domain.exports import ArchiveEntry
from tests.conftest import run


def _client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health_endpoint(container: AppContainer) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_entry_with_photo_and_read_day(container: AppContainer) -> None:
    client = _client(container)
    photo = base64.b64encode(b"\xff\xd8jpeg").decode()

    created = client.post(
        "/entries",
        json={
            "type": "meal",
            "date": "2024-01-05",
            "subtype": "lunch",
            "photo_base64": photo,
        },
    )

    assert created.status_code == 201
    entry = created.json()
    assert entry["has_photo"] is True
    assert run(container.store.get_photos(entry["id"]))[0].payload == b"\xff\xd8jpeg"

    day = client.get("/days/2024-01-05").json()
    assert [e["id"] for e in day["entries"]] == [entry["id"]]
    assert day["summary"]["water_oz"] is None
    assert day["analysis"] is None


def test_create_entry_rejects_bad_input(container: AppContainer) -> None:
    client = _client(container)

    unknown_type = client.post("/entries", json={"type": "nap", "date": "2024-01-05"})
    bad_photo = client.post(
        "/entries",
        json={"type": "meal", "date": "2024-01-05", "photo_base64": "***"},
    )

    assert unknown_type.status_code == 400
    assert bad_photo.status_code == 422


def test_delete_entry(container: AppContainer) -> None:
    client = _client(container)
    entry = client.post("/entries", json={"type": "drink", "date": "2024-01-05"}).json()

    response = client.delete(f"/entries/{entry['id']}")

    assert response.status_code == 204
    assert client.get("/days/2024-01-05").json()["entries"] == []


def test_summary_patch_and_water(container: AppContainer) -> None:
    client = _client(container)

    client.patch("/days/2024-01-05/summary", json={"weight": {"value": 180.2}})
    client.post("/days/2024-01-05/water", json={"oz": 16})
    summary = client.post("/days/2024-01-05/water", json={"oz": 8}).json()

    assert summary["water_oz"] == 24
    assert summary["weight"] == {"value": 180.2, "unit": "lbs"}


def test_list_entries_requires_a_filter(container: AppContainer) -> None:
    client = _client(container)
    client.post(
        "/entries",
        json={"type": "workout", "date": "2024-01-05", "duration_minutes": 45},
    )

    listed = client.get("/entries", params={"entry_type": "workout"})
    missing = client.get("/entries")

    assert [e["duration_minutes"] for e in listed.json()["entries"]] == [45]
    assert missing.status_code == 400


def test_export_day_download(container: AppContainer) -> None:
    client = _client(container)
    client.post("/entries", json={"type": "snack", "date": "2024-01-05"})

    response = client.get("/days/2024-01-05/export")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert 'filename="health-2024-01-05.zip"' in response.headers["content-disposition"]
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert archive.namelist() == ["daily/2024-01-05/log.json"]


def test_export_empty_day_is_not_found(container: AppContainer) -> None:
    response = _client(container).get("/days/2024-01-05/export")

    assert response.status_code == 404


def test_import_endpoint_dispatches_json(container: AppContainer) -> None:
    client = _client(container)
    plan = {"generatedDate": "2024-01-07", "days": []}

    response = client.post(
        "/import", params={"filename": "plan.json"}, content=json.dumps(plan)
    )

    assert response.status_code == 200
    assert response.json()["kind"] == "meal_plan"
    assert client.get("/meal-plan").json() == plan


def test_import_endpoint_rejects_unknown_and_empty_files(
    container: AppContainer,
) -> None:
    client = _client(container)

    unknown = client.post("/import", params={"filename": "x.json"}, content=b'{"a": 1}')
    empty = client.post("/import", params={"filename": "x.json"}, content=b"")

    assert unknown.status_code == 400
    assert empty.status_code == 400


def test_import_analysis_endpoint(container: AppContainer) -> None:
    client = _client(container)
    analysis = {"date": "2024-01-05", "totals": {"calories": 1900}}

    response = client.post("/import/analysis", content=json.dumps(analysis))

    assert response.json() == {"date": "2024-01-05"}
    day = client.get("/days/2024-01-05").json()
    assert day["analysis"]["calories"]["intake"] == 1900


def test_storage_endpoints(container: AppContainer) -> None:
    client = _client(container)

    info = client.get("/storage").json()
    cleared = client.delete("/storage/processed-photos").json()

    assert info == {"unsynced": 0, "synced": 0, "processed": 0, "total_size_mb": 0.0}
    assert cleared == {"deleted": 0}


def test_meal_plan_missing(container: AppContainer) -> None:
    assert _client(container).get("/meal-plan").status_code == 404


def test_profile_put_and_get(container: AppContainer) -> None:
    client = _client(container)

    client.put("/profile/goals", json={"calories": 2000})

    assert client.get("/profile/goals").json() == {
        "key": "goals",
        "value": {"calories": 2000},
    }


def test_import_archive_with_bad_summary_is_a_client_error(
    container: AppContainer,
) -> None:
    client = _client(container)
    manifest = {"date": "2024-01-05", "entries": [], "weight": {"unit": "kg"}}
    content = container.codec.write(
        [
            ArchiveEntry(
                path="daily/2024-01-05/log.json", data=json.dumps(manifest).encode()
            )
        ]
    )

    response = client.post("/import", params={"filename": "day.zip"}, content=content)

    assert response.status_code == 400
    assert "Invalid summary fields" in response.json()["detail"]


def test_list_entries_with_one_bound_is_a_client_error(
    container: AppContainer,
) -> None:
    response = _client(container).get(
        "/entries", params={"entry_type": "meal", "start": "2024-01-05"}
    )

    assert response.status_code == 400
