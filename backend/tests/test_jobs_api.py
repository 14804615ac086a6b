from __future__ import annotations


JOB = {
    "title": "Data Engineer",
    "company": "Example GmbH",
    "url": "https://www.linkedin.com/jobs/view/4188123456/",
}


def _create(client, headers, **overrides):
    response = client.post("/api/jobs", json={**JOB, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_then_fetch_returns_submitted_fields(client, auth_headers):
    created = _create(
        client,
        auth_headers,
        location="Berlin, Germany",
        salary="70k-85k EUR",
        notes="Referral from Sam",
        status="applied",
    )

    fetched = client.get(f"/api/jobs/{created['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    body = fetched.json()
    assert body["title"] == "Data Engineer"
    assert body["company"] == "Example GmbH"
    assert body["url"] == JOB["url"]
    assert body["location"] == "Berlin, Germany"
    assert body["salary"] == "70k-85k EUR"
    assert body["notes"] == "Referral from Sam"
    assert body["status"] == "applied"
    assert body["dateAdded"]
    assert body["interviews"] == []


def test_omitted_optional_fields_are_null_and_status_defaults_to_saved(client, auth_headers):
    created = _create(client, auth_headers)
    assert created["status"] == "saved"
    for field in ("location", "salary", "notes", "dateApplied", "resumeVersion", "coverLetterUsed"):
        assert created[field] is None


def test_create_rejects_invalid_payload(client, auth_headers):
    response = client.post(
        "/api/jobs",
        json={"title": "", "company": "Acme", "url": "not a url", "status": "ghosted"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    fields = {tuple(error["loc"])[-1] for error in response.json()["errors"]}
    assert {"title", "url", "status"} <= fields


def test_jobs_require_authentication(client):
    assert client.get("/api/jobs").status_code == 401
    assert client.post("/api/jobs", json=JOB).status_code == 401
    assert client.get("/api/jobs/stats").status_code == 401


def test_list_filters_by_status_and_paginates(client, auth_headers):
    first = _create(client, auth_headers, title="First")
    second = _create(client, auth_headers, title="Second", status="applied")
    third = _create(client, auth_headers, title="Third")

    listed = client.get("/api/jobs", headers=auth_headers).json()
    assert [job["id"] for job in listed] == [third["id"], second["id"], first["id"]]

    applied = client.get("/api/jobs", params={"status": "applied"}, headers=auth_headers).json()
    assert [job["id"] for job in applied] == [second["id"]]

    page = client.get("/api/jobs", params={"limit": 1, "offset": 1}, headers=auth_headers).json()
    assert [job["id"] for job in page] == [second["id"]]

    assert client.get("/api/jobs", params={"status": "ghosted"}, headers=auth_headers).status_code == 400


def test_list_only_returns_callers_jobs(client, auth_headers, other_headers):
    _create(client, auth_headers, title="Mine")
    _create(client, other_headers, title="Theirs")

    titles = [job["title"] for job in client.get("/api/jobs", headers=auth_headers).json()]
    assert titles == ["Mine"]


def test_foreign_job_is_not_found_for_read_and_mutations(client, auth_headers, other_headers):
    job = _create(client, other_headers)
    url = f"/api/jobs/{job['id']}"

    assert client.get(url, headers=auth_headers).status_code == 404
    assert client.put(url, json={"status": "offer"}, headers=auth_headers).status_code == 404
    assert client.delete(url, headers=auth_headers).status_code == 404
    assert client.get("/api/jobs/9999", headers=auth_headers).status_code == 404

    still_there = client.get(url, headers=other_headers).json()
    assert still_there["status"] == "saved"


def test_update_applies_partial_changes(client, auth_headers):
    job = _create(client, auth_headers, notes="initial")

    response = client.put(
        f"/api/jobs/{job['id']}",
        json={
            "status": "interviewing",
            "dateApplied": "2026-01-05T09:00:00Z",
            "resumeVersion": "v3-data",
            "coverLetterUsed": True,
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "interviewing"
    assert body["dateApplied"] == "2026-01-05T09:00:00Z"
    assert body["resumeVersion"] == "v3-data"
    assert body["coverLetterUsed"] is True
    assert body["notes"] == "initial"
    assert body["title"] == "Data Engineer"


def test_update_rejects_null_for_required_fields(client, auth_headers):
    job = _create(client, auth_headers)
    response = client.put(f"/api/jobs/{job['id']}", json={"title": None}, headers=auth_headers)
    assert response.status_code == 400


def test_delete_returns_no_content(client, auth_headers):
    job = _create(client, auth_headers)

    response = client.delete(f"/api/jobs/{job['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/api/jobs/{job['id']}", headers=auth_headers).status_code == 404


def test_stats_endpoint_aggregates_callers_jobs(client, auth_headers, other_headers):
    empty = client.get("/api/jobs/stats", headers=auth_headers).json()
    assert empty["total"] == 0
    assert empty["responseRate"] == 0
    assert empty["averageTimeToResponse"] == 0

    for status in ("applied", "interviewing", "offer", "rejected"):
        _create(client, auth_headers, status=status)
    _create(client, other_headers, status="offer")

    stats = client.get("/api/jobs/stats", headers=auth_headers).json()
    assert stats["total"] == 4
    assert stats["responseRate"] == 0.5
    assert stats["byStatus"]["interviewing"] == 1
    assert stats["byStatus"]["saved"] == 0


def test_timestamps_are_returned_as_utc(client, auth_headers):
    created = _create(client, auth_headers, dateApplied="2026-01-05T10:30:00+01:00")
    assert created["dateApplied"] == "2026-01-05T09:30:00Z"
    assert created["dateAdded"].endswith("Z")

    fetched = client.get(f"/api/jobs/{created['id']}", headers=auth_headers).json()
    assert fetched["dateApplied"] == "2026-01-05T09:30:00Z"
    assert fetched["dateAdded"] == created["dateAdded"]

    user = client.get("/api/auth/me", headers=auth_headers).json()
    assert user["createdAt"].endswith("Z")
