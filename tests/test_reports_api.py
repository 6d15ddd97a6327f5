"""HTTP tests for report and contact submission plus admin triage."""

from lyrics_api.api.dependencies import get_challenge_verifier
from lyrics_api.services.challenge import ChallengeServiceError

REPORT = {
    "name": "Reader",
    "email": "reader@example.com",
    "message": "Verse 2 has a typo",
    "turnstile_token": "token-123",
}

CONTACT = {
    "name": "Visitor",
    "email": "visitor@example.com",
    "message": "Please add more hymns",
    "turnstile_token": "token-456",
}


def test_report_with_known_song_snapshots_live_data(client, verifier, create_artist, create_song):
    artist = create_artist("Mara Artist")
    song = create_song("Mara Hlasak", artist_id=artist["id"])

    response = client.post(
        "/api/report",
        json={**REPORT, "song_slug": "mara-hlasak", "song_title": "Stale Title", "song_artist": "Stale"},
        headers={"CF-Connecting-IP": "203.0.113.9"},
    )

    assert response.status_code == 201
    assert response.json() == {"success": True, "id": 1}
    assert response.headers["cache-control"] == "no-store"
    assert verifier.calls == [("token-123", "203.0.113.9")]

    report = client.get("/api/admin/report/1").json()
    assert report["song_id"] == song["id"]
    assert report["song_title"] == "Mara Hlasak"
    assert report["song_artist"] == "Mara Artist"
    assert report["status"] == "pending"
    assert report["reporter_email"] == "reader@example.com"


def test_report_for_unknown_song_keeps_client_snapshot(client):
    client.post("/api/report", json={**REPORT, "song_slug": "deleted-song", "song_title": "Old Title"})

    report = client.get("/api/admin/report/1").json()

    assert report["song_id"] is None
    assert report["song_slug"] == "deleted-song"
    assert report["song_title"] == "Old Title"


def test_report_requires_token(client):
    payload = {key: value for key, value in REPORT.items() if key != "turnstile_token"}

    response = client.post("/api/report", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Bot verification token is required"}


def test_report_rejects_bad_email(client, verifier):
    response = client.post("/api/report", json={**REPORT, "email": "not-an-email"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email address"}
    assert verifier.calls == []


def test_failed_challenge_is_403(client, verifier):
    verifier.result = False

    response = client.post("/api/report", json=REPORT)

    assert response.status_code == 403
    assert response.json() == {"error": "Bot verification failed"}
    assert client.get("/api/admin/reports").json()["total"] == 0


def test_unreachable_challenge_service_is_502(client, verifier):
    verifier.error = ChallengeServiceError("down")

    response = client.post("/api/contact", json=CONTACT)

    assert response.status_code == 502
    assert response.json() == {"error": "Verification service unavailable"}


def test_unconfigured_challenge_is_500(app, client):
    app.dependency_overrides[get_challenge_verifier] = lambda: None

    response = client.post("/api/report", json=REPORT)

    assert response.status_code == 500
    assert response.json() == {"error": "Bot verification is not configured"}


def test_report_status_triage(client):
    client.post("/api/report", json=REPORT)
    client.post("/api/report", json=REPORT)

    invalid = client.put("/api/admin/report/1", json={"status": "archived"})
    assert invalid.status_code == 400
    assert invalid.json() == {
        "error": "Invalid status. Allowed: pending, reviewed, resolved, dismissed"
    }

    assert client.put("/api/admin/report/1", json={"status": "Resolved"}).status_code == 200
    assert client.put("/api/admin/report/99", json={"status": "resolved"}).status_code == 404
    assert client.put("/api/admin/report/1", json={}).json() == {"error": "Missing required field(s): status"}

    resolved = client.get("/api/admin/reports", params={"status": "resolved"}).json()
    assert [report["id"] for report in resolved["reports"]] == [1]
    assert resolved["reports"][0]["status"] == "resolved"

    everything = client.get("/api/admin/reports").json()
    assert everything["total"] == 2

    bad_filter = client.get("/api/admin/reports", params={"status": "bogus"})
    assert bad_filter.status_code == 400

    assert client.delete("/api/admin/report/2").json() == {"success": True}
    assert client.delete("/api/admin/report/2").status_code == 404


def test_contact_submission_defaults_subject(client, verifier):
    response = client.post("/api/contact", json=CONTACT)

    assert response.status_code == 201
    assert response.json() == {"success": True, "id": 1}
    assert verifier.calls == [("token-456", "unknown")]

    message = client.get("/api/admin/contact/1").json()
    assert message["subject"] == "General"
    assert message["message"] == "Please add more hymns"


def test_contact_admin_listing_and_delete(client):
    client.post("/api/contact", json={**CONTACT, "subject": "Corrections"})

    listing = client.get("/api/admin/contacts").json()
    assert listing["total"] == 1
    assert listing["contacts"][0]["subject"] == "Corrections"

    assert client.delete("/api/admin/contact/1").json() == {"success": True}
    assert client.get("/api/admin/contact/1").status_code == 404
