"""
Pytest tests for the AIScan HTTP surface (FastAPI endpoints).

Settings are stored in a temporary JSON file via conftest fixtures.
"""

from __future__ import annotations

IMG_1024 = {"tagName": "IMG", "src": "https://x/img.png", "naturalWidth": 1024, "naturalHeight": 1024}
IMG_2048 = {"tagName": "IMG", "src": "https://x/big.png", "naturalWidth": 2048, "naturalHeight": 2048}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "message": "Detector is loaded"}


def test_analyze_success(client):
    r = client.post("/api/analyze", json={"media": [IMG_1024, IMG_2048]})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["error"] is None
    assert body["data"]["analysisStatus"] == "success"
    assert body["data"]["mediaCount"] == 2
    # default threshold 0.7; both elements score well above it
    assert body["notification"] is not None
    assert body["notification"]["title"] == "AI Content Detector"


def test_analyze_no_media(client):
    r = client.post("/api/analyze", json={"media": []})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is False
    assert body["data"]["analysisStatus"] == "no_media"
    assert body["data"]["errorMessage"]
    assert body["notification"] is None


def test_analyze_no_analyzable(client):
    r = client.post("/api/analyze", json={"media": [{"tagName": "IMG", "src": "https://x/a.png"}]})
    body = r.json()
    assert body["success"] is False
    assert body["data"]["analysisStatus"] == "no_analyzable"
    assert body["data"]["aiProbability"] == 0.0


def test_analyze_min_rendered_size(client):
    icon = dict(IMG_1024, renderedWidth=20, renderedHeight=20)
    r = client.post("/api/analyze", json={"media": [icon]})
    assert r.json()["data"]["analysisStatus"] == "no_media"
    r = client.post("/api/analyze", json={"media": [icon], "minRenderedSize": 10})
    assert r.json()["data"]["analysisStatus"] == "success"


def test_analyze_bad_body(client):
    r = client.post("/api/analyze", json={"media": "nope"})
    assert r.status_code == 422


def test_settings_roundtrip(client, settings_path):
    r = client.get("/api/settings")
    assert r.status_code == 200
    assert r.json() == {"settings": {"autoAnalyze": True, "showNotifications": True, "analysisThreshold": 0.7}}

    r = client.put("/api/settings", json={"analysisThreshold": 0.95, "showNotifications": False})
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "settings": {"autoAnalyze": True, "showNotifications": False, "analysisThreshold": 0.95},
    }
    assert settings_path.is_file()
    assert client.get("/api/settings").json()["settings"]["analysisThreshold"] == 0.95


def test_settings_invalid_threshold(client):
    r = client.put("/api/settings", json={"analysisThreshold": 1.5})
    assert r.status_code == 400
    assert client.get("/api/settings").json()["settings"]["analysisThreshold"] == 0.7


def test_notifications_follow_settings(client):
    client.put("/api/settings", json={"showNotifications": False})
    r = client.post("/api/analyze", json={"media": [IMG_1024]})
    assert r.json()["success"] is True
    assert r.json()["notification"] is None
