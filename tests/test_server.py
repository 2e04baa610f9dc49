from fastapi.testclient import TestClient

from server.app import app

client = TestClient(app)


def test_segment_endpoint():
    resp = client.post("/api/segment", json={"text": "東京-Tokyo"})
    assert resp.status_code == 200
    assert resp.json()["tokens"] == [
        {"script": "kana_kanji", "text": "東京", "prefix": ""},
        {"script": "latin", "text": "-Tokyo", "prefix": ""},
    ]


def test_format_endpoint_with_mock_provider():
    resp = client.post("/api/format", json={"text": "Song ヴァンパイア", "provider": "mock", "particles": []})
    assert resp.status_code == 200
    assert resp.json()["result"] == "Song [Mock] ヴァンパイア"


def test_format_endpoint_ignores_invalid_substitution():
    resp = client.post("/api/format", json={
        "text": "雪", "provider": "mock", "substitutions": [["(", "x"], ["Mock", "Fake"]],
    })
    assert resp.status_code == 200
    assert resp.json()["result"] == "[Fake] 雪"


def test_format_endpoint_maps_backend_failure_to_502(monkeypatch):
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.delenv("LLM_BASE_URL", raising=False)
    resp = client.post("/api/format", json={"text": "雪", "provider": "deepseek", "base_url": None})
    assert resp.status_code == 502


def test_protect_and_restore_endpoints():
    resp = client.post("/api/protect", json={"text": "Song01"})
    assert resp.json() == {"mapped_text": "``````", "recovery": ["S", "o", "n", "g", "0", "1"]}

    resp = client.post("/api/restore", json=resp.json())
    assert resp.json() == {"text": "Song01"}


def test_protect_rejects_long_placeholder():
    resp = client.post("/api/protect", json={"text": "abc", "placeholder": "##"})
    assert resp.status_code == 422
