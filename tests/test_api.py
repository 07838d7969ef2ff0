from pathlib import Path

from fastapi.testclient import TestClient

from api.main import create_app
from config import Settings

LOCALE_DIR = Path(__file__).resolve().parent.parent / "locales"


def _client():
    settings = Settings(locale_dir=str(LOCALE_DIR), default_locale="en", messages={})
    return TestClient(create_app(settings))


def test_health_lists_loaded_locales():
    with _client() as client:
        resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert {"en", "pl", "de"} <= set(body["locales"])


def test_validate_reports_field_errors():
    payload = {
        "schema": {
            "email": {"required": True, "email": True},
            "password": {"required": True, "strongPassword": True},
            "confirm": {"equalTo": "password", "passwordLabel": "Hasło"},
        },
        "values": {"email": "ala@example.com", "password": "Abcdef1!", "confirm": "Abcdef1?"},
        "locale": "pl",
    }
    with _client() as client:
        resp = client.post("/validate", json=payload)

    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is False
    assert body["locale"] == "pl"
    assert list(body["errors"]) == ["confirm"]
    assert body["errors"]["confirm"][0] == {
        "rule": "equalTo",
        "message": 'Wartość musi być zgodna z polem "Hasło".',
    }


def test_validate_files_and_request_overrides():
    payload = {
        "schema": {"cv": {"required": True, "fileType": "pdf"}},
        "files": {"cv": [{"name": "cv.docx", "size": 100, "content_type": "application/msword"}]},
        "messages": {"fileType": "Only {types} please."},
        "mode": "sync",
    }
    with _client() as client:
        resp = client.post("/validate", json=payload)
    assert resp.status_code == 200
    assert resp.json()["errors"]["cv"][0]["message"] == "Only pdf please."


def test_validate_unknown_locale_is_configuration_error():
    payload = {"schema": {"a": {"required": True}}, "values": {}, "locale": "xx"}
    with _client() as client:
        resp = client.post("/validate", json=payload)
    assert resp.status_code == 400
    assert "xx" in resp.json()["detail"]


def test_validate_invalid_pattern_is_configuration_error():
    payload = {"schema": {"a": {"pattern": "(["}}, "values": {"a": "x"}}
    with _client() as client:
        resp = client.post("/validate", json=payload)
    assert resp.status_code == 400


def test_register_and_read_locale():
    with _client() as client:
        resp = client.put("/locales/fr", json={"messages": {"required": "Obligatoire."}})
        assert resp.status_code == 200
        assert resp.json()["messages"]["email"] == "Please enter a valid email address."

        assert "fr" in client.get("/locales").json()
        assert client.get("/locales/fr").json()["messages"]["required"] == "Obligatoire."
        assert client.get("/locales/zz").status_code == 404


def test_list_rules():
    with _client() as client:
        rules = client.get("/rules").json()["rules"]
    assert "creditCard" in rules
    assert len(rules) == 28


def test_validate_huge_hex_number_returns_verdict():
    payload = {
        "schema": {"n": {"numeric": True, "integer": True}},
        "values": {"n": "0x" + "f" * 300},
    }
    with _client() as client:
        resp = client.post("/validate", json=payload)

    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is False
    assert [e["rule"] for e in body["errors"]["n"]] == ["integer"]
