import importlib

import pytest
from fastapi.testclient import TestClient

import api.main as api_main
from assistant.models import Explanation

client = TestClient(api_main.app)


def test_health():
    assert client.get("/health").json() == {"ok": True}

def test_convert_postfix():
    r = client.post("/convert", json={"expression": "A + B * C - ( D / E )"})
    assert r.status_code == 200
    data = r.json()
    assert data["ok"] is True
    assert data["mode"] == "POSTFIX"
    assert data["notation"] == "A B C * + D E / -"
    assert data["steps"][0]["title"] == "Start"
    assert len(data["tokens"]) == 11

def test_convert_prefix():
    data = client.post("/convert", json={"expression": "A ^ B ^ C", "mode": "PREFIX"}).json()
    assert data["notation"] == "^ A ^ B C"

def test_convert_mismatched_is_user_input():
    data = client.post("/convert", json={"expression": "( A + B"}).json()
    assert data["ok"] is False
    assert data["error_kind"] == "user_input"
    assert data["missing"] == ")"

def test_convert_rejects_unknown_mode():
    r = client.post("/convert", json={"expression": "A", "mode": "INFIX"})
    assert r.status_code == 422

def test_explain_uses_selected_step(monkeypatch):
    seen = {}

    def fake_explain(expression, title, detail, step_index, mode):
        seen.update(expression=expression, title=title, step_index=step_index, mode=mode)
        return Explanation(ok=True, step_index=step_index, text="because", model="fake")

    monkeypatch.setattr(api_main, "explain_step", fake_explain)
    r = client.post("/explain", json={"expression": "A + B", "step_index": 4})
    data = r.json()
    assert data["ok"] is True
    assert data["step"]["title"] == "Push + to Stack"
    assert data["explanation"]["text"] == "because"
    assert seen == {"expression": "A + B", "title": "Push + to Stack", "step_index": 4, "mode": "POSTFIX"}

def test_explain_failure_does_not_break_response(monkeypatch):
    monkeypatch.setattr(api_main, "explain_step",
                        lambda *a: Explanation(ok=False, step_index=a[3], error="OPENAI_API_KEY not set."))
    data = client.post("/explain", json={"expression": "A", "step_index": 0}).json()
    assert data["ok"] is False
    assert data["step"]["title"] == "Start"
    assert data["explanation"]["error"] == "OPENAI_API_KEY not set."

def test_explain_step_out_of_range():
    r = client.post("/explain", json={"expression": "A", "step_index": 99})
    assert r.status_code == 404

def test_explain_mismatched_is_user_input():
    data = client.post("/explain", json={"expression": "A )", "step_index": 0}).json()
    assert data["error_kind"] == "user_input"
    assert data["missing"] == "("

def test_convert_prefix_mismatch_names_both_parens():
    data = client.post("/convert", json={"expression": "( A + B", "mode": "PREFIX"}).json()
    assert data["ok"] is False
    assert data["missing"] == "("
    assert data["missing_in_expression"] == ")"
    assert data["error"] == "Mismatched parentheses: missing ')'"

def test_postfix_mismatch_needs_no_mapping():
    data = client.post("/convert", json={"expression": "A + B )"}).json()
    assert data["missing"] == data["missing_in_expression"] == "("

def test_bad_default_mode_fails_at_import(monkeypatch):
    monkeypatch.setenv("SYARD_DEFAULT_MODE", "INFIX")
    with pytest.raises(ValueError):
        importlib.reload(api_main)
    monkeypatch.setenv("SYARD_DEFAULT_MODE", "POSTFIX")
    importlib.reload(api_main)
    assert api_main.DEFAULT_MODE == "POSTFIX"
