"""Tests for the study planner CLI client."""

import json

import app.cli.plan_cli as plan_cli


class _DummyResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.text = json.dumps(payload)

    def json(self):
        return self._payload


def _capture_post(monkeypatch, response):
    calls = []

    def _post(url, json=None, params=None, timeout=None):
        calls.append({"url": url, "json": json, "params": params, "timeout": timeout})
        return response

    monkeypatch.setattr(plan_cli.requests, "post", _post)
    return calls


def test_decode_posts_description_and_prints_markdown(monkeypatch, tmp_path, capsys):
    description_file = tmp_path / "event.txt"
    description_file.write_text("Learning objectives:\n(1) A\n\nO", encoding="utf-8")
    calls = _capture_post(monkeypatch, _DummyResponse(200, {"markdown": "### Biology"}))

    code = plan_cli.main(
        ["--url", "http://api.test/", "--markdown", "decode", str(description_file), "--title", "Biology"]
    )

    assert code == 0
    assert calls[0]["url"] == "http://api.test/study-plans/decode"
    assert calls[0]["json"] == {"description": "Learning objectives:\n(1) A\n\nO", "title": "Biology"}
    assert capsys.readouterr().out.strip() == "### Biology"


def test_encode_sends_storage_param(monkeypatch, tmp_path, capsys):
    plan_file = tmp_path / "plan.json"
    plan_file.write_text(json.dumps({"overview": "O"}), encoding="utf-8")
    calls = _capture_post(monkeypatch, _DummyResponse(200, {"description": "Learning objectives:\n\nO"}))

    code = plan_cli.main(["--raw-text", "encode", str(plan_file), "--storage", "json"])

    assert code == 0
    assert calls[0]["params"] == {"storage": "json"}
    assert calls[0]["json"] == {"overview": "O"}
    assert capsys.readouterr().out == "Learning objectives:\n\nO\n"


def test_recommend_reports_http_errors(monkeypatch, capsys):
    _capture_post(monkeypatch, _DummyResponse(422, {"detail": "bad"}))

    code = plan_cli.main(["recommend", "--title", "Midterm", "--subject", "History"])

    assert code == 1
    assert "Error 422" in capsys.readouterr().err


def test_decode_reports_missing_file(monkeypatch, tmp_path, capsys):
    calls = _capture_post(monkeypatch, _DummyResponse(200, {}))

    code = plan_cli.main(["decode", str(tmp_path / "missing.txt")])

    assert code == 1
    assert calls == []
    assert "Cannot read input" in capsys.readouterr().err


def test_encode_reports_malformed_json(monkeypatch, tmp_path, capsys):
    plan_file = tmp_path / "plan.json"
    plan_file.write_text("{not json", encoding="utf-8")
    calls = _capture_post(monkeypatch, _DummyResponse(200, {}))

    code = plan_cli.main(["encode", str(plan_file)])

    assert code == 1
    assert calls == []
    assert "Invalid JSON input" in capsys.readouterr().err
