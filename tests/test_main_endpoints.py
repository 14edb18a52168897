"""Tests for the FastAPI endpoint contracts."""

import json

from fastapi.testclient import TestClient

import app.main as main

PLAN = {
    "title": "Federalism Review",
    "learning_objectives": ["Define the Tenth Amendment", "Compare state vs federal power"],
    "overview": "Key topics include the Tenth Amendment and Commerce Clause.",
    "study_methods": [
        {
            "name": "Elaboration",
            "steps": ["Draw a comparison chart", "Add real-world examples"],
            "rationale": "Connects new facts to prior knowledge.",
        }
    ],
}


def test_health():
    with TestClient(main.app) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_encode_then_decode_round_trips_plan():
    with TestClient(main.app) as client:
        encoded = client.post("/study-plans/encode", json=PLAN)
        description = encoded.json()["description"]
        decoded = client.post(
            "/study-plans/decode",
            json={"description": description, "title": PLAN["title"]},
        )

    assert encoded.status_code == 200
    assert description.startswith("Learning objectives:\n(1) Define the Tenth Amendment")
    assert decoded.status_code == 200
    payload = decoded.json()
    assert payload["plan"] == PLAN
    assert payload["is_study_event"] is True
    assert payload["overview_sentences"] == [PLAN["overview"]]
    assert payload["markdown"].startswith("### Federalism Review")


def test_encode_json_storage_is_decoded_as_json():
    with TestClient(main.app) as client:
        encoded = client.post("/study-plans/encode", params={"storage": "json"}, json=PLAN)
        description = encoded.json()["description"]
        decoded = client.post("/study-plans/decode", json={"description": description, "title": "Federalism Review"})

    assert json.loads(description)["overview"] == PLAN["overview"]
    assert decoded.json()["plan"] == PLAN


def test_decode_plain_description_is_not_a_study_event():
    with TestClient(main.app) as client:
        response = client.post("/study-plans/decode", json={"description": "Chapter 4 test"})

    payload = response.json()
    assert response.status_code == 200
    assert payload["is_study_event"] is False
    assert payload["plan"]["overview"] == "Chapter 4 test"
    assert payload["plan"]["learning_objectives"] == []


def test_decode_rejects_oversized_description(monkeypatch):
    monkeypatch.setattr(main.settings, "max_description_chars", 10)
    with TestClient(main.app) as client:
        response = client.post("/study-plans/decode", json={"description": "x" * 11})

    assert response.status_code == 413
    assert response.json()["detail"] == "Description too large"


def test_suggestion_descriptions_from_structured_payload():
    body = {
        "suggestions": [
            {
                "title": "Cells",
                "description": "Learning objectives:\n(1) Label organelles\n\nCell structure overview.",
                "suggestedDuration": 25,
                "studyMethods": [
                    {
                        "method": "Self-Testing",
                        "application": "1. Cover the labels 2. Name each organelle",
                        "rationale": "Testing reveals gaps.",
                    }
                ],
            }
        ]
    }
    with TestClient(main.app) as client:
        response = client.post("/study-suggestions/descriptions", json=body)

    assert response.status_code == 200
    item = response.json()["items"][0]
    assert item["title"] == "Cells"
    assert item["suggested_duration"] == 25
    assert "• Cover the labels" in item["description"]
    assert item["plan"]["study_methods"][0]["steps"] == ["Cover the labels", "Name each organelle"]


def test_suggestion_descriptions_from_raw_reply():
    raw = 'Sure! {"suggestions": [{"title": "Cells", "description": "Overview only"}]}'
    with TestClient(main.app) as client:
        response = client.post("/study-suggestions/descriptions", json={"raw": raw})

    assert response.status_code == 200
    item = response.json()["items"][0]
    assert item["suggested_duration"] == 30
    assert item["plan"]["overview"] == "Overview only"


def test_suggestion_descriptions_returns_422_on_unparseable_raw():
    with TestClient(main.app) as client:
        response = client.post("/study-suggestions/descriptions", json={"raw": "no json here"})

    assert response.status_code == 422
    assert "Unable to parse generator JSON" in response.json()["detail"]


def test_suggestion_descriptions_requires_a_payload():
    with TestClient(main.app) as client:
        response = client.post("/study-suggestions/descriptions", json={})

    assert response.status_code == 422
    assert response.json()["detail"] == "Provide either 'suggestions' or 'raw'"


def test_material_recommendations_from_study_methods():
    body = {
        "title": "Midterm",
        "study_methods": [{"name": "Retrieval Practice", "steps": ["Recall"], "rationale": ""}],
    }
    with TestClient(main.app) as client:
        response = client.post("/study-materials/recommendations", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["recommended"] == ["flashcards", "quiz"]
    assert len(payload["materials"]) == 5
    assert payload["materials"][0]["reason"] == "Recommended for Retrieval Practice study methods"


def test_material_recommendations_respect_configured_limit(monkeypatch):
    monkeypatch.setattr(main.settings, "recommendation_limit", 1)
    body = {
        "title": "Midterm",
        "study_methods": [{"name": "Retrieval Practice", "steps": ["Recall"]}],
    }
    with TestClient(main.app) as client:
        response = client.post("/study-materials/recommendations", json=body)

    assert response.json()["recommended"] == ["flashcards"]


def test_suggestion_descriptions_accepts_overflowing_duration():
    raw = '{"suggestions": [{"title": "T", "suggestedDuration": 1e400}]}'
    with TestClient(main.app) as client:
        response = client.post("/study-suggestions/descriptions", json={"raw": raw})

    assert response.status_code == 200
    assert response.json()["items"][0]["suggested_duration"] == 30
