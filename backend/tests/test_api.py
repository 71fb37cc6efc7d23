"""Tests for the HTTP API."""

import json

import pytest

from provocations.core import LLMError

LENS_RESPONSE = json.dumps(
    {"lenses": [{"type": "consumer", "title": "Users", "summary": "s", "keyPoints": ["k"]}]}
)
PROVOCATION_RESPONSE = json.dumps(
    {
        "provocations": [
            {"type": "fallacy", "title": "Weak claim", "content": "c", "sourceExcerpt": "e"}
        ]
    }
)
ANALYSIS = json.dumps({"summary": "Changed B", "changes": [], "suggestions": []})


def _create_session(client, mock_generator, text: str = "Line A\nLine B\nLine C") -> dict:
    mock_generator.queue(LENS_RESPONSE, PROVOCATION_RESPONSE)
    response = client.post(
        "/api/analyze",
        json={"text": text, "objective": "Memo", "selected_lenses": ["consumer"]},
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.integration
class TestHealthAndAnalyze:
    def test_health(self, test_client):
        response = test_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["models"]["generation_model"] == "mock-model"

    def test_analyze(self, test_client, mock_generator):
        data = _create_session(test_client, mock_generator)

        assert data["lenses"][0]["title"] == "Users"
        assert data["lenses"][0]["key_points"] == ["k"]
        assert data["provocations"][0]["type"] == "fallacy"
        assert data["provocations"][0]["status"] == "pending"
        assert data["warnings"] == []

    def test_analyze_rejects_unknown_fields(self, test_client):
        response = test_client.post("/api/analyze", json={"text": "x", "bogus": 1})

        assert response.status_code == 422


@pytest.mark.integration
class TestWriteEndpoints:
    def test_write(self, test_client, mock_generator):
        mock_generator.queue("Evolved doc", ANALYSIS)

        response = test_client.post(
            "/api/write",
            json={"document": "Doc", "objective": "Memo", "instruction": "please expand this"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["document"] == "Evolved doc"
        assert data["instruction_type"] == "expand"
        assert data["summary"] == "Changed B"
        assert data["version"] is None

    def test_write_blank_instruction(self, test_client, mock_generator):
        response = test_client.post(
            "/api/write",
            json={"document": "Doc", "objective": "Memo", "instruction": "   "},
        )

        assert response.status_code == 422
        assert mock_generator.calls == []

    def test_write_unknown_session(self, test_client):
        response = test_client.post(
            "/api/write",
            json={
                "document": "Doc",
                "objective": "Memo",
                "instruction": "go",
                "session_id": "missing",
            },
        )

        assert response.status_code == 404

    def test_write_evolution_failure(self, test_client, mock_generator):
        mock_generator.queue(LLMError("connection refused", "mock-model"))

        response = test_client.post(
            "/api/write",
            json={"document": "Doc", "objective": "Memo", "instruction": "go"},
        )

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["error"] == "Failed to evolve document"
        assert detail["details"]["error"] == "connection refused"

    def test_write_stream(self, test_client, mock_generator):
        mock_generator.stream_chunks = ["Hello ", "world"]

        response = test_client.post(
            "/api/write/stream",
            json={"document": "Doc", "objective": "Memo", "instruction": "fix the typo"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        events = [
            json.loads(line[len("data: "):])
            for line in response.text.split("\n\n")
            if line.startswith("data: ")
        ]
        assert [e["type"] for e in events] == ["meta", "content", "content", "done"]
        assert events[0]["instruction_type"] == "correct"
        assert events[-1]["summary"] == "Applied: fix the typo"

    def test_write_stream_unknown_session(self, test_client):
        response = test_client.post(
            "/api/write/stream",
            json={
                "document": "Doc",
                "objective": "Memo",
                "instruction": "go",
                "session_id": "missing",
            },
        )

        assert response.status_code == 404

    def test_expand_and_refine(self, test_client, mock_generator):
        mock_generator.queue("Drafted section", "Refined text")

        expand = test_client.post("/api/expand", json={"heading": "Market"})
        refine = test_client.post(
            "/api/refine", json={"text": "Some text", "tone": "practical", "target_length": "same"}
        )

        assert expand.json() == {"content": "Drafted section"}
        assert refine.json() == {"refined": "Refined text"}

    def test_refine_llm_unavailable(self, test_client, mock_generator):
        mock_generator.queue(LLMError("down", "mock-model"))

        response = test_client.post("/api/refine", json={"text": "Some text"})

        assert response.status_code == 503


@pytest.mark.integration
class TestSessionEndpoints:
    def test_session_round_trip(self, test_client, mock_generator):
        created = _create_session(test_client, mock_generator)
        sid = created["session_id"]

        listing = test_client.get("/api/sessions").json()
        assert [s["session_id"] for s in listing] == [sid]
        assert listing[0]["title"] == "Memo"

        session = test_client.get(f"/api/sessions/{sid}").json()
        assert session["document"] == "Line A\nLine B\nLine C"
        assert session["version_count"] == 1

        assert test_client.delete(f"/api/sessions/{sid}").status_code == 200
        assert test_client.get(f"/api/sessions/{sid}").status_code == 404

    def test_diff_unavailable_then_available(self, test_client, mock_generator):
        sid = _create_session(test_client, mock_generator)["session_id"]

        before = test_client.get(f"/api/sessions/{sid}/diff").json()
        assert before["available"] is False
        assert before["lines"] == []

        mock_generator.queue("Line A\nLine B2\nLine C", ANALYSIS)
        write = test_client.post(
            "/api/write",
            json={
                "document": "Line A\nLine B\nLine C",
                "objective": "Memo",
                "instruction": "fix line B",
                "session_id": sid,
            },
        )
        assert write.json()["version"]["description"] == "Changed B"

        after = test_client.get(f"/api/sessions/{sid}/diff").json()
        assert after["available"] is True
        assert [(line["type"], line["content"]) for line in after["lines"]] == [
            ("unchanged", "Line A"),
            ("removed", "Line B"),
            ("added", "Line B2"),
            ("unchanged", "Line C"),
        ]
        assert (after["added_count"], after["removed_count"]) == (1, 1)

        versions = test_client.get(f"/api/sessions/{sid}/versions").json()["versions"]
        assert [v["description"] for v in versions] == ["Original document", "Changed B"]

    def test_diff_unknown_version(self, test_client, mock_generator):
        sid = _create_session(test_client, mock_generator)["session_id"]
        mock_generator.queue("New", ANALYSIS)
        test_client.post(
            "/api/write",
            json={"document": "Old", "objective": "Memo", "instruction": "go", "session_id": sid},
        )

        response = test_client.get(f"/api/sessions/{sid}/diff", params={"from_version": "nope"})

        assert response.status_code == 404

    def test_active_lens_and_provocation_status(self, test_client, mock_generator):
        created = _create_session(test_client, mock_generator)
        sid = created["session_id"]
        pid = created["provocations"][0]["id"]

        lens = test_client.put(f"/api/sessions/{sid}/active-lens", json={"lens": "consumer"})
        assert lens.json()["active_lens"] == "consumer"
        assert lens.json()["lenses"][0]["is_active"] is True

        status = test_client.patch(
            f"/api/sessions/{sid}/provocations/{pid}", json={"status": "rejected"}
        )
        assert status.json()["status"] == "rejected"

        missing = test_client.patch(
            f"/api/sessions/{sid}/provocations/nope", json={"status": "rejected"}
        )
        assert missing.status_code == 404

    def test_references(self, test_client, mock_generator):
        sid = _create_session(test_client, mock_generator)["session_id"]

        response = test_client.post(
            f"/api/sessions/{sid}/references",
            json={"name": "Guide", "content": "Be brief.", "type": "style"},
        )

        assert response.status_code == 200
        session = test_client.get(f"/api/sessions/{sid}").json()
        assert session["reference_documents"][0]["name"] == "Guide"

    def test_outline_crud(self, test_client, mock_generator):
        sid = _create_session(test_client, mock_generator)["session_id"]

        first = test_client.post(f"/api/sessions/{sid}/outline", json={"heading": "Intro"}).json()
        second = test_client.post(f"/api/sessions/{sid}/outline", json={"heading": "Body"}).json()

        updated = test_client.patch(
            f"/api/sessions/{sid}/outline/{first['id']}",
            json={"content": "Opening", "is_expanded": True},
        ).json()
        assert updated["content"] == "Opening"

        order = test_client.put(
            f"/api/sessions/{sid}/outline/order",
            json={"item_ids": [second["id"], first["id"]]},
        ).json()
        assert [i["heading"] for i in order["items"]] == ["Body", "Intro"]

        bad_order = test_client.put(
            f"/api/sessions/{sid}/outline/order", json={"item_ids": [first["id"]]}
        )
        assert bad_order.status_code == 400

        assert test_client.delete(f"/api/sessions/{sid}/outline/{first['id']}").status_code == 200
        assert test_client.delete(f"/api/sessions/{sid}/outline/{first['id']}").status_code == 404
