"""Tests for the export API routes."""

import io
import json
import zipfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from server.app import app

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def team_payload() -> dict:
    return json.loads((FIXTURES_DIR / "sample_team.json").read_text())


@pytest.fixture
def flow_payload() -> dict:
    return json.loads((FIXTURES_DIR / "sample_flow.json").read_text())


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestAgentExport:
    """Test archive endpoints."""

    def test_node_archive(self, client, team_payload):
        response = client.post("/api/export/node", json={
            "agent": team_payload["agents"][0],
            "tasks": team_payload["tasks"],
        })
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert 'filename="support-bot-runtime.zip"' in response.headers["content-disposition"]
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            assert "src/index.ts" in archive.namelist()
            assert len(archive.namelist()) == 8

    def test_pocketflow_archive(self, client, team_payload, flow_payload):
        response = client.post("/api/export/pocketflow", json={
            "agent": team_payload["agents"][0],
            "flow": flow_payload,
        })
        assert response.status_code == 200
        assert 'filename="support-bot-pocketflow.zip"' in response.headers["content-disposition"]
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            main = archive.read("main.py").decode()
        assert "flow = AsyncFlow(start=node_greet)" in main

    def test_pocketflow_without_flow_uses_fallback(self, client, team_payload):
        response = client.post("/api/export/pocketflow", json={"agent": team_payload["agents"][1]})
        assert response.status_code == 200
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            assert "node_start >> node_end" in archive.read("main.py").decode()

    def test_preview(self, client, team_payload):
        response = client.post("/api/export/node/files", json={"agent": team_payload["agents"][0]})
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "support-bot-runtime"
        assert list(body["files"])[0] == "package.json"

    def test_unknown_target(self, client, team_payload):
        response = client.post("/api/export/rust/files", json={"agent": team_payload["agents"][0]})
        assert response.status_code == 422

    def test_invalid_agent(self, client):
        response = client.post("/api/export/node", json={"agent": {"id": "x"}})
        assert response.status_code == 422

    def test_strict_providers(self, client, team_payload, monkeypatch):
        """Unsupported providers are rejected only when strict mode is on."""
        agent = team_payload["agents"][0]
        agent["llm"]["provider"] = "anthropic"

        response = client.post("/api/export/node", json={"agent": agent})
        assert response.status_code == 200

        monkeypatch.setenv("EXPORT_STRICT_PROVIDERS", "true")
        response = client.post("/api/export/node", json={"agent": agent})
        assert response.status_code == 422
        assert "anthropic" in response.json()["detail"]


class TestTeamExport:

    def test_team_json(self, client, team_payload):
        response = client.post("/api/export/team", json=team_payload)
        assert response.status_code == 200
        assert 'filename="team-team-support.json"' in response.headers["content-disposition"]
        assert response.json()["agents"][0]["slug"] == "support-bot"
