"""Tests for the team loader client."""

import json
from pathlib import Path

import httpx
import pytest

from agentforge.sdk.team_loader import TeamLoader, TeamLoaderError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestTeamLoader:
    """Test fetching teams from the builder backend."""

    def _transport(self, calls: list, status: int = 200, body=None) -> httpx.MockTransport:
        if body is None:
            body = json.loads((FIXTURES_DIR / "sample_team.json").read_text())

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(str(request.url))
            return httpx.Response(status, json=body)

        return httpx.MockTransport(handler)

    def test_get_team(self):
        calls = []
        loader = TeamLoader(base_url="http://builder.test/", transport=self._transport(calls))
        team = loader.get_team("team-support")
        assert team.name == "Support Crew"
        assert calls == ["http://builder.test/api/teams/team-support"]

    def test_caches_by_id(self):
        calls = []
        loader = TeamLoader(base_url="http://builder.test", transport=self._transport(calls))
        loader.get_team("team-support")
        loader.get_team("team-support")
        assert len(calls) == 1

        loader.clear_cache()
        loader.get_team("team-support")
        assert len(calls) == 2

    def test_not_found(self):
        loader = TeamLoader(transport=self._transport([], status=404, body={"detail": "nope"}))
        with pytest.raises(TeamLoaderError) as exc_info:
            loader.get_team("missing")
        assert "Team not found" in str(exc_info.value)

    def test_server_error(self):
        loader = TeamLoader(transport=self._transport([], status=500, body={}))
        with pytest.raises(TeamLoaderError) as exc_info:
            loader.get_team("team-support")
        assert "500" in str(exc_info.value)

    def test_invalid_payload(self):
        loader = TeamLoader(transport=self._transport([], body={"id": "x"}))
        with pytest.raises(TeamLoaderError):
            loader.get_team("x")

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        loader = TeamLoader(transport=httpx.MockTransport(handler))
        with pytest.raises(TeamLoaderError) as exc_info:
            loader.get_team("team-support")
        assert "Failed to connect" in str(exc_info.value)
