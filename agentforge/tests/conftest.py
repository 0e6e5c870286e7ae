"""Shared fixtures: a sample team and flow graph loaded from JSON."""

from pathlib import Path

import pytest

from agentforge.models.flow_graph import FlowData
from agentforge.models.team_config import TeamConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def team() -> TeamConfig:
    return TeamConfig.model_validate_json((FIXTURES_DIR / "sample_team.json").read_text())


@pytest.fixture
def agent(team):
    return team.agents[0]


@pytest.fixture
def flow() -> FlowData:
    return FlowData.model_validate_json((FIXTURES_DIR / "sample_flow.json").read_text())
