"""Export a whole team as the JSON document the builder UI can re-import."""

import json

from agentforge.models.team_config import TeamConfig


def team_json_filename(team: TeamConfig) -> str:
    return f"team-{team.id}.json"


def export_team_json(team: TeamConfig) -> tuple[str, str]:
    """Return ``(filename, text)`` for a pretty-printed camelCase team document."""
    text = json.dumps(team.to_wire(), indent=2, ensure_ascii=False)
    return team_json_filename(team), text
