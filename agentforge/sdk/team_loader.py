"""Team loader for fetching team configurations from the builder backend.

so an export can be produced from whatever the UI last saved
team = loader.get_team("team-123")
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from agentforge.models.team_config import TeamConfig


class TeamLoaderError(Exception):
    """Exception raised when team loading fails."""
    pass


class TeamLoader:
    """Load team configurations from the persistence backend.

    Responses are cached per team id; call ``clear_cache()`` to pick up
    edits made after the first fetch.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the builder backend
            timeout: HTTP request timeout in seconds
            transport: optional httpx transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._cache: dict[str, TeamConfig] = {}

    def get_team(self, team_id: str) -> TeamConfig:
        """Fetch a team snapshot by id.

        Raises:
            TeamLoaderError: if the team does not exist, the server cannot be
                reached, or the payload is not a valid team.
        """
        if team_id in self._cache:
            return self._cache[team_id]

        url = f"{self.base_url}/api/teams/{team_id}"

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url)

                if response.status_code == 404:
                    raise TeamLoaderError(f"Team not found: {team_id}")

                response.raise_for_status()
                team = TeamConfig.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            raise TeamLoaderError(
                f"Server returned {e.response.status_code} for team {team_id}"
            ) from e
        except httpx.RequestError as e:
            raise TeamLoaderError(
                f"Failed to connect to server at {self.base_url}: {e}"
            ) from e
        except (ValueError, ValidationError) as e:
            raise TeamLoaderError(f"Invalid team payload for {team_id}: {e}") from e

        self._cache[team_id] = team
        return team

    def clear_cache(self) -> None:
        """Clear the team cache."""
        self._cache.clear()
