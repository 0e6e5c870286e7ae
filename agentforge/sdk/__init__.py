"""SDK for pulling configuration snapshots from the builder backend."""

from agentforge.sdk.team_loader import TeamLoader, TeamLoaderError

__all__ = [
    "TeamLoader",
    "TeamLoaderError",
]
