"""Agent Forge - export agent configurations as standalone runnable projects."""

from agentforge.export import (
    ArchiveError,
    UnsupportedProviderError,
    assemble,
    export_agent,
    export_node_runtime,
    export_pocketflow_runtime,
    export_team_json,
    write_archive,
)
from agentforge.models import (
    AgentConfig,
    ExportBundle,
    ExportTarget,
    FlowData,
    TaskConfig,
    TeamConfig,
)
from agentforge.sdk import TeamLoader

__all__ = [
    # Configuration
    "AgentConfig",
    "TaskConfig",
    "TeamConfig",
    "FlowData",
    # Export
    "ExportBundle",
    "ExportTarget",
    "export_agent",
    "export_node_runtime",
    "export_pocketflow_runtime",
    "export_team_json",
    # Archives
    "ArchiveError",
    "UnsupportedProviderError",
    "assemble",
    "write_archive",
    # High-level APIs
    "TeamLoader",
]
