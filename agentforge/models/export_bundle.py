"""The file set produced by an exporter."""

from enum import Enum

from pydantic import BaseModel, Field


class ExportTarget(str, Enum):
    """Runtimes an agent can be exported to."""

    node = "node"  # Node/TypeScript HTTP service
    pocketflow = "pocketflow"  # Python flow-graph script


# suffix appended to the agent slug to name the exported project
TARGET_SUFFIXES = {
    ExportTarget.node: "runtime",
    ExportTarget.pocketflow: "pocketflow",
}


class ExportBundle(BaseModel):
    """An exported project: ordered (path, text) pairs for one target.

    ``files`` keeps insertion order; archives and previews follow it.
    """

    target: ExportTarget
    agent_slug: str
    files: dict[str, str] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        """suggested project name, e.g. ``support-bot-runtime``."""
        return f"{self.agent_slug}-{TARGET_SUFFIXES[self.target]}"

    @property
    def archive_filename(self) -> str:
        return f"{self.name}.zip"

    def add(self, path: str, content: str) -> None:
        self.files[path] = content
