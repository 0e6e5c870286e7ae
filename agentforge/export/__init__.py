"""Exporters that turn a configuration snapshot into a runnable project."""

from typing import Iterable

from agentforge.export.archive import ArchiveError, assemble, assemble_async, write_archive
from agentforge.export.node_runtime import UnsupportedProviderError, export_node_runtime
from agentforge.export.pocketflow_runtime import FALLBACK_FLOW, export_pocketflow_runtime
from agentforge.export.pocketflow_template import (
    POCKETFLOW_SOURCE,
    POCKETFLOW_TEMPLATE_VERSION,
)
from agentforge.export.team_json import export_team_json
from agentforge.models.agent_config import AgentConfig
from agentforge.models.export_bundle import ExportBundle, ExportTarget
from agentforge.models.flow_graph import FlowData
from agentforge.models.task_config import TaskConfig


def export_agent(
    agent: AgentConfig,
    tasks: Iterable[TaskConfig] = (),
    target: ExportTarget | str = ExportTarget.node,
    flow: FlowData | None = None,
    strict: bool = False,
) -> ExportBundle:
    """Export ``agent`` to the given target runtime.

    ``flow`` only applies to the pocketflow target and ``strict`` only to
    the node target.
    """
    target = ExportTarget(target)
    if target == ExportTarget.node:
        return export_node_runtime(agent, tasks, strict=strict)
    return export_pocketflow_runtime(agent, tasks, flow)


__all__ = [
    "ArchiveError",
    "ExportBundle",
    "ExportTarget",
    "FALLBACK_FLOW",
    "POCKETFLOW_SOURCE",
    "POCKETFLOW_TEMPLATE_VERSION",
    "UnsupportedProviderError",
    "assemble",
    "assemble_async",
    "export_agent",
    "export_node_runtime",
    "export_pocketflow_runtime",
    "export_team_json",
    "write_archive",
]
